#!/usr/bin/env python3
"""
Tests for registering derived options with a command.
"""

from dataclasses import dataclass

import pytest

from autooptions import (
    InvalidArgumentError,
    InvalidOptionsTypeError,
    NoAliasesConfiguredError,
    OptionNamingConvention,
    OptionPrefix,
    add_global_options,
    add_options,
    option,
)


class RecordingCommand:
    """A registrar remembering which options it received."""

    def __init__(self):
        self.options = []
        self.global_options = []

    def add_option(self, descriptor):
        self.options.append(descriptor)

    def add_global_option(self, descriptor):
        self.global_options.append(descriptor)


@dataclass
class CopyOptions:
    """Options of a copy command."""

    SourcePath: str = option("-s", help="File to copy", default="in.txt")
    TargetPath: str = option("-t", help="Destination", default="out.txt")


@dataclass
class BrokenOptions:
    """Options whose second field cannot be named."""

    first: int = 1
    second: int = 2


def test_add_options_registers_ordinary_options():
    command = RecordingCommand()
    add_options(command, CopyOptions)

    assert [d.name for d in command.options] == ["--source-path", "--target-path"]
    assert command.global_options == []


def test_add_global_options_registers_global_options():
    command = RecordingCommand()
    add_global_options(command, CopyOptions)

    assert [d.name for d in command.global_options] == [
        "--source-path",
        "--target-path",
    ]
    assert command.options == []


def test_ordinary_and_global_derivation_are_identical():
    ordinary = RecordingCommand()
    global_ = RecordingCommand()
    add_options(ordinary, CopyOptions)
    add_global_options(global_, CopyOptions)

    assert ordinary.options == global_.global_options


def test_prefix_and_convention():
    command = RecordingCommand()
    add_options(
        command,
        CopyOptions,
        OptionPrefix.FORWARD_SLASH,
        OptionNamingConvention.LOWER_CASE,
    )

    assert [d.aliases for d in command.options] == [
        ("/sourcepath", "-s"),
        ("/targetpath", "-t"),
    ]


def test_option_namer_overrides_prefix_and_convention():
    command = RecordingCommand()
    add_options(
        command,
        CopyOptions,
        OptionPrefix.FORWARD_SLASH,
        option_namer=lambda f: "--" + f.name.lower(),
    )

    assert [d.name for d in command.options] == ["--sourcepath", "--targetpath"]


def test_returns_registered_descriptors():
    command = RecordingCommand()
    descriptors = add_options(command, CopyOptions)
    assert descriptors == command.options


def test_nothing_is_registered_when_a_field_fails():
    command = RecordingCommand()
    with pytest.raises(NoAliasesConfiguredError):
        add_options(
            command,
            BrokenOptions,
            option_namer=lambda f: "" if f.name == "second" else "--first",
        )
    assert command.options == []


@pytest.mark.parametrize("register", [add_options, add_global_options])
def test_missing_target(register):
    with pytest.raises(InvalidArgumentError, match="target"):
        register(None, CopyOptions)


@pytest.mark.parametrize("register", [add_options, add_global_options])
def test_missing_options_type(register):
    with pytest.raises(InvalidArgumentError, match="options_type"):
        register(RecordingCommand(), None)


@pytest.mark.parametrize("register", [add_options, add_global_options])
def test_invalid_options_type(register):
    command = RecordingCommand()
    with pytest.raises(InvalidOptionsTypeError):
        register(command, str)
    assert command.options == [] and command.global_options == []
