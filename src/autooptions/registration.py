"""
Registering derived options with a command.

A command is anything implementing :class:`OptionRegistrar`. Ordinary and
global options are derived identically; they only differ in which method of
the registrar receives them.
"""

import logging
from typing import Callable, Optional, Protocol

from .descriptors import OptionDescriptor, derive_options
from .errors import InvalidArgumentError
from .naming import (
    ConventionLike,
    OptionNamer,
    OptionNamingConvention,
    OptionPrefix,
    PrefixLike,
    default_option_namer,
)

logger = logging.getLogger(__name__)


class OptionRegistrar(Protocol):
    """A command accepting option descriptors."""

    def add_option(self, descriptor: OptionDescriptor) -> None: ...

    def add_global_option(self, descriptor: OptionDescriptor) -> None: ...


def add_options(
    target: OptionRegistrar,
    options_type: type,
    prefix: PrefixLike = OptionPrefix.TWO_HYPHENS,
    convention: ConventionLike = OptionNamingConvention.KEBAB_CASE,
    *,
    option_namer: Optional[OptionNamer] = None,
) -> list[OptionDescriptor]:
    """
    Add an option to ``target`` for every eligible field of ``options_type``.

    Args:
        target: The command receiving the options.
        options_type: The options dataclass.
        prefix: Prefix of the canonical names.
        convention: Naming convention of the canonical names.
        option_namer: Replaces prefix and convention entirely when given.

    Returns:
        list[OptionDescriptor]: The registered descriptors.
    """
    if target is None:
        raise InvalidArgumentError("target")
    return _register(
        options_type,
        _namer(option_namer, prefix, convention),
        target.add_option,
    )


def add_global_options(
    target: OptionRegistrar,
    options_type: type,
    prefix: PrefixLike = OptionPrefix.TWO_HYPHENS,
    convention: ConventionLike = OptionNamingConvention.KEBAB_CASE,
    *,
    option_namer: Optional[OptionNamer] = None,
) -> list[OptionDescriptor]:
    """Like :func:`add_options`, registering global options instead."""
    if target is None:
        raise InvalidArgumentError("target")
    return _register(
        options_type,
        _namer(option_namer, prefix, convention),
        target.add_global_option,
    )


def _namer(
    option_namer: Optional[OptionNamer],
    prefix: PrefixLike,
    convention: ConventionLike,
) -> OptionNamer:
    if option_namer is not None:
        return option_namer
    return default_option_namer(prefix, convention)


def _register(
    options_type: type,
    option_namer: OptionNamer,
    register: Callable[[OptionDescriptor], None],
) -> list[OptionDescriptor]:
    # Derive everything first: a misconfigured field must not leave the
    # target with only some of the options.
    descriptors = derive_options(options_type, option_namer).to_list()
    for descriptor in descriptors:
        logger.debug("Registering option %s", descriptor.name)
        register(descriptor)
    return descriptors
