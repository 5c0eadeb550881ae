"""
argparse binding for derived options.

:class:`OptionsArgParser` wraps an ``argparse.ArgumentParser`` and registers
one argument per derived option. Global options are added to the parser and
to every one of its subcommands. Parsing itself is left to argparse; the
parsed values are then bound back into the options dataclasses.

Example:
    @dataclass
    class GlobalOptions:
        verbose: bool = option("-v", help="Verbose output", default=False)

    @dataclass
    class BuildOptions:
        max_retry_count: int = option(help="Retries", default=3)

    parser = OptionsArgParser(prog="tool")
    parser.add_global_options(GlobalOptions)
    parser.add_subcommand("build", BuildOptions)

    result = parser.parse(["-v", "build", "--max-retry-count", "5"])
    result["BuildOptions"].max_retry_count  # 5
"""

import argparse
import contextlib
import dataclasses
import enum
import io
import logging
import pathlib
import typing
from typing import Any, Callable, Literal, Mapping, Optional, Sequence

from result import Err, Ok, Result

from . import registration
from .annotations import MISSING
from .descriptors import OptionDescriptor, ValueKind, value_kind_for
from .naming import (
    ConventionLike,
    OptionNamer,
    OptionNamingConvention,
    OptionPrefix,
    PrefixLike,
    option_prefix_string,
)

logger = logging.getLogger(__name__)


def _strict_bool(value: str) -> bool:
    """
    Parse a string to a boolean value strictly.

    Only accepts 'True', 'true', 'False', 'false', '1', '0' as valid values.
    Raises argparse.ArgumentTypeError for any other string.
    """
    if value in ("True", "true", "1"):
        return True
    elif value in ("False", "false", "0"):
        return False
    else:
        raise argparse.ArgumentTypeError(
            f"Invalid boolean value: '{value}'. Must be one of: True, true, False, false, 1, 0"
        )


def _enum_type_factory(enum_type: type[enum.Enum]) -> Callable[[str], enum.Enum]:
    """Return a function parsing an enum member from its name or its value."""

    def parse_enum(s):
        if s in enum_type.__members__:
            return enum_type[s]
        for member in enum_type:
            if str(member.value) == s:
                return member
        names = ", ".join(enum_type.__members__)
        raise argparse.ArgumentTypeError(
            f"Invalid choice: '{s}'. Must be one of: {names}"
        )

    parse_enum.__name__ = enum_type.__name__
    return parse_enum


def _literal_type_factory(choices: Sequence[Any]) -> Callable[[str], Any]:
    """Return a function mapping the string form of a Literal choice to the choice."""
    by_string = {str(choice): choice for choice in choices}

    def parse_literal(s):
        if s in by_string:
            return by_string[s]
        raise argparse.ArgumentTypeError(
            f"Invalid choice: '{s}'. Must be one of: {', '.join(by_string)}"
        )

    return parse_literal


def _scalar_type(kind: ValueKind, value_type: Any) -> Callable[[str], Any]:
    if kind is ValueKind.BOOLEAN:
        return _strict_bool
    if kind is ValueKind.ENUM:
        if typing.get_origin(value_type) is Literal:
            return _literal_type_factory(typing.get_args(value_type))
        return _enum_type_factory(value_type)
    if kind is ValueKind.PATH:
        return value_type if isinstance(value_type, type) else pathlib.Path
    return {
        ValueKind.STRING: str,
        ValueKind.INTEGER: int,
        ValueKind.FLOAT: float,
    }[kind]


def _list_type_factory(element_type: Any) -> Callable[[str], list]:
    """
    Return a function that parses a string into a list of the correct type.

    Items are comma separated; surrounding brackets are optional.
    """
    element_info = value_kind_for(element_type)
    if element_info is None:
        raise TypeError(f"Unsupported list element type: {element_type!r}")
    convert = _scalar_type(element_info.kind, element_type)

    def parse_list(s):
        if s.startswith("[") and s.endswith("]"):
            s = s[1:-1]
        items = [item.strip() for item in s.split(",") if item.strip()]
        result = []
        for item in items:
            try:
                value = convert(item)
            except (ValueError, argparse.ArgumentTypeError):
                raise argparse.ArgumentTypeError(
                    f"Could not convert '{item}' to {getattr(element_type, '__name__', element_type)}"
                )
            result.append(value)
        return result

    return parse_list


def _metavar(descriptor: OptionDescriptor) -> Optional[str]:
    """Get the metavar shown in help for a descriptor."""
    kind = descriptor.kind
    if kind is ValueKind.ENUM:
        return "{" + ",".join(_choice_names(descriptor.choices or ())) + "}"
    if kind is ValueKind.PATH:
        return {"file": "FILE", "directory": "DIR"}.get(descriptor.path_kind, "PATH")
    return {
        ValueKind.STRING: "STRING",
        ValueKind.INTEGER: "INT",
        ValueKind.FLOAT: "FLOAT",
        ValueKind.BOOLEAN: "BOOL",
        ValueKind.LIST: "LIST",
    }[kind]


def _choice_names(choices: Sequence[Any]) -> list[str]:
    return [c.name if isinstance(c, enum.Enum) else str(c) for c in choices]


def _format_description(description: Optional[str], default_value: Any) -> str:
    """Append default value info to the option description."""
    description = description or ""
    if default_value is MISSING or default_value is None:
        return description
    if isinstance(default_value, enum.Enum):
        default_value = default_value.name
    default_suffix = f"(default: {default_value})".replace("%", "%%")
    return f"{description} {default_suffix}" if description else default_suffix


def argument_kwargs(
    descriptor: OptionDescriptor, inherited: bool = False
) -> dict[str, Any]:
    """
    Build the ``add_argument`` keyword arguments for a descriptor.

    Options without a default are left out of the namespace when not given.
    An inherited (global) option on a subcommand never sets a default, so it
    does not overwrite the value parsed by the parent command.
    """
    kwargs: dict[str, Any] = {
        "dest": descriptor.dest,
        "metavar": _metavar(descriptor),
        "help": _format_description(descriptor.description, descriptor.default),
    }

    if descriptor.kind is ValueKind.LIST:
        kwargs["type"] = _list_type_factory(descriptor.element_type)
    else:
        # Optional[T] is converted as T.
        info = value_kind_for(descriptor.value_type)
        value_type = info.value_type if info is not None else descriptor.value_type
        kwargs["type"] = _scalar_type(descriptor.kind, value_type)

    if inherited or not descriptor.has_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = descriptor.get_default_value()
    return kwargs


def bind_options(
    options_type: type,
    values: Mapping[str, Any],
    descriptors: Sequence[OptionDescriptor],
) -> Any:
    """
    Build an instance of ``options_type`` from parsed option values.

    Args:
        options_type: The options dataclass.
        values: Parsed values keyed by option dest (see
            :attr:`OptionDescriptor.dest`).
        descriptors: The descriptors derived from ``options_type``.

    Raises:
        ValueError: If an option without a default was not given.
    """
    kwargs = {}
    missing = []
    for descriptor in descriptors:
        if descriptor.dest in values:
            kwargs[descriptor.field_name] = values[descriptor.dest]
        elif descriptor.has_default:
            kwargs[descriptor.field_name] = descriptor.get_default_value()
        else:
            missing.append(descriptor.name)
    if missing:
        raise ValueError(
            f"Missing required options for {options_type.__name__}: {', '.join(missing)}"
        )
    return options_type(**kwargs)


@dataclasses.dataclass
class _BoundOptions:
    options_type: type
    descriptors: list[OptionDescriptor]


class OptionsArgParser:
    """
    A command backed by an ``argparse.ArgumentParser``, taking derived options.

    Example:
        @dataclass
        class ServeOptions:
            port: int = option("-p", help="Port to listen on", default=8080)

        parser = OptionsArgParser(ServeOptions, prog="serve")
        options = parser.parse(["-p", "9000"])["ServeOptions"]
    """

    def __init__(
        self,
        options_type: Optional[type] = None,
        *,
        prog: Optional[str] = None,
        description: Optional[str] = None,
        prefix: PrefixLike = OptionPrefix.TWO_HYPHENS,
        convention: ConventionLike = OptionNamingConvention.KEBAB_CASE,
        option_namer: Optional[OptionNamer] = None,
        prefix_chars: Optional[str] = None,
        configure_options: Optional[Callable[["OptionsArgParser"], None]] = None,
        parser: Optional[argparse.ArgumentParser] = None,
        _depth: int = 0,
    ) -> None:
        """
        Initialize the parser and register the options of ``options_type``.

        Args:
            options_type: Options dataclass of this command, if any.
            prog: Program name shown in usage.
            description: Description of the command.
            prefix: Prefix of the canonical option names.
            convention: Naming convention of the canonical option names.
            option_namer: Replaces prefix and convention entirely when given.
            prefix_chars: argparse prefix characters; by default ``-`` plus the
                first character of ``prefix``.
            configure_options: Called with this parser instead of registering
                ``options_type`` with the default settings; it may call
                :meth:`add_options` with any settings it likes.
            parser: An existing ``argparse.ArgumentParser`` to register on.
        """
        self.prefix = prefix
        self.convention = convention
        self.option_namer = option_namer
        if parser is None:
            parser = argparse.ArgumentParser(
                prog=prog,
                description=description,
                prefix_chars=prefix_chars or _prefix_chars_for(prefix),
            )
        self.parser: argparse.ArgumentParser = parser

        self._depth = _depth
        self._command_dest = f"_command_{_depth}"
        self._subparsers: Optional[argparse._SubParsersAction] = None
        self._subcommands: dict[str, OptionsArgParser] = {}
        self._bound: list[_BoundOptions] = []
        self._global_descriptors: list[OptionDescriptor] = []
        self._global_bound: list[_BoundOptions] = []
        self._flag_dests: list[str] = []

        if configure_options is not None:
            configure_options(self)
        elif options_type is not None:
            self.add_options(options_type)

    # OptionRegistrar

    def add_option(self, descriptor: OptionDescriptor) -> None:
        """Add one derived option as an argument of this command."""
        self.parser.add_argument(*descriptor.aliases, **argument_kwargs(descriptor))

    def add_global_option(self, descriptor: OptionDescriptor) -> None:
        """Add one derived option to this command and all of its subcommands."""
        self.add_option(descriptor)
        self._global_descriptors.append(descriptor)
        for subcommand in self._subcommands.values():
            subcommand._inherit_global_option(descriptor)

    def _inherit_global_option(self, descriptor: OptionDescriptor) -> None:
        self.parser.add_argument(
            *descriptor.aliases, **argument_kwargs(descriptor, inherited=True)
        )
        self._global_descriptors.append(descriptor)
        for subcommand in self._subcommands.values():
            subcommand._inherit_global_option(descriptor)

    # Options types

    def add_options(
        self,
        options_type: type,
        prefix: Optional[PrefixLike] = None,
        convention: Optional[ConventionLike] = None,
        *,
        option_namer: Optional[OptionNamer] = None,
    ) -> list[OptionDescriptor]:
        """Register the options of ``options_type`` on this command."""
        descriptors = registration.add_options(
            self, options_type, **self._naming(prefix, convention, option_namer)
        )
        self._bound.append(_BoundOptions(options_type, descriptors))
        return descriptors

    def add_global_options(
        self,
        options_type: type,
        prefix: Optional[PrefixLike] = None,
        convention: Optional[ConventionLike] = None,
        *,
        option_namer: Optional[OptionNamer] = None,
    ) -> list[OptionDescriptor]:
        """Register the options of ``options_type`` on this command and its subcommands."""
        descriptors = registration.add_global_options(
            self, options_type, **self._naming(prefix, convention, option_namer)
        )
        self._global_bound.append(_BoundOptions(options_type, descriptors))
        return descriptors

    def _naming(
        self,
        prefix: Optional[PrefixLike],
        convention: Optional[ConventionLike],
        option_namer: Optional[OptionNamer],
    ) -> dict[str, Any]:
        return {
            "prefix": self.prefix if prefix is None else prefix,
            "convention": self.convention if convention is None else convention,
            "option_namer": option_namer or self.option_namer,
        }

    def add_subcommand(
        self,
        name: str,
        options_type: Optional[type] = None,
        *,
        help: Optional[str] = None,
        **kwargs: Any,
    ) -> "OptionsArgParser":
        """
        Add a subcommand, optionally with its own options type.

        Global options already registered on this command are added to the
        subcommand as well. Naming settings default to this command's.
        """
        if self._subparsers is None:
            self._subparsers = self.parser.add_subparsers(dest=self._command_dest)

        sub_parser = self._subparsers.add_parser(
            name,
            help=help,
            description=help,
            prefix_chars=self.parser.prefix_chars,
        )
        kwargs.setdefault("prefix", self.prefix)
        kwargs.setdefault("convention", self.convention)
        kwargs.setdefault("option_namer", self.option_namer)
        subcommand = OptionsArgParser(
            parser=sub_parser, _depth=self._depth + 1, **kwargs
        )
        for descriptor in self._global_descriptors:
            subcommand._inherit_global_option(descriptor)
        self._subcommands[name] = subcommand
        logger.debug("Added subcommand %s to %s", name, self.parser.prog)

        if options_type is not None:
            subcommand.add_options(options_type)
        return subcommand

    def add_flag(self, *names: str, **kwargs: Any) -> None:
        """
        Add an individual command-line flag/argument to the parser.

        Example:
            parser.add_flag('--dry-run', action='store_true', help='Do nothing')

        Args:
            *names: One or more option strings (e.g. '--foo' or '-f', '--foo').
            **kwargs: Keyword arguments passed through to argparse.ArgumentParser.add_argument.
        """
        for n in names:
            if n in self.parser._option_string_actions:
                raise ValueError(f"Flag name conflict: {n}")

        action = self.parser.add_argument(*names, **kwargs)
        self._flag_dests.append(action.dest)

    # Parsing

    def parse(self, args: Optional[list[str]] = None) -> dict[str, Any]:
        """
        Parse command-line arguments and return the options instances.

        Args:
            args (Optional[list[str]]): Optional list of arguments to parse. If None, uses sys.argv.

        Returns:
            dict[str, Any]: Options instances keyed by options type name (global
            options, this command's options and those of the selected
            subcommands), plus the values of flags added with :meth:`add_flag`
            and the selected subcommand names under ``"command"``.

        Raises:
            SystemExit: If the arguments are invalid or an option without a
                default is not given.
        """
        values = vars(self.parser.parse_args(args))
        try:
            return self._bind(values)
        except ValueError as e:
            self.parser.error(str(e))

    def _bind(self, values: dict[str, Any]) -> dict[str, Any]:
        result: dict[str, Any] = {}
        commands: list[str] = []
        self._collect(values, result, commands)
        if commands:
            result["command"] = commands
        return result

    def _collect(
        self, values: dict[str, Any], result: dict[str, Any], commands: list[str]
    ) -> None:
        for bound in self._global_bound + self._bound:
            result[bound.options_type.__name__] = bind_options(
                bound.options_type, values, bound.descriptors
            )

        for dest in self._flag_dests:
            if dest in values:
                result[dest] = values[dest]

        selected = values.get(self._command_dest)
        if selected is not None:
            commands.append(selected)
            self._subcommands[selected]._collect(values, result, commands)

    def safe_parse(
        self, args: Optional[list[str]] = None
    ) -> Result[dict[str, Any], str]:
        """
        Safely parse command-line arguments and return the options instances.

        Errors argparse would report by exiting are returned as Err carrying
        argparse's message instead of being printed.

        Returns:
            Result[dict[str, Any], str]:
                - Ok with the same mapping :meth:`parse` returns,
                - Err with error message if parsing fails.
        """
        try:
            return Ok(self._bind(vars(self._parse_args_quietly(args))))
        except Exception as e:
            return Err(str(e))

    def _parse_args_quietly(self, args: Optional[list[str]]) -> argparse.Namespace:
        stderr = io.StringIO()
        try:
            with contextlib.redirect_stderr(stderr):
                return self.parser.parse_args(args)
        except SystemExit as e:
            lines = stderr.getvalue().strip().splitlines()
            message = lines[-1] if lines else f"Argument parsing exited with status {e.code}"
            raise ValueError(message) from None


def _prefix_chars_for(prefix: PrefixLike) -> str:
    prefix_string = option_prefix_string(prefix)
    if prefix_string and prefix_string[0] != "-":
        return "-" + prefix_string[0]
    return "-"
