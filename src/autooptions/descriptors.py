"""
Option descriptors and the derivation of descriptors from an options dataclass.

Each eligible field of the options type yields one :class:`OptionDescriptor`:
its canonical name (computed by an option namer), the declared aliases, the
description, the bound default value and the kind of value it holds. The
descriptors are handed to an argument parsing framework, which does the
actual parsing.

Example:
    @dataclass
    class BuildOptions:
        max_retry_count: int = option("-r", help="Retries", default=3)

    for descriptor in derive_default_options(BuildOptions):
        print(descriptor.aliases)  # ('--max-retry-count', '-r')
"""

import dataclasses
import enum
import logging
import pathlib
import types
import typing
from typing import Any, Callable, Iterator, Literal, NamedTuple, Optional, Union

from result import Err, Ok, Result

from .annotations import (
    MISSING,
    PATH_KIND,
    check_options_type,
    option_fields,
    read_annotations,
)
from .errors import (
    AutoOptionsError,
    InvalidArgumentError,
    InvalidDefaultValueError,
    NoAliasesConfiguredError,
    UnsupportedValueTypeError,
)
from .naming import (
    ConventionLike,
    OptionNamer,
    OptionNamingConvention,
    OptionPrefix,
    PrefixLike,
    default_option_namer,
)

logger = logging.getLogger(__name__)


class ValueKind(enum.Enum):
    """The kinds of values an option can hold."""

    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    PATH = "path"
    ENUM = "enum"
    LIST = "list"


_KIND_BY_TYPE: dict[type, ValueKind] = {
    str: ValueKind.STRING,
    int: ValueKind.INTEGER,
    float: ValueKind.FLOAT,
    bool: ValueKind.BOOLEAN,
}


class ValueTypeInfo(NamedTuple):
    """A field type resolved to its value kind."""

    kind: ValueKind
    value_type: Any
    element_type: Optional[Any] = None
    choices: Optional[tuple[Any, ...]] = None
    nullable: bool = False


def _get_optional_inner_type(type_hint: Any) -> Optional[Any]:
    """
    If type_hint is Optional[T] (i.e., Union[T, None]), return T.
    Otherwise, return None.
    """
    if typing.get_origin(type_hint) in (Union, types.UnionType):
        args = typing.get_args(type_hint)
        non_none_args = [a for a in args if a is not type(None)]
        if len(non_none_args) == 1 and type(None) in args:
            return non_none_args[0]
    return None


def _scalar_kind(value_type: Any) -> Optional[ValueKind]:
    if value_type in _KIND_BY_TYPE:
        return _KIND_BY_TYPE[value_type]
    if isinstance(value_type, type):
        if issubclass(value_type, pathlib.PurePath):
            return ValueKind.PATH
        if issubclass(value_type, enum.Enum):
            return ValueKind.ENUM
    if typing.get_origin(value_type) is Literal:
        return ValueKind.ENUM
    return None


def _choices(value_type: Any) -> Optional[tuple[Any, ...]]:
    if typing.get_origin(value_type) is Literal:
        return typing.get_args(value_type)
    if isinstance(value_type, type) and issubclass(value_type, enum.Enum):
        return tuple(value_type)
    return None


def value_kind_for(value_type: Any) -> Optional[ValueTypeInfo]:
    """
    Resolve a field type to the kind of value the option holds.

    ``Optional[T]`` resolves like ``T`` with ``nullable`` set. ``list[T]``
    resolves to LIST when ``T`` is itself a scalar kind; a bare ``list`` holds
    strings.

    Returns:
        Optional[ValueTypeInfo]: The resolved kind, or None if the type is not
        supported.
    """
    inner_type = _get_optional_inner_type(value_type)
    nullable = inner_type is not None
    if nullable:
        value_type = inner_type

    kind = _scalar_kind(value_type)
    if kind is not None:
        return ValueTypeInfo(
            kind, value_type, choices=_choices(value_type), nullable=nullable
        )

    if value_type is list or typing.get_origin(value_type) is list:
        args = typing.get_args(value_type)
        element_type = args[0] if args else str
        if _scalar_kind(element_type) is None:
            return None
        return ValueTypeInfo(
            ValueKind.LIST,
            value_type,
            element_type=element_type,
            choices=_choices(element_type),
            nullable=nullable,
        )

    return None


def _is_scalar_value(value: Any, value_type: Any, kind: ValueKind) -> bool:
    if kind is ValueKind.INTEGER:
        return isinstance(value, int) and not isinstance(value, bool)
    if kind is ValueKind.FLOAT:
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if typing.get_origin(value_type) is Literal:
        return value in typing.get_args(value_type)
    return isinstance(value, value_type)


def is_assignable(value: Any, info: ValueTypeInfo) -> bool:
    """Tell whether ``value`` can be used as-is for an option of type ``info``."""
    if value is None:
        return info.nullable
    if info.kind is ValueKind.LIST:
        element_kind = _scalar_kind(info.element_type)
        return isinstance(value, list) and all(
            _is_scalar_value(item, info.element_type, element_kind) for item in value
        )
    return _is_scalar_value(value, info.value_type, info.kind)


@dataclasses.dataclass(frozen=True)
class OptionDescriptor:
    """
    The derived description of one option.

    Attributes:
        field_name: Name of the dataclass field the option was derived from.
        aliases: All option strings, canonical name first. Never empty.
        value_type: The declared field type.
        kind: The kind of value the option holds.
        description: Text shown to users, if any.
        default: The bound default value, or MISSING.
        element_type: Element type for LIST options.
        choices: Allowed values for ENUM options (or for the elements of a
            LIST of enum values).
        nullable: True for ``Optional[...]`` fields.
        path_kind: ``"file"`` or ``"directory"`` for options declared with
            ``default_file``/``default_directory``.
        options_type: The options type the option was derived from.
    """

    field_name: str
    aliases: tuple[str, ...]
    value_type: Any
    kind: ValueKind
    description: Optional[str] = None
    default: Any = MISSING
    element_type: Optional[Any] = None
    choices: Optional[tuple[Any, ...]] = None
    nullable: bool = False
    path_kind: Optional[str] = None
    options_type: Optional[type] = None

    @property
    def name(self) -> str:
        """The canonical name of the option."""
        return self.aliases[0]

    @property
    def dest(self) -> str:
        """Key of the parsed value, qualified by the options type name."""
        if self.options_type is None:
            return self.field_name
        return f"{self.options_type.__name__}.{self.field_name}"

    @property
    def has_default(self) -> bool:
        return self.default is not MISSING

    def get_default_value(self) -> Any:
        """Return the bound default value; the same object on every call."""
        if self.default is MISSING:
            raise LookupError(f"Option '{self.name}' has no default value")
        return self.default

    @property
    def default_factory(self) -> Optional[Callable[[], Any]]:
        """A producer of the default value, or None if there is no default."""
        if self.default is MISSING:
            return None
        return self.get_default_value


class DerivedOptions:
    """
    The options derived from an options type.

    Iterating derives the descriptors lazily, one field at a time. Every new
    iteration derives them again, so the sequence can be walked any number of
    times.
    """

    def __init__(self, options_type: type, option_namer: OptionNamer) -> None:
        self.options_type = options_type
        self.option_namer = option_namer

    def __iter__(self) -> Iterator[OptionDescriptor]:
        return _iter_descriptors(self.options_type, self.option_namer)

    def to_list(self) -> list[OptionDescriptor]:
        """Derive every descriptor; raises before returning anything on failure."""
        return list(self)

    def __repr__(self) -> str:
        return f"DerivedOptions({self.options_type.__qualname__})"


def derive_options(options_type: type, option_namer: OptionNamer) -> DerivedOptions:
    """
    Derive the options of ``options_type``, naming them with ``option_namer``.

    Args:
        options_type: A concrete dataclass.
        option_namer: Computes the canonical name of an option from its field.

    Returns:
        DerivedOptions: A restartable iterable of descriptors, in field
        declaration order.

    Raises:
        InvalidArgumentError: If ``options_type`` or ``option_namer`` is None.
        InvalidOptionsTypeError: If ``options_type`` is not a concrete dataclass.
    """
    if option_namer is None:
        raise InvalidArgumentError("option_namer")
    if options_type is None:
        raise InvalidArgumentError("options_type")
    check_options_type(options_type)
    return DerivedOptions(options_type, option_namer)


def derive_default_options(
    options_type: type,
    prefix: PrefixLike = OptionPrefix.TWO_HYPHENS,
    convention: ConventionLike = OptionNamingConvention.KEBAB_CASE,
) -> DerivedOptions:
    """Derive options named by :func:`~autooptions.naming.format_option_name`."""
    return derive_options(options_type, default_option_namer(prefix, convention))


def safe_derive_options(
    options_type: type, option_namer: Optional[OptionNamer] = None
) -> Result[list[OptionDescriptor], str]:
    """
    Derive every option without raising.

    Args:
        options_type: A concrete dataclass.
        option_namer: Optional namer; defaults to ``--kebab-case`` names.

    Returns:
        Result[list[OptionDescriptor], str]:
            - Ok with the list of descriptors,
            - Err with the error message if derivation fails.
    """
    try:
        if option_namer is None:
            option_namer = default_option_namer()
        return Ok(derive_options(options_type, option_namer).to_list())
    except AutoOptionsError as e:
        return Err(str(e))


def _iter_descriptors(
    options_type: type, option_namer: OptionNamer
) -> Iterator[OptionDescriptor]:
    type_hints = typing.get_type_hints(options_type)

    for field in option_fields(options_type):
        value_type = type_hints.get(field.name, field.type)
        info = value_kind_for(value_type)
        if info is None:
            raise UnsupportedValueTypeError(options_type, field.name, value_type)

        annotations = read_annotations(field, option_namer(field))
        if not annotations.aliases:
            raise NoAliasesConfiguredError(options_type, field.name)

        default = annotations.default
        if default is not MISSING and not is_assignable(default, info):
            raise InvalidDefaultValueError(options_type, field.name, default, value_type)

        descriptor = OptionDescriptor(
            field_name=field.name,
            aliases=annotations.aliases,
            value_type=value_type,
            kind=info.kind,
            description=annotations.description,
            default=default,
            element_type=info.element_type,
            choices=info.choices,
            nullable=info.nullable,
            path_kind=field.metadata.get(PATH_KIND),
            options_type=options_type,
        )
        logger.debug(
            "Derived option %s for field %s.%s",
            descriptor.name,
            options_type.__qualname__,
            field.name,
        )
        yield descriptor
