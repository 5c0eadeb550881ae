"""
Field-level annotations of an options dataclass.

Annotations live in the metadata of ``dataclasses.field``:

* ``"help"``: the description shown to users.
* ``"aliases"``: extra option strings, used exactly as written.
* ``"not_an_option"``: when true the field is skipped entirely.

The default value is the field's own ``default`` (or the value produced by its
``default_factory``). :func:`option`, :func:`not_an_option`,
:func:`default_file` and :func:`default_directory` build such fields.

Example:
    @dataclass
    class ServeOptions:
        port: int = option("-p", help="Port to listen on", default=8080)
        root: Path = default_directory(".", "-r", help="Directory to serve")
        cache: dict = not_an_option(default_factory=dict)
"""

import dataclasses
import inspect
import pathlib
from typing import Any, Iterable, NamedTuple, Optional

from .errors import InvalidOptionsTypeError

HELP = "help"
ALIASES = "aliases"
NOT_AN_OPTION = "not_an_option"
PATH_KIND = "path_kind"


class _MissingType:
    """Marks an option without a default value."""

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _MissingType()


def option(
    *aliases: str,
    help: Optional[str] = None,
    default: Any = dataclasses.MISSING,
    default_factory: Any = dataclasses.MISSING,
    metadata: Optional[dict[str, Any]] = None,
    **field_kwargs: Any,
) -> Any:
    """
    Declare a dataclass field that becomes an option.

    Args:
        *aliases: Additional option strings, e.g. ``"-v"``. They are added after
            the canonical name exactly as given.
        help: Description shown to users.
        default: Default value; must be of the field's type.
        default_factory: Zero-argument callable producing the default.
        metadata: Extra metadata merged into the field's metadata.
        **field_kwargs: Passed through to ``dataclasses.field``.
    """
    merged: dict[str, Any] = dict(metadata or {})
    if aliases:
        merged[ALIASES] = tuple(aliases)
    if help is not None:
        merged[HELP] = help
    return dataclasses.field(
        default=default,
        default_factory=default_factory,
        metadata=merged,
        **field_kwargs,
    )


def not_an_option(**field_kwargs: Any) -> Any:
    """Declare a dataclass field that is never turned into an option."""
    metadata = dict(field_kwargs.pop("metadata", None) or {})
    metadata[NOT_AN_OPTION] = True
    return dataclasses.field(metadata=metadata, **field_kwargs)


def default_file(
    path: str, *aliases: str, help: Optional[str] = None, **field_kwargs: Any
) -> Any:
    """Declare a ``pathlib.Path`` option defaulting to the file at ``path``."""
    return _path_option(path, "file", aliases, help, field_kwargs)


def default_directory(
    path: str, *aliases: str, help: Optional[str] = None, **field_kwargs: Any
) -> Any:
    """Declare a ``pathlib.Path`` option defaulting to the directory at ``path``."""
    return _path_option(path, "directory", aliases, help, field_kwargs)


def _path_option(
    path: str,
    path_kind: str,
    aliases: tuple[str, ...],
    help: Optional[str],
    field_kwargs: dict[str, Any],
) -> Any:
    metadata = dict(field_kwargs.pop("metadata", None) or {})
    metadata[PATH_KIND] = path_kind
    return option(
        *aliases,
        help=help,
        default=pathlib.Path(path),
        metadata=metadata,
        **field_kwargs,
    )


class FieldAnnotations(NamedTuple):
    """What the annotations of one field contribute to its option."""

    aliases: tuple[str, ...]
    description: Optional[str]
    default: Any


def check_options_type(options_type: Any) -> None:
    """Raise InvalidOptionsTypeError unless ``options_type`` is a concrete dataclass."""
    if not isinstance(options_type, type):
        raise InvalidOptionsTypeError(options_type, "is not a class")
    if not dataclasses.is_dataclass(options_type):
        raise InvalidOptionsTypeError(options_type, "is not a dataclass")
    if inspect.isabstract(options_type):
        raise InvalidOptionsTypeError(options_type, "is abstract")


def option_fields(options_type: type) -> list[dataclasses.Field]:
    """
    Return the fields of ``options_type`` that become options, in declaration order.

    Only fields declared on ``options_type`` itself are considered; fields
    inherited from a base dataclass are not. Private fields (leading
    underscore), fields marked ``not_an_option`` and fields left out of
    ``__init__`` (``init=False``) are skipped.
    """
    check_options_type(options_type)
    own_names = inspect.get_annotations(options_type).keys()
    return [
        field
        for field in dataclasses.fields(options_type)
        if field.name in own_names
        and not field.name.startswith("_")
        and field.init
        and not field.metadata.get(NOT_AN_OPTION, False)
    ]


def field_default(field: dataclasses.Field) -> Any:
    """Return the field's default, calling its factory once; MISSING if it has none."""
    if field.default is not dataclasses.MISSING:
        return field.default
    elif field.default_factory is not dataclasses.MISSING:
        return field.default_factory()
    return MISSING


def unique_aliases(aliases: Iterable[Optional[str]]) -> tuple[str, ...]:
    """Drop empty and duplicate aliases, keeping the first occurrence of each."""
    return tuple(dict.fromkeys(alias for alias in aliases if alias))


def read_annotations(field: dataclasses.Field, canonical_name: str) -> FieldAnnotations:
    """
    Read the aliases, description and default of ``field``.

    The canonical name comes first in the alias list, followed by the declared
    aliases in declaration order.
    """
    declared = field.metadata.get(ALIASES, ())
    if isinstance(declared, str):
        declared = (declared,)

    return FieldAnnotations(
        aliases=unique_aliases((canonical_name, *declared)),
        description=field.metadata.get(HELP),
        default=field_default(field),
    )
