"""
Naming conventions and the option name formatter.

An option's canonical name is derived from the name of its dataclass field:
a prefix (``--`` by default) followed by the field name rewritten according to
an :class:`OptionNamingConvention`.

Example:
    >>> format_option_name("MaxRetryCount")
    '--max-retry-count'
    >>> format_option_name("max_retry_count")
    '--max-retry-count'
    >>> format_option_name("OptionName", "/", OptionNamingConvention.LOWER_CASE)
    '/optionname'
"""

import dataclasses
import enum
from typing import Callable, Union

from .errors import InvalidArgumentError

OptionNamer = Callable[[dataclasses.Field], str]

# Bit that selects the hyphen word delimiter. It only appears in combination
# with a casing bit in the conventions offered below.
_KEBAB_DELIMITER = 1 << 2


class OptionNamingConvention(enum.IntFlag):
    """
    How a field name is turned into an option name.

    Casing and word delimiting are independent facets combined with ``|``:

    * ``MATCH_PROPERTY_NAME``: ``OptionName`` -> ``-OptionName``
    * ``LOWER_CASE``: ``OptionName`` -> ``/optionname``
    * ``UPPER_CASE``: ``OptionName`` -> ``/OPTIONNAME``
    * ``KEBAB_CASE``: ``OptionName`` -> ``--option-name``
    * ``SCREAMING_KEBAB_CASE``: ``OptionName`` -> ``--OPTION-NAME``
    """

    MATCH_PROPERTY_NAME = 0
    LOWER_CASE = 1 << 0
    UPPER_CASE = 1 << 1
    KEBAB_CASE = _KEBAB_DELIMITER | LOWER_CASE
    SCREAMING_KEBAB_CASE = KEBAB_CASE | UPPER_CASE


class OptionPrefix(enum.Enum):
    """The well-known option prefixes."""

    TWO_HYPHENS = "--"
    SINGLE_HYPHEN = "-"
    FORWARD_SLASH = "/"


PrefixLike = Union[OptionPrefix, str]
ConventionLike = Union[OptionNamingConvention, int]


def option_prefix_string(prefix: PrefixLike) -> str:
    """Return the literal string for ``prefix``."""
    if prefix is None:
        raise InvalidArgumentError("prefix")
    if isinstance(prefix, OptionPrefix):
        return prefix.value
    if isinstance(prefix, str):
        return prefix
    raise InvalidArgumentError("prefix", f"is not a known option prefix: {prefix!r}")


def _identity(name: str) -> str:
    return name


def resolve_convention(convention: ConventionLike) -> tuple[str, Callable[[str], str]]:
    """
    Resolve a naming convention into its word delimiter and casing function.

    Facets are tested by bitwise containment, so any composite built from the
    documented members resolves. Upper case wins over lower case when a
    composite carries both bits (as ``SCREAMING_KEBAB_CASE`` does).

    Args:
        convention: The naming convention (or a plain integer bit-set).

    Returns:
        tuple[str, Callable[[str], str]]: ``("-", ...)`` when the kebab facet is
        set, ``("", ...)`` otherwise, and the casing function.
    """
    if convention is None:
        raise InvalidArgumentError("convention")
    bits = int(convention)

    delimiter = "-" if bits & _KEBAB_DELIMITER else ""

    if bits & OptionNamingConvention.UPPER_CASE:
        set_casing: Callable[[str], str] = str.upper
    elif bits & OptionNamingConvention.LOWER_CASE:
        set_casing = str.lower
    else:
        set_casing = _identity

    return delimiter, set_casing


def format_option_name(
    field_name: str,
    prefix: PrefixLike = OptionPrefix.TWO_HYPHENS,
    convention: ConventionLike = OptionNamingConvention.KEBAB_CASE,
) -> str:
    """
    Format a field name as an option name.

    Without a word delimiter the casing function is applied to the whole name.
    With one, the name is scanned a character at a time: the delimiter goes in
    front of every uppercase character except the first one emitted, and each
    character is cased on its own. Runs of capitals are not treated as one
    word, so ``ID`` becomes ``--i-d``.

    Underscores are word boundaries too. They are replaced by the delimiter,
    never doubled and never leading or trailing, so ``max_retry_count`` and
    ``type_`` become ``--max-retry-count`` and ``--type``.

    Args:
        field_name: The dataclass field name.
        prefix: An :class:`OptionPrefix` or a literal prefix string.
        convention: The naming convention to apply.

    Returns:
        str: The option name, prefix included.
    """
    prefix_string = option_prefix_string(prefix)
    delimiter, set_casing = resolve_convention(convention)

    if not delimiter:
        return prefix_string + set_casing(field_name)

    option_name = ""
    at_boundary = False
    for char in field_name:
        if char == "_":
            at_boundary = True
            continue
        if option_name and (at_boundary or char.isupper()):
            option_name += delimiter
        at_boundary = False
        option_name += set_casing(char)

    return prefix_string + option_name


def default_option_namer(
    prefix: PrefixLike = OptionPrefix.TWO_HYPHENS,
    convention: ConventionLike = OptionNamingConvention.KEBAB_CASE,
) -> OptionNamer:
    """Return a namer applying :func:`format_option_name` to each field's name."""
    # Fail on a bad configuration now rather than on the first field.
    option_prefix_string(prefix)
    resolve_convention(convention)

    def name_option(field: dataclasses.Field) -> str:
        return format_option_name(field.name, prefix, convention)

    return name_option
