"""
Exceptions raised while deriving options from an options dataclass.

Every failure is raised synchronously from the derivation entry point and
aborts the whole derivation; no partial list of options is ever returned.
"""

from typing import Any, Optional


class AutoOptionsError(Exception):
    """Base class for all errors raised by autooptions."""


class InvalidArgumentError(AutoOptionsError, ValueError):
    """An argument is missing (None) or holds a value that is not accepted."""

    def __init__(self, argument_name: str, message: str = "must not be None") -> None:
        self.argument_name = argument_name
        super().__init__(f"Argument '{argument_name}' {message}")


class InvalidOptionsTypeError(AutoOptionsError, TypeError):
    """The options type is not a concrete dataclass."""

    def __init__(self, options_type: Any, reason: str) -> None:
        self.options_type = options_type
        super().__init__(f"Options type '{_type_name(options_type)}' {reason}")


class OptionsConfigurationError(AutoOptionsError):
    """A field of the options type cannot be turned into an option."""

    def __init__(
        self, options_type: Any, field_name: str, message: Optional[str] = None
    ) -> None:
        self.options_type = options_type
        self.field_name = field_name
        if message is None:
            message = "is misconfigured"
        super().__init__(
            f"Field '{field_name}' of options type '{_type_name(options_type)}' {message}"
        )


class NoAliasesConfiguredError(OptionsConfigurationError):
    """The naming function produced no name and the field declares no aliases."""

    def __init__(self, options_type: Any, field_name: str) -> None:
        super().__init__(
            options_type,
            field_name,
            "has no aliases: the option namer returned an empty name "
            "and no alias is declared",
        )


class InvalidDefaultValueError(OptionsConfigurationError):
    """The default value is not an instance of the field's declared type."""

    def __init__(
        self, options_type: Any, field_name: str, default: Any, value_type: Any
    ) -> None:
        self.default = default
        self.value_type = value_type
        super().__init__(
            options_type,
            field_name,
            f"has default value {default!r} which is not of type "
            f"'{_type_name(value_type)}'",
        )


class UnsupportedValueTypeError(OptionsConfigurationError):
    """The field's declared type has no matching value kind."""

    def __init__(self, options_type: Any, field_name: str, value_type: Any) -> None:
        self.value_type = value_type
        super().__init__(
            options_type,
            field_name,
            f"has unsupported value type '{_type_name(value_type)}'",
        )


def _type_name(tp: Any) -> str:
    if isinstance(tp, type):
        return f"{tp.__module__}.{tp.__qualname__}"
    return repr(tp)
