"""
autooptions - Derive command-line options from dataclasses.

Declare the options of a command as the fields of a dataclass; autooptions
derives one option per field (canonical name, aliases, description, default
value and value kind) and registers them with an argparse-based command.
Canonical names follow a configurable prefix and naming convention
(``--kebab-case`` by default), which can also be loaded from a YAML or JSON
settings file.
"""

from .annotations import (
    MISSING,
    default_directory,
    default_file,
    not_an_option,
    option,
)
from .config import NamingSettings, load_naming_settings
from .descriptors import (
    DerivedOptions,
    OptionDescriptor,
    ValueKind,
    derive_default_options,
    derive_options,
    safe_derive_options,
)
from .errors import (
    AutoOptionsError,
    InvalidArgumentError,
    InvalidDefaultValueError,
    InvalidOptionsTypeError,
    NoAliasesConfiguredError,
    OptionsConfigurationError,
    UnsupportedValueTypeError,
)
from .naming import (
    OptionNamingConvention,
    OptionPrefix,
    default_option_namer,
    format_option_name,
)
from .parser import OptionsArgParser, bind_options
from .registration import OptionRegistrar, add_global_options, add_options

__version__ = "1.0.0"
__all__ = [
    "MISSING",
    "AutoOptionsError",
    "DerivedOptions",
    "InvalidArgumentError",
    "InvalidDefaultValueError",
    "InvalidOptionsTypeError",
    "NamingSettings",
    "NoAliasesConfiguredError",
    "OptionDescriptor",
    "OptionNamingConvention",
    "OptionPrefix",
    "OptionRegistrar",
    "OptionsArgParser",
    "OptionsConfigurationError",
    "UnsupportedValueTypeError",
    "ValueKind",
    "add_global_options",
    "add_options",
    "bind_options",
    "default_directory",
    "default_file",
    "default_option_namer",
    "derive_default_options",
    "derive_options",
    "format_option_name",
    "load_naming_settings",
    "not_an_option",
    "option",
    "safe_derive_options",
]
