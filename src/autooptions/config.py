"""
Naming settings, optionally loaded from a YAML or JSON file.

A settings file holds the prefix and the naming convention of the canonical
option names:

.. code-block:: yaml

    prefix: SINGLE_HYPHEN       # or a literal prefix such as "--"
    naming_convention: SCREAMING_KEBAB_CASE   # or a list: [KEBAB_CASE, UPPER_CASE]
"""

import dataclasses
import json
import os
from typing import Any, Union

import yaml

from .naming import (
    ConventionLike,
    OptionNamer,
    OptionNamingConvention,
    OptionPrefix,
    PrefixLike,
    default_option_namer,
    option_prefix_string,
)


@dataclasses.dataclass(frozen=True)
class NamingSettings:
    """The prefix and naming convention of canonical option names."""

    prefix: PrefixLike = OptionPrefix.TWO_HYPHENS
    convention: ConventionLike = OptionNamingConvention.KEBAB_CASE

    @property
    def prefix_string(self) -> str:
        return option_prefix_string(self.prefix)

    def option_namer(self) -> OptionNamer:
        """Return the default option namer for these settings."""
        return default_option_namer(self.prefix, self.convention)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "NamingSettings":
        """
        Build settings from a mapping with optional ``prefix`` and
        ``naming_convention`` keys.

        Raises:
            ValueError: If a key is unknown or a value is invalid.
        """
        unknown = set(data) - {"prefix", "naming_convention"}
        if unknown:
            raise ValueError(f"Unknown naming settings: {', '.join(sorted(unknown))}")

        settings = cls()
        if "prefix" in data:
            settings = dataclasses.replace(settings, prefix=_parse_prefix(data["prefix"]))
        if "naming_convention" in data:
            settings = dataclasses.replace(
                settings, convention=_parse_convention(data["naming_convention"])
            )
        return settings


def _parse_prefix(value: Any) -> PrefixLike:
    if not isinstance(value, str):
        raise ValueError(f"Invalid prefix: {value!r}")
    if value in OptionPrefix.__members__:
        return OptionPrefix[value]
    return value


def _parse_convention(value: Union[str, list]) -> OptionNamingConvention:
    names = [value] if isinstance(value, str) else value
    if not isinstance(names, list) or not names:
        raise ValueError(f"Invalid naming convention: {value!r}")

    convention = OptionNamingConvention.MATCH_PROPERTY_NAME
    for name in names:
        if not isinstance(name, str) or name not in OptionNamingConvention.__members__:
            choices = ", ".join(OptionNamingConvention.__members__)
            raise ValueError(
                f"Invalid naming convention: {name!r}. Must be one of: {choices}"
            )
        convention |= OptionNamingConvention[name]
    return convention


def load_naming_settings(config_path: str) -> NamingSettings:
    """
    Load naming settings from a YAML or JSON file.

    Args:
        config_path (str): Path to the settings file.

    Returns:
        NamingSettings: The loaded settings; keys absent from the file keep
        their defaults.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the file format is not supported or invalid.
    """
    if not os.path.exists(config_path):
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    file_ext = os.path.splitext(config_path)[1].lower()

    with open(config_path, "r") as f:
        if file_ext in [".yaml", ".yml"]:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML file: {e}")
        elif file_ext == ".json":
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid JSON file: {e}")
        else:
            raise ValueError(
                f"Unsupported file format: {file_ext}. "
                "Supported formats are: .yaml, .yml, .json"
            )

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid configuration file: {config_path}")
    return NamingSettings.from_dict(data)
