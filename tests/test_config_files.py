#!/usr/bin/env python3
"""
Tests for loading naming settings from config files.

This module tests JSON and YAML settings files and their use with
derivation and the argparse binding.
"""

import json
import os
import tempfile
import textwrap
from dataclasses import dataclass

import pytest

from autooptions import (
    NamingSettings,
    OptionNamingConvention,
    OptionPrefix,
    OptionsArgParser,
    derive_options,
    load_naming_settings,
    option,
)


@dataclass
class SampleOptions:
    """Sample options for testing."""

    MaxRetryCount: int = option("-r", help="Number of retries", default=3)


def _write(suffix, content):
    with tempfile.NamedTemporaryFile(mode="w", suffix=suffix, delete=False) as f:
        f.write(content)
        return f.name


class TestConfigFiles:
    """Test suite for naming settings files."""

    def test_json_config(self):
        config_path = _write(
            ".json",
            json.dumps(
                {"prefix": "SINGLE_HYPHEN", "naming_convention": "SCREAMING_KEBAB_CASE"}
            ),
        )
        try:
            settings = load_naming_settings(config_path)
            assert settings.prefix is OptionPrefix.SINGLE_HYPHEN
            assert settings.convention == OptionNamingConvention.SCREAMING_KEBAB_CASE
            assert settings.prefix_string == "-"
        finally:
            os.unlink(config_path)

    def test_yaml_config(self):
        yaml_content = textwrap.dedent(
            """
            prefix: /
            naming_convention:
              - LOWER_CASE
            """
        )
        config_path = _write(".yaml", yaml_content)
        try:
            settings = load_naming_settings(config_path)
            assert settings.prefix == "/"
            assert settings.convention == OptionNamingConvention.LOWER_CASE
        finally:
            os.unlink(config_path)

    def test_combined_conventions(self):
        config_path = _write(
            ".yml", "naming_convention: [KEBAB_CASE, UPPER_CASE]\n"
        )
        try:
            settings = load_naming_settings(config_path)
            assert settings.convention == OptionNamingConvention.SCREAMING_KEBAB_CASE
            assert settings.prefix is OptionPrefix.TWO_HYPHENS
        finally:
            os.unlink(config_path)

    def test_empty_file_keeps_defaults(self):
        config_path = _write(".yaml", "")
        try:
            assert load_naming_settings(config_path) == NamingSettings()
        finally:
            os.unlink(config_path)

    def test_settings_drive_option_names(self):
        config_path = _write(
            ".json", json.dumps({"prefix": "/", "naming_convention": "UPPER_CASE"})
        )
        try:
            settings = load_naming_settings(config_path)
            (descriptor,) = derive_options(SampleOptions, settings.option_namer())
            assert descriptor.aliases == ("/MAXRETRYCOUNT", "-r")

            parser = OptionsArgParser(
                SampleOptions, prefix=settings.prefix, convention=settings.convention
            )
            result = parser.parse(["/MAXRETRYCOUNT", "7"])
            assert result["SampleOptions"].MaxRetryCount == 7
        finally:
            os.unlink(config_path)

    def test_file_not_found(self):
        with pytest.raises(FileNotFoundError, match="Configuration file not found"):
            load_naming_settings("/nonexistent/naming.yaml")

    def test_unsupported_format(self):
        config_path = _write(".txt", "prefix: --")
        try:
            with pytest.raises(ValueError, match="Unsupported file format"):
                load_naming_settings(config_path)
        finally:
            os.unlink(config_path)

    def test_invalid_json(self):
        config_path = _write(".json", "{not json")
        try:
            with pytest.raises(ValueError, match="Invalid JSON file"):
                load_naming_settings(config_path)
        finally:
            os.unlink(config_path)

    def test_invalid_yaml(self):
        config_path = _write(".yaml", "prefix: [unclosed")
        try:
            with pytest.raises(ValueError, match="Invalid YAML file"):
                load_naming_settings(config_path)
        finally:
            os.unlink(config_path)

    @pytest.mark.parametrize(
        "data,message",
        [
            ({"naming_convention": "CAMEL_CASE"}, "Invalid naming convention"),
            ({"naming_convention": []}, "Invalid naming convention"),
            ({"prefix": 1}, "Invalid prefix"),
            ({"separator": "-"}, "Unknown naming settings"),
        ],
    )
    def test_invalid_values(self, data, message):
        config_path = _write(".json", json.dumps(data))
        try:
            with pytest.raises(ValueError, match=message):
                load_naming_settings(config_path)
        finally:
            os.unlink(config_path)

    def test_top_level_must_be_a_mapping(self):
        config_path = _write(".json", json.dumps(["KEBAB_CASE"]))
        try:
            with pytest.raises(ValueError, match="Invalid configuration file"):
                load_naming_settings(config_path)
        finally:
            os.unlink(config_path)
