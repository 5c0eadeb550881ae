#!/usr/bin/env python3
"""
Tests for naming conventions and the option name formatter.
"""

import dataclasses

import pytest

from autooptions import (
    InvalidArgumentError,
    OptionNamingConvention,
    OptionPrefix,
    default_option_namer,
    format_option_name,
)
from autooptions.naming import resolve_convention

KEBAB = OptionNamingConvention.KEBAB_CASE
LOWER = OptionNamingConvention.LOWER_CASE
UPPER = OptionNamingConvention.UPPER_CASE
SCREAMING = OptionNamingConvention.SCREAMING_KEBAB_CASE
MATCH = OptionNamingConvention.MATCH_PROPERTY_NAME


class TestResolveConvention:
    """Test suite for resolving a convention to delimiter and casing."""

    def test_kebab_case_is_lower_case_with_hyphen(self):
        delimiter, set_casing = resolve_convention(KEBAB)
        assert delimiter == "-"
        assert set_casing("AbC") == "abc"

    def test_screaming_kebab_case_prefers_upper_case(self):
        delimiter, set_casing = resolve_convention(SCREAMING)
        assert delimiter == "-"
        assert set_casing("AbC") == "ABC"

    def test_match_property_name_is_identity(self):
        delimiter, set_casing = resolve_convention(MATCH)
        assert delimiter == ""
        assert set_casing("AbC") == "AbC"

    def test_composite_values_resolve_by_containment(self):
        # Upper case with the kebab delimiter bit, built by the caller.
        delimiter, set_casing = resolve_convention(UPPER | KEBAB)
        assert delimiter == "-"
        assert set_casing("a") == "A"

    def test_plain_integers_are_accepted(self):
        delimiter, set_casing = resolve_convention(1)
        assert delimiter == ""
        assert set_casing("ABC") == "abc"

    def test_none_convention_is_rejected(self):
        with pytest.raises(InvalidArgumentError):
            resolve_convention(None)


class TestFormatOptionName:
    """Test suite for format_option_name."""

    def test_kebab_case_splits_words(self):
        assert format_option_name("MaxRetryCount", "--", KEBAB) == "--max-retry-count"

    def test_single_upper_case_letter_has_no_leading_delimiter(self):
        assert format_option_name("A", "--", KEBAB) == "--a"

    def test_lower_case_without_delimiter(self):
        assert format_option_name("OptionName", "/", LOWER) == "/optionname"

    def test_upper_case_without_delimiter(self):
        assert format_option_name("OptionName", "/", UPPER) == "/OPTIONNAME"

    def test_screaming_kebab_case(self):
        assert format_option_name("OptionName", "--", SCREAMING) == "--OPTION-NAME"

    def test_match_property_name(self):
        assert format_option_name("OptionName", "-", MATCH) == "-OptionName"

    def test_acronyms_get_a_delimiter_per_letter(self):
        assert format_option_name("ID", "--", KEBAB) == "--i-d"
        assert format_option_name("UserID", "--", KEBAB) == "--user-i-d"

    def test_defaults_are_two_hyphens_and_kebab_case(self):
        assert format_option_name("OptionName") == "--option-name"

    def test_option_prefix_members(self):
        assert format_option_name("Name", OptionPrefix.SINGLE_HYPHEN, LOWER) == "-name"
        assert format_option_name("Name", OptionPrefix.FORWARD_SLASH, LOWER) == "/name"
        assert format_option_name("Name", OptionPrefix.TWO_HYPHENS, LOWER) == "--name"

    @pytest.mark.parametrize(
        "field_name,expected",
        [
            ("max_retry_count", "--max-retry-count"),
            ("type_", "--type"),
            ("dry_Run", "--dry-run"),
            ("verbose", "--verbose"),
        ],
    )
    def test_underscores_are_word_boundaries(self, field_name, expected):
        assert format_option_name(field_name, "--", KEBAB) == expected

    def test_underscores_are_kept_without_delimiter(self):
        assert format_option_name("max_retry_count", "--", UPPER) == "--MAX_RETRY_COUNT"

    @pytest.mark.parametrize("convention", [MATCH, LOWER, UPPER, KEBAB, SCREAMING])
    @pytest.mark.parametrize("field_name", ["OptionName", "x", "HTTPServer", "abcDef"])
    def test_formatting_is_deterministic(self, field_name, convention):
        first = format_option_name(field_name, "--", convention)
        assert format_option_name(field_name, "--", convention) == first

    def test_empty_field_name_gives_bare_prefix(self):
        assert format_option_name("", "--", KEBAB) == "--"
        assert format_option_name("", "", KEBAB) == ""

    def test_invalid_prefix(self):
        with pytest.raises(InvalidArgumentError, match="is not a known option prefix: 3"):
            format_option_name("Name", 3, KEBAB)
        with pytest.raises(InvalidArgumentError, match="prefix"):
            default_option_namer(OptionNamingConvention.LOWER_CASE, KEBAB)
        with pytest.raises(InvalidArgumentError):
            format_option_name("Name", None, KEBAB)


def test_default_option_namer_uses_field_name():
    @dataclasses.dataclass
    class Options:
        MaxRetryCount: int = 3

    (field,) = dataclasses.fields(Options)
    namer = default_option_namer(OptionPrefix.SINGLE_HYPHEN, SCREAMING)
    assert namer(field) == "-MAX-RETRY-COUNT"


def test_default_option_namer_validates_eagerly():
    with pytest.raises(InvalidArgumentError):
        default_option_namer(None)
