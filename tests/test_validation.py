"""
Unit tests for modelfile.validation module.

Tests semver parsing, schema version checking and unknown key detection
for structured documents.
"""

from __future__ import annotations

import logging

import pytest

from modelfile.exceptions import IncompatibleSchemaError
from modelfile.validation import (
    SCHEMA_VERSION,
    check_schema_version,
    find_unknown_keys,
    parse_semver,
)


class TestParseSemver:
    """Tests for parse_semver function."""

    def test_parse_valid_semver(self):
        """parse_semver correctly parses valid semver strings."""
        assert parse_semver("1.2.3") == (1, 2, 3)
        assert parse_semver("0.0.1") == (0, 0, 1)
        assert parse_semver("10.20.30") == (10, 20, 30)

    def test_current_schema_version_is_valid(self):
        """The schema version written by the package is valid semver."""
        major, _, _ = parse_semver(SCHEMA_VERSION)
        assert major == 1

    @pytest.mark.parametrize("version", ["1.2", "1.2.3.4"])
    def test_parse_semver_wrong_number_of_parts(self, version):
        """parse_semver raises ValueError for the wrong number of parts."""
        with pytest.raises(
            ValueError, match=r"Invalid semver format.*expected 'MAJOR.MINOR.PATCH'"
        ):
            parse_semver(version)

    @pytest.mark.parametrize("version", ["x.2.3", "1.y.3", "1.2.z"])
    def test_parse_semver_non_integer_component(self, version):
        """parse_semver raises ValueError for non-integer components."""
        with pytest.raises(
            ValueError, match=r"Invalid semver format.*non-integer component"
        ):
            parse_semver(version)

    def test_parse_semver_empty_string(self):
        """parse_semver raises ValueError for empty string."""
        with pytest.raises(ValueError, match="Invalid semver format"):
            parse_semver("")


class TestCheckSchemaVersion:
    """Tests for check_schema_version function."""

    def test_exact_match(self, caplog):
        """check_schema_version passes silently for exact match."""
        with caplog.at_level(logging.WARNING):
            check_schema_version("1.0.0", "1.0.0")
        assert caplog.records == []

    def test_older_minor(self):
        """check_schema_version passes when the document minor is older."""
        check_schema_version("1.0.0", "1.1.0")

    def test_different_patch(self):
        """Patch version differences are compatible."""
        check_schema_version("1.0.1", "1.0.0")
        check_schema_version("1.0.0", "1.0.5")

    def test_default_loader_version(self):
        """The loader version defaults to SCHEMA_VERSION."""
        check_schema_version(SCHEMA_VERSION)

    def test_major_mismatch_raises(self):
        """check_schema_version raises IncompatibleSchemaError for major mismatch."""
        with pytest.raises(
            IncompatibleSchemaError,
            match=r"Incompatible schema version.*document has version 2.0.0",
        ) as excinfo:
            check_schema_version("2.0.0", "1.0.0")
        assert excinfo.value.config_version == "2.0.0"
        assert excinfo.value.loader_version == "1.0.0"

    def test_major_mismatch_older_document(self):
        """check_schema_version raises for an older major version too."""
        with pytest.raises(IncompatibleSchemaError):
            check_schema_version("1.0.0", "2.0.0")

    def test_newer_minor_warns(self, caplog):
        """check_schema_version logs a warning when the document minor is newer."""
        with caplog.at_level(logging.WARNING):
            check_schema_version("1.2.0", "1.1.0")

        assert len(caplog.records) == 1
        assert (
            "Document schema version 1.2.0 is newer than loader version 1.1.0"
            in caplog.text
        )
        assert "Unknown fields will be ignored" in caplog.text

    def test_invalid_document_version(self):
        """check_schema_version raises ValueError for an invalid document version."""
        with pytest.raises(ValueError, match="Invalid semver format"):
            check_schema_version("invalid", "1.0.0")

    def test_invalid_loader_version(self):
        """check_schema_version raises ValueError for an invalid loader version."""
        with pytest.raises(ValueError, match="Invalid semver format"):
            check_schema_version("1.0.0", "invalid")


class TestFindUnknownKeys:
    """Tests for find_unknown_keys function."""

    def test_none_unknown(self):
        """find_unknown_keys returns empty list when all keys are known."""
        entry = {"kind": "from", "reference": "x"}
        assert find_unknown_keys(entry, {"kind", "reference"}) == []

    def test_multiple_unknown_sorted(self):
        """find_unknown_keys returns unknown keys sorted."""
        entry = {"kind": "system", "prompt": "s", "tag": 1, "author": "me"}
        assert find_unknown_keys(entry, {"kind", "prompt"}) == ["author", "tag"]

    def test_empty_data(self):
        """find_unknown_keys returns empty list for empty data."""
        assert find_unknown_keys({}, {"kind"}) == []

    def test_known_as_list(self):
        """Known keys may be any iterable."""
        assert find_unknown_keys({"a": 1, "b": 2}, ["a"]) == ["b"]
