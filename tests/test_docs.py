"""
Unit tests for modelfile.docs module.

Tests documentation generation and JSON export for parameter metadata.
"""

from __future__ import annotations

import json

from modelfile.docs import export_parameter_json, generate_parameter_docs
from modelfile.parameters import PARAMETERS, ParameterInfo

SMALL_REGISTRY = {
    "alpha": ParameterInfo(
        name="alpha",
        type=float,
        default=0.5,
        description="Alpha knob",
        range=(0.0, 1.0),
    ),
    "stop": ParameterInfo(
        name="stop",
        type=str,
        default=None,
        description="Stop sequence",
        repeatable=True,
    ),
}


class TestGenerateParameterDocs:
    """Tests for generate_parameter_docs function."""

    def test_title_and_sections(self):
        """generate_parameter_docs writes a title and one section per parameter."""
        md = generate_parameter_docs(SMALL_REGISTRY)
        assert md.startswith("# Modelfile parameters")
        assert "### `alpha`" in md
        assert "### `stop`" in md
        assert "Alpha knob" in md

    def test_type_default_and_range(self):
        """Types, defaults and ranges are listed."""
        md = generate_parameter_docs(SMALL_REGISTRY)
        assert "- **Type**: float" in md
        assert "- **Default**: `0.5`" in md
        assert "- **Valid range**: [0.0, 1.0]" in md

    def test_missing_default_and_repeatable(self):
        """A missing default is shown as a dash and repeatable parameters are marked."""
        md = generate_parameter_docs(SMALL_REGISTRY)
        stop_section = md.split("### `stop`")[1]
        assert "- **Default**: -" in stop_section
        assert "- **Repeatable**: yes" in stop_section
        assert "Valid range" not in stop_section

    def test_sorted_by_name(self):
        """Sections are sorted by parameter name."""
        md = generate_parameter_docs()
        positions = [md.index(f"### `{name}`") for name in sorted(PARAMETERS)]
        assert positions == sorted(positions)

    def test_defaults_to_registry(self):
        """Without arguments the full registry is documented."""
        md = generate_parameter_docs()
        for name in PARAMETERS:
            assert f"### `{name}`" in md


class TestExportParameterJson:
    """Tests for export_parameter_json function."""

    def test_structure(self):
        """export_parameter_json returns one entry per parameter."""
        data = export_parameter_json(SMALL_REGISTRY)
        assert [p["name"] for p in data["parameters"]] == ["alpha", "stop"]
        alpha = data["parameters"][0]
        assert alpha == {
            "name": "alpha",
            "type": "float",
            "default": 0.5,
            "description": "Alpha knob",
            "range": [0.0, 1.0],
            "repeatable": False,
        }

    def test_no_range_is_none(self):
        """Parameters without a range export None."""
        data = export_parameter_json(SMALL_REGISTRY)
        assert data["parameters"][1]["range"] is None
        assert data["parameters"][1]["repeatable"] is True

    def test_json_serializable(self):
        """The exported registry can be dumped as JSON."""
        data = export_parameter_json()
        loaded = json.loads(json.dumps(data))
        assert len(loaded["parameters"]) == len(PARAMETERS)
