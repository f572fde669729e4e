"""
Unit tests for modelfile.loader module.

Tests reading and writing Modelfiles and structured documents on disk.
"""

from __future__ import annotations

import pytest

from modelfile import (
    Base,
    Document,
    Message,
    Parameter,
    ParseError,
    System,
    load_document,
    load_modelfile,
    save_modelfile,
)
from modelfile.serialization import to_json, to_toml

MODELFILE_TEXT = """\
# Mario assistant
FROM llama3.2
PARAMETER temperature 1
SYSTEM \"\"\"
You are Mario from Super Mario Bros.
\"\"\"
MESSAGE user hi
"""


@pytest.fixture
def document():
    return Document(
        [
            Base("llama3.2"),
            Parameter("temperature", "1"),
            System("\nYou are Mario from Super Mario Bros.\n"),
            Message("user", "hi"),
        ]
    )


class TestLoadModelfile:
    """Tests for load_modelfile function."""

    def test_load(self, tmp_path, document):
        """load_modelfile parses a Modelfile from disk."""
        path = tmp_path / "Modelfile"
        path.write_text(MODELFILE_TEXT, encoding="utf-8")
        assert load_modelfile(path) == document

    def test_load_str_path(self, tmp_path, document):
        """Paths may be given as strings."""
        path = tmp_path / "Modelfile"
        path.write_text(MODELFILE_TEXT, encoding="utf-8")
        assert load_modelfile(str(path)) == document

    def test_windows_line_endings(self, tmp_path, document):
        """CRLF line endings are accepted."""
        path = tmp_path / "Modelfile"
        path.write_bytes(MODELFILE_TEXT.replace("\n", "\r\n").encode("utf-8"))
        assert load_modelfile(path) == document

    def test_missing_file(self, tmp_path):
        """A missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_modelfile(tmp_path / "nope")

    def test_invalid_file(self, tmp_path):
        """A malformed file raises ParseError."""
        path = tmp_path / "Modelfile"
        path.write_text("FROM x\nRUN ls\n", encoding="utf-8")
        with pytest.raises(ParseError) as excinfo:
            load_modelfile(path)
        assert excinfo.value.line == 2


class TestLoadDocument:
    """Tests for load_document function."""

    def test_json(self, tmp_path, document):
        """.json files are read as structured documents."""
        path = tmp_path / "model.json"
        path.write_text(to_json(document), encoding="utf-8")
        assert load_document(path) == document

    def test_toml(self, tmp_path, document):
        """.toml files are read as structured documents."""
        path = tmp_path / "model.toml"
        path.write_text(to_toml(document), encoding="utf-8")
        assert load_document(path) == document

    def test_suffix_case_insensitive(self, tmp_path, document):
        """Suffixes are matched case-insensitively."""
        path = tmp_path / "MODEL.JSON"
        path.write_text(to_json(document), encoding="utf-8")
        assert load_document(path) == document

    def test_other_suffix_is_modelfile(self, tmp_path, document):
        """Any other file is parsed as Modelfile text."""
        path = tmp_path / "mario.modelfile"
        path.write_text(MODELFILE_TEXT, encoding="utf-8")
        assert load_document(path) == document


class TestSaveModelfile:
    """Tests for save_modelfile function."""

    def test_save_and_reload(self, tmp_path, document):
        """A saved document loads back unchanged."""
        path = save_modelfile(document, tmp_path / "Modelfile")
        assert path == tmp_path / "Modelfile"
        assert load_modelfile(path) == document

    def test_saved_text(self, tmp_path):
        """The file holds the rendered text."""
        path = save_modelfile(Document([Base("llama3.2")]), tmp_path / "Modelfile")
        assert path.read_text(encoding="utf-8") == "FROM llama3.2\n"

    def test_save_empty_document(self, tmp_path):
        """An empty document writes an empty file."""
        path = save_modelfile(Document(), str(tmp_path / "Modelfile"))
        assert path.read_text(encoding="utf-8") == ""
