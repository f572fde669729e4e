"""
Reading and writing Modelfiles on disk.

This module provides:
- load_modelfile: Parse a Modelfile text file
- load_document: Load a document from Modelfile text, JSON or TOML
- save_modelfile: Render a document to a Modelfile text file
"""

from __future__ import annotations

import logging
from pathlib import Path

from .document import Document
from .parser import parse
from .renderer import render
from .serialization import from_json, from_toml

logger = logging.getLogger(__name__)

__all__ = ["load_document", "load_modelfile", "save_modelfile"]


def load_modelfile(path: str | Path) -> Document:
    """
    Load and parse a Modelfile.

    Parameters
    ----------
    path
        Path to the Modelfile (UTF-8 text).

    Returns
    -------
    Document
        Parsed document.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    ParseError
        If the file is not a well-formed Modelfile.

    Examples
    --------
    >>> doc = load_modelfile("llama3.2.Modelfile")
    >>> doc.base
    'llama3.2'
    """
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    document = parse(text)
    logger.debug(f"Loaded {len(document)} instructions from {path}")
    return document


def load_document(path: str | Path) -> Document:
    """
    Load a document, choosing the format from the file suffix.

    ``.json`` and ``.toml`` files are read as structured documents; any
    other file is parsed as Modelfile text.

    Parameters
    ----------
    path
        Path to the document.

    Returns
    -------
    Document
        The loaded document.
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix == ".json":
        return from_json(path.read_text(encoding="utf-8"))
    if suffix == ".toml":
        return from_toml(path.read_text(encoding="utf-8"))
    return load_modelfile(path)


def save_modelfile(document: Document, path: str | Path) -> Path:
    """
    Render a document and write it to ``path``.

    Parameters
    ----------
    document
        Document to write.
    path
        Destination file. Parent directories must exist.

    Returns
    -------
    Path
        The path written to.
    """
    path = Path(path)
    path.write_text(render(document), encoding="utf-8")
    logger.debug(f"Wrote {len(document)} instructions to {path}")
    return path
