"""
Validation helpers for structured (JSON/TOML) Modelfile documents.

This module provides:
- Schema version checking with semver compatibility
- Unknown key detection for structured entries
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from .exceptions import IncompatibleSchemaError

logger = logging.getLogger(__name__)

__all__ = [
    "SCHEMA_VERSION",
    "check_schema_version",
    "find_unknown_keys",
    "parse_semver",
]

SCHEMA_VERSION = "1.0.0"
"""Version of the structured document schema written by this package."""


def parse_semver(version: str) -> tuple[int, int, int]:
    """
    Split a ``MAJOR.MINOR.PATCH`` version string into integers.

    Parameters
    ----------
    version
        Version string.

    Returns
    -------
    tuple[int, int, int]
        ``(major, minor, patch)``

    Raises
    ------
    ValueError
        If the string does not have three integer components.

    Examples
    --------
    >>> parse_semver("1.4.0")
    (1, 4, 0)
    """
    parts = str(version).split(".")
    if len(parts) != 3:  # noqa: PLR2004
        msg = f"Invalid semver format: '{version}' (expected 'MAJOR.MINOR.PATCH')"
        raise ValueError(msg)

    try:
        major, minor, patch = (int(part) for part in parts)
    except ValueError as err:
        msg = f"Invalid semver format: '{version}' (non-integer component)"
        raise ValueError(msg) from err

    return major, minor, patch


def check_schema_version(
    document_version: str, loader_version: str = SCHEMA_VERSION
) -> None:
    """
    Check that a structured document can be read by this package.

    A different major version is incompatible. A newer minor version is
    read anyway, with a warning, since it can only add optional fields.

    Parameters
    ----------
    document_version
        Version string found in the document.
    loader_version
        Version string supported by the reader.

    Raises
    ------
    IncompatibleSchemaError
        If the major versions differ.
    ValueError
        If either version string is not valid semver.
    """
    doc_major, doc_minor, _ = parse_semver(document_version)
    loader_major, loader_minor, _ = parse_semver(loader_version)

    if doc_major != loader_major:
        raise IncompatibleSchemaError(document_version, loader_version)

    if doc_minor > loader_minor:
        logger.warning(
            f"Document schema version {document_version} is newer than "
            f"loader version {loader_version}. Unknown fields will be ignored."
        )


def find_unknown_keys(data: Mapping[str, object], known_keys: Iterable[str]) -> list[str]:
    """
    List the keys of ``data`` that are not in ``known_keys``, sorted.

    Examples
    --------
    >>> find_unknown_keys({"kind": "from", "reference": "x", "extra": 1}, {"kind", "reference"})
    ['extra']
    """
    return sorted(set(data) - set(known_keys))
