"""
Structured-data form of a :class:`Document`.

A document can be exchanged as plain data (and therefore JSON or TOML) as
well as Modelfile text. The structure is a field-tagged record holding an
ordered list of typed instruction entries::

    {
        "schema": "1.0.0",
        "instructions": [
            {"kind": "from", "reference": "llama3.2"},
            {"kind": "parameter", "name": "temperature", "value": "0.2"},
            {"kind": "message", "role": "user", "content": "hello"},
        ],
    }

Entry fields are the instruction's own fields: ``from``/``adapter`` take
``reference``, ``parameter`` takes ``name`` and ``value``, ``template``
takes ``body``, ``system`` takes ``prompt``, ``license`` takes ``text`` and
``message`` takes ``role`` and ``content``.

In TOML the instructions are written as an array of inline tables under
the ``instructions`` key.
"""

from __future__ import annotations

import json
import logging
import tomllib
from collections.abc import Mapping
from dataclasses import fields
from typing import Any

import tomli_w

from .document import Document
from .exceptions import ValidationError
from .instructions import INSTRUCTION_TYPES, Instruction, MessageRole
from .validation import SCHEMA_VERSION, check_schema_version, find_unknown_keys

logger = logging.getLogger(__name__)

__all__ = [
    "document_from_dict",
    "document_to_dict",
    "from_json",
    "from_toml",
    "instruction_from_dict",
    "instruction_to_dict",
    "to_json",
    "to_toml",
]

# Entry kind -> instruction class, e.g. "from" -> Base
KINDS: dict[str, type] = {
    keyword.lower(): cls for keyword, cls in INSTRUCTION_TYPES.items()
}

_KNOWN_TOP_LEVEL = {"schema", "instructions"}


def _field_names(cls: type) -> list[str]:
    return [f.name for f in fields(cls)]


def instruction_to_dict(instruction: Instruction) -> dict[str, str]:
    """
    Convert an instruction to a tagged entry.

    Examples
    --------
    >>> from modelfile.instructions import Parameter
    >>> instruction_to_dict(Parameter("num_ctx", "4096"))
    {'kind': 'parameter', 'name': 'num_ctx', 'value': '4096'}
    """
    entry = {"kind": instruction.keyword.lower()}
    for name in _field_names(type(instruction)):
        value = getattr(instruction, name)
        entry[name] = value.value if isinstance(value, MessageRole) else value
    return entry


def instruction_from_dict(entry: Mapping[str, Any], index: int = 0) -> Instruction:
    """
    Build an instruction from a tagged entry.

    Parameters
    ----------
    entry
        Mapping with a ``kind`` key and the instruction's fields.
    index
        Position of the entry, used in error messages.

    Returns
    -------
    Instruction
        The typed instruction.

    Raises
    ------
    ValidationError
        If the kind is unknown, a field is missing, or a value is invalid.
    """
    where = f"instructions[{index}]"
    if not isinstance(entry, Mapping):
        msg = f"{where} must be a table/object, got {type(entry).__name__}"
        raise ValidationError(msg)

    kind = entry.get("kind")
    cls = KINDS.get(str(kind).lower()) if kind is not None else None
    if cls is None:
        valid = ", ".join(sorted(KINDS))
        msg = f"{where} has unknown kind {kind!r} (expected one of: {valid})"
        raise ValidationError(msg)

    names = _field_names(cls)
    missing = [name for name in names if name not in entry]
    if missing:
        msg = f"{where} ({kind}) is missing field(s): {', '.join(missing)}"
        raise ValidationError(msg)

    unknown = find_unknown_keys(entry, {"kind", *names})
    if unknown:
        logger.warning(f"Ignoring unknown field(s) in {where}: {', '.join(unknown)}")

    return cls(**{name: entry[name] for name in names})


def document_to_dict(document: Document) -> dict[str, Any]:
    """
    Convert a document to plain data.

    Returns
    -------
    dict[str, Any]
        ``{"schema": ..., "instructions": [...]}`` with entries in document
        order.
    """
    return {
        "schema": SCHEMA_VERSION,
        "instructions": [instruction_to_dict(i) for i in document],
    }


def document_from_dict(data: Mapping[str, Any]) -> Document:
    """
    Build a document from plain data.

    A missing ``schema`` key is read as the current version. Unknown
    top-level keys are logged and ignored.

    Parameters
    ----------
    data
        Structured document, e.g. the result of ``json.load``.

    Returns
    -------
    Document
        The document.

    Raises
    ------
    IncompatibleSchemaError
        If the schema's major version is not supported.
    ValidationError
        If the structure or any instruction is invalid.
    """
    if not isinstance(data, Mapping):
        msg = f"Structured document must be a table/object, got {type(data).__name__}"
        raise ValidationError(msg)

    unknown = find_unknown_keys(data, _KNOWN_TOP_LEVEL)
    if unknown:
        logger.warning(
            f"Unknown document keys: {', '.join(unknown)}. These will be ignored."
        )

    try:
        check_schema_version(str(data.get("schema", SCHEMA_VERSION)))
    except ValueError as err:
        raise ValidationError(str(err)) from err

    entries = data.get("instructions", [])
    if not isinstance(entries, list):
        msg = f"'instructions' must be a list, got {type(entries).__name__}"
        raise ValidationError(msg)

    return Document(
        instruction_from_dict(entry, index) for index, entry in enumerate(entries)
    )


def to_json(document: Document, indent: int | None = 2) -> str:
    """Serialize a document as JSON text."""
    return json.dumps(document_to_dict(document), indent=indent)


def from_json(text: str) -> Document:
    """
    Read a document from JSON text.

    Raises
    ------
    json.JSONDecodeError
        If the text is not valid JSON.
    """
    return document_from_dict(json.loads(text))


def to_toml(document: Document) -> str:
    """Serialize a document as TOML text."""
    return tomli_w.dumps(document_to_dict(document))


def from_toml(text: str) -> Document:
    """
    Read a document from TOML text.

    Raises
    ------
    tomllib.TOMLDecodeError
        If the text is not valid TOML.
    """
    return document_from_dict(tomllib.loads(text))
