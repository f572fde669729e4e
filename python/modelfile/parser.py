"""
Modelfile text parser.

Turns the raw instruction lines recognised by :mod:`modelfile.grammar` into
typed instructions and collects them into a :class:`Document`.

Parsing is permissive about document structure: repeated single-occurrence
instructions (two ``SYSTEM`` lines, say) are kept as written. It is strict
about syntax: unknown keywords, missing arguments, malformed ``PARAMETER``
and ``MESSAGE`` arguments, invalid roles and unterminated blocks all raise
:class:`ParseError`, and no partial document is returned.

Example:
    >>> from modelfile.parser import parse
    >>> doc = parse("FROM llama3.2\\nMESSAGE user hello there\\n")
    >>> doc.messages[0].content
    'hello there'
"""

from __future__ import annotations

import logging

from .document import Document
from .exceptions import ParseError, ValidationError
from .grammar import RawInstruction, scan
from .instructions import (
    BLOCK_MARKER,
    INSTRUCTION_TYPES,
    Instruction,
    Message,
    Parameter,
)

logger = logging.getLogger(__name__)

__all__ = ["parse"]


def _split_head(raw: RawInstruction, what: str) -> tuple[str, str]:
    """Split a ``PARAMETER``/``MESSAGE`` argument into its first word and rest."""
    if raw.head is not None:
        return raw.head, raw.argument

    parts = raw.argument.split(None, 1)
    if len(parts) != 2:  # noqa: PLR2004
        cause = f"{raw.keyword.upper()} requires {what}"
        raise ParseError(raw.line, raw.argument or raw.keyword, cause)
    return parts[0], parts[1].strip()


def _to_instruction(raw: RawInstruction) -> Instruction:
    """Build the typed instruction for one raw instruction line."""
    keyword = raw.keyword.upper()
    cls = INSTRUCTION_TYPES.get(keyword)
    if cls is None:
        raise ParseError(raw.line, raw.keyword, "unknown instruction")

    if not raw.closed:
        cause = f"unterminated {BLOCK_MARKER} block"
        raise ParseError(raw.line, BLOCK_MARKER, cause)

    if not raw.block and not raw.argument:
        raise ParseError(raw.line, raw.keyword, f"{keyword} requires an argument")

    if raw.head is not None and cls not in (Parameter, Message):
        raise ParseError(raw.line, raw.head, f"{keyword} takes a single argument")

    token = raw.argument
    try:
        if cls is Parameter:
            token, value = _split_head(raw, "a name and a value")
            return Parameter(name=token, value=value)
        if cls is Message:
            token, content = _split_head(raw, "a role and content")
            return Message(role=token, content=content)
        return cls(raw.argument)
    except ValidationError as err:
        raise ParseError(raw.line, token, str(err)) from err


def parse(text: str) -> Document:
    """
    Parse Modelfile text into a :class:`Document`.

    Parameters
    ----------
    text
        Modelfile text. Keywords are matched case-insensitively; argument
        content keeps its case.

    Returns
    -------
    Document
        Instructions in source order.

    Raises
    ------
    ParseError
        If the text is not a well-formed Modelfile. The error carries the
        1-based line number and the offending token.

    Examples
    --------
    >>> parse("# only a comment\\n\\n")
    Document(instructions=())
    >>> parse("FOO bar")
    Traceback (most recent call last):
        ...
    modelfile.exceptions.ParseError: line 1: unknown instruction (at 'FOO')
    """
    instructions = [_to_instruction(raw) for raw in scan(text)]
    logger.debug(f"Parsed Modelfile with {len(instructions)} instructions")
    return Document(instructions)
