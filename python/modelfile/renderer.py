"""
Render a :class:`Document` back to Modelfile text.

Every instruction is written on its own as ``KEYWORD argument``, in
document order. Arguments containing whitespace (spaces, tabs or newlines)
are wrapped in a triple-quoted block so that they parse back verbatim;
single-token arguments are written inline. The output always parses back
to an equal document.
"""

from __future__ import annotations

import logging

from .document import Document
from .instructions import (
    BLOCK_MARKER,
    Adapter,
    Base,
    Instruction,
    License,
    Message,
    Parameter,
    System,
    Template,
)

logger = logging.getLogger(__name__)

__all__ = ["format_argument", "render", "render_instruction"]


def format_argument(value: str) -> str:
    """
    Format an argument inline, or as a block if it contains whitespace.

    Examples
    --------
    >>> format_argument("llama3.2")
    'llama3.2'
    >>> format_argument("You are terse.")
    '\"\"\"You are terse.\"\"\"'
    """
    if any(char.isspace() for char in value):
        return f"{BLOCK_MARKER}{value}{BLOCK_MARKER}"
    return value


def render_instruction(instruction: Instruction) -> str:
    """
    Render a single instruction, without a trailing newline.

    Parameters
    ----------
    instruction
        Any instruction variant.

    Returns
    -------
    str
        Modelfile text for the instruction.
    """
    if isinstance(instruction, Parameter):
        argument = f"{instruction.name} {format_argument(instruction.value)}"
    elif isinstance(instruction, Message):
        argument = (
            f"{instruction.role.value} {format_argument(instruction.content)}"
        )
    elif isinstance(instruction, Base | Adapter):
        argument = format_argument(instruction.reference)
    elif isinstance(instruction, Template):
        argument = format_argument(instruction.body)
    elif isinstance(instruction, System):
        argument = format_argument(instruction.prompt)
    elif isinstance(instruction, License):
        argument = format_argument(instruction.text)
    else:
        msg = f"Cannot render {type(instruction).__name__!r} as an instruction"
        raise TypeError(msg)

    return f"{instruction.keyword} {argument}"


def render(document: Document) -> str:
    """
    Render a document as Modelfile text.

    Parameters
    ----------
    document
        Parsed or built document.

    Returns
    -------
    str
        Modelfile text, one instruction per line (blocks may span lines),
        ending with a newline. An empty document renders to ``""``.

    Examples
    --------
    >>> render(Document([Base("llama3.2")]))
    'FROM llama3.2\\n'
    """
    text = "".join(f"{render_instruction(i)}\n" for i in document)
    logger.debug(f"Rendered {len(document)} instructions")
    return text
