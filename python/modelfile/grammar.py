"""
Grammar layer for Modelfile text.

The grammar recognises instruction lines, comments, blank lines and
triple-quoted multi-line blocks, and produces :class:`RawInstruction`
records. It does not know which keywords exist or how their arguments are
shaped; that is decided by :mod:`modelfile.parser`.

The grammar is line oriented:

- ``# ...`` lines (optionally indented) and blank lines are skipped
- an instruction is a keyword followed by the rest of the line, or by a
  ``\"\"\"`` block that may span several lines
- ``PARAMETER`` and ``MESSAGE`` may put one word (name or role) between the
  keyword and the block, e.g. ``MESSAGE user \"\"\"...\"\"\"``
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from lark import Lark, Token, Transformer
from lark.exceptions import UnexpectedCharacters, UnexpectedInput, UnexpectedToken

from .exceptions import ParseError

logger = logging.getLogger(__name__)

__all__ = ["RawInstruction", "scan"]

MODELFILE_GRAMMAR = r'''
start: _line*

_line: _BLANK
     | _COMMENT
     | instruction

instruction: _INDENT? KEYWORD (HEAD? (BLOCK _EOL | UNCLOSED) | TEXT _EOL | _EOL)

// any word at the start of a line; unknown keywords are reported by the parser
KEYWORD: /[^\s#][^\s]*/

// a closed block, an opening marker with no closing marker, or the word
// that precedes a block
BLOCK.3: /[ \t]+"""(?:.|\n)*?"""(?!")[ \t]*/
UNCLOSED.2: /[ \t]+"""(?:.|\n)*/
HEAD.2: /[ \t]+[^ \t\n]+(?=[ \t]+""")/
TEXT: /[ \t]+[^\n]*/

_BLANK.2: /[ \t]*\n/
_COMMENT.2: /[ \t]*#[^\n]*\n/
_INDENT: /[ \t]+/
_EOL: /\n/
'''

_cached_parser: Lark | None = None


def _get_parser() -> Lark:
    """Get the cached Modelfile parser."""
    global _cached_parser
    if _cached_parser is None:
        _cached_parser = Lark(MODELFILE_GRAMMAR, parser="lalr")
    return _cached_parser


@dataclass(frozen=True)
class RawInstruction:
    """
    An instruction line as recognised by the grammar.

    Attributes
    ----------
    keyword
        Keyword exactly as written
    line
        1-based line number of the keyword
    argument
        Argument text. Trimmed for single-line arguments, verbatim (markers
        removed) for blocks, empty when the keyword stands alone.
    head
        Word written between the keyword and a block, if any
    block
        Whether the argument was written as a triple-quoted block
    closed
        False when a block was opened but never closed
    """

    keyword: str
    line: int
    argument: str
    head: str | None = None
    block: bool = False
    closed: bool = True


class InstructionTransformer(Transformer):
    """Converts the parse tree into a list of :class:`RawInstruction`."""

    def start(self, items):
        return list(items)

    def instruction(self, items):
        keyword: Token = items[0]
        head = None
        argument = ""
        block = False
        closed = True

        for token in items[1:]:
            if token.type == "HEAD":
                head = token.strip()
            elif token.type == "BLOCK":
                block = True
                argument = token.strip()[3:-3]
            elif token.type == "UNCLOSED":
                block = True
                closed = False
                argument = token.strip()[3:]
            elif token.type == "TEXT":
                argument = token.strip()

        return RawInstruction(
            keyword=str(keyword),
            line=keyword.line,
            argument=argument,
            head=head,
            block=block,
            closed=closed,
        )


def _offending_text(text: str, line: int, column: int) -> str:
    """Return the whitespace-delimited run of text at a line/column position."""
    lines = text.split("\n")
    if not 1 <= line <= len(lines):
        return ""
    rest = lines[line - 1][max(column - 1, 0) :].split()
    return rest[0] if rest else ""


def scan(text: str) -> list[RawInstruction]:
    """
    Recognise the instructions of a Modelfile.

    Parameters
    ----------
    text
        Modelfile text.

    Returns
    -------
    list[RawInstruction]
        Instructions in source order. Comments and blank lines are dropped.

    Raises
    ------
    ParseError
        If part of the input does not match the grammar.
    """
    text = text.replace("\r\n", "\n")
    if not text.endswith("\n"):
        text += "\n"

    try:
        tree = _get_parser().parse(text)
    except UnexpectedCharacters as err:
        token = _offending_text(text, err.line, err.column) or err.char
        raise ParseError(err.line, token, "unexpected text") from err
    except UnexpectedToken as err:
        token = str(err.token).strip() or err.token.type
        raise ParseError(err.line, token, "unexpected token") from err
    except UnexpectedInput as err:
        line = max(err.line, 1) if isinstance(err.line, int) else 1
        raise ParseError(line, "", "unexpected end of input") from err

    raw = InstructionTransformer().transform(tree)
    logger.debug(f"Scanned {len(raw)} instruction lines")
    return raw
