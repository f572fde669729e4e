"""
Instruction variants of a Modelfile.

Each instruction kind is an independent frozen dataclass and
:data:`Instruction` is the closed union over them. Consumers dispatch on the
concrete type rather than relying on a shared base class:

- Base: ``FROM <reference>``
- Parameter: ``PARAMETER <name> <value>``
- Template: ``TEMPLATE <body>``
- System: ``SYSTEM <prompt>``
- Adapter: ``ADAPTER <reference>``
- License: ``LICENSE <text>``
- Message: ``MESSAGE <role> <content>``

Example:
    >>> from modelfile.instructions import Message, MessageRole
    >>> Message(role="User", content="hello there").role
    <MessageRole.USER: 'user'>
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar

from .exceptions import ValidationError
from .parameters import coerce_parameter_value

__all__ = [
    "BLOCK_MARKER",
    "INSTRUCTION_TYPES",
    "Adapter",
    "Base",
    "Instruction",
    "License",
    "Message",
    "MessageRole",
    "Parameter",
    "System",
    "Template",
    "parse_role",
]

BLOCK_MARKER = '"""'


class MessageRole(str, Enum):
    """Speaker of a ``MESSAGE`` instruction."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


def parse_role(role: MessageRole | str) -> MessageRole:
    """
    Convert a role name into a :class:`MessageRole`.

    Parameters
    ----------
    role
        Role enumerant or its name (case-insensitive).

    Returns
    -------
    MessageRole
        The matching role.

    Raises
    ------
    ValidationError
        If the name is not a recognised role.
    """
    if isinstance(role, MessageRole):
        return role
    try:
        return MessageRole(str(role).lower())
    except ValueError as err:
        valid = ", ".join(r.value for r in MessageRole)
        msg = f"Invalid message role {role!r} (expected one of: {valid})"
        raise ValidationError(msg) from err


def _require_text(keyword: str, field: str, value: Any) -> None:
    """Check that an instruction argument is a renderable, non-empty string."""
    if not isinstance(value, str):
        msg = f"{keyword} {field} must be a string, got {type(value).__name__}"
        raise ValidationError(msg)
    if not value.strip():
        msg = f"{keyword} {field} must not be empty"
        raise ValidationError(msg)
    if BLOCK_MARKER in value:
        msg = f"{keyword} {field} must not contain {BLOCK_MARKER}"
        raise ValidationError(msg)
    if "\r" in value:
        msg = f"{keyword} {field} must not contain carriage returns"
        raise ValidationError(msg)


@dataclass(frozen=True)
class Base:
    """
    The model to derive from (``FROM``).

    Either a ``<model>:<tag>`` identifier, a GGUF file, a directory of
    safetensors files or a blob digest.
    """

    reference: str

    keyword: ClassVar[str] = "FROM"

    def __post_init__(self) -> None:
        """Validate the reference."""
        _require_text(self.keyword, "reference", self.reference)


@dataclass(frozen=True)
class Parameter:
    """
    A model parameter (``PARAMETER <name> <value>``).

    Attributes
    ----------
    name
        Parameter name, a single token such as ``temperature``
    value
        Raw parameter value as written in the Modelfile
    """

    name: str
    value: str

    keyword: ClassVar[str] = "PARAMETER"

    def __post_init__(self) -> None:
        """Validate name and value."""
        _require_text(self.keyword, "name", self.name)
        _require_text(self.keyword, "value", self.value)
        if len(self.name.split()) != 1 or self.name != self.name.strip():
            msg = f"PARAMETER name must be a single token, got {self.name!r}"
            raise ValidationError(msg)

    def typed_value(self) -> Any:
        """
        Return the value converted to the parameter's known type.

        Unknown parameters, and values that do not convert, are returned as
        the raw string.
        """
        try:
            return coerce_parameter_value(self.name, self.value)
        except ValueError:
            return self.value


@dataclass(frozen=True)
class Template:
    """The prompt template (``TEMPLATE``), a Go template body."""

    body: str

    keyword: ClassVar[str] = "TEMPLATE"

    def __post_init__(self) -> None:
        """Validate the body."""
        _require_text(self.keyword, "body", self.body)


@dataclass(frozen=True)
class System:
    """The system prompt (``SYSTEM``)."""

    prompt: str

    keyword: ClassVar[str] = "SYSTEM"

    def __post_init__(self) -> None:
        """Validate the prompt."""
        _require_text(self.keyword, "prompt", self.prompt)


@dataclass(frozen=True)
class Adapter:
    """A LoRA adapter to apply to the base model (``ADAPTER``)."""

    reference: str

    keyword: ClassVar[str] = "ADAPTER"

    def __post_init__(self) -> None:
        """Validate the reference."""
        _require_text(self.keyword, "reference", self.reference)


@dataclass(frozen=True)
class License:
    """The legal license text (``LICENSE``)."""

    text: str

    keyword: ClassVar[str] = "LICENSE"

    def __post_init__(self) -> None:
        """Validate the text."""
        _require_text(self.keyword, "text", self.text)


@dataclass(frozen=True)
class Message:
    """
    A message of the conversation history (``MESSAGE <role> <content>``).

    Attributes
    ----------
    role
        Speaker of the message. Role names are accepted case-insensitively
        and stored as :class:`MessageRole`.
    content
        Message text
    """

    role: MessageRole
    content: str

    keyword: ClassVar[str] = "MESSAGE"

    def __post_init__(self) -> None:
        """Coerce the role and validate the content."""
        object.__setattr__(self, "role", parse_role(self.role))
        _require_text(self.keyword, "content", self.content)


Instruction = Base | Parameter | Template | System | Adapter | License | Message

# Keyword lookup used by the parser
INSTRUCTION_TYPES: dict[str, type] = {
    cls.keyword: cls
    for cls in (Base, Parameter, Template, System, Adapter, License, Message)
}
