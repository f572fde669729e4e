"""
Build a :class:`Document` from parts.

:class:`ModelfileBuilder` stages instructions under the document-level
rules that parsing does not enforce:

- at most one ``FROM``, ``TEMPLATE``, ``SYSTEM`` and ``ADAPTER``
- any number of ``PARAMETER`` and ``MESSAGE`` instructions, kept in order
- repeated ``LICENSE`` texts are joined with a newline
- ``FROM`` is required

Example:
    >>> from modelfile import ModelfileBuilder, parse
    >>> doc = parse("FROM llama3.2\\nPARAMETER temperature 0.2\\n")
    >>> new = doc.build_on().system("You are terse.").parameter("top_k", "20").build()
    >>> print(new.render(), end="")
    FROM llama3.2
    PARAMETER temperature 0.2
    PARAMETER top_k 20
    SYSTEM \"\"\"You are terse.\"\"\"
"""

from __future__ import annotations

import logging

from .document import Document
from .exceptions import ConflictError, MissingFieldError, ValidationError
from .instructions import (
    Adapter,
    Base,
    Instruction,
    License,
    Message,
    MessageRole,
    Parameter,
    System,
    Template,
)

logger = logging.getLogger(__name__)

__all__ = ["ModelfileBuilder"]


class ModelfileBuilder:
    """
    Staging area used to build a :class:`Document`.

    Every setter returns the builder so calls can be chained, and raises as
    soon as a value is rejected. A builder should be discarded after any
    error. Use :meth:`from_document` (or :meth:`Document.build_on`) to start
    from an existing document.
    """

    def __init__(self) -> None:
        """Initialize an empty builder."""
        self._base: Base | None = None
        self._parameters: list[Parameter] = []
        self._template: Template | None = None
        self._system: System | None = None
        self._adapter: Adapter | None = None
        self._license: License | None = None
        self._messages: list[Message] = []

    @classmethod
    def from_document(cls, document: Document) -> ModelfileBuilder:
        """
        Create a builder seeded with a document's instructions.

        Parameters
        ----------
        document
            Parsed or built document.

        Returns
        -------
        ModelfileBuilder
            Builder holding the document's instructions.

        Raises
        ------
        ConflictError
            If the document repeats a single-occurrence instruction, e.g. two
            ``SYSTEM`` lines.
        """
        builder = cls()
        for instruction in document:
            builder.instruction(instruction)
        return builder

    def instruction(self, instruction: Instruction) -> ModelfileBuilder:
        """
        Apply any instruction variant through the matching setter.

        Raises
        ------
        ConflictError
            If the instruction fills a slot that is already set.
        TypeError
            If ``instruction`` is not an instruction variant.
        """
        if isinstance(instruction, Base):
            return self.base(instruction.reference)
        if isinstance(instruction, Parameter):
            return self._add_parameter(instruction)
        if isinstance(instruction, Template):
            return self.template(instruction.body)
        if isinstance(instruction, System):
            return self.system(instruction.prompt)
        if isinstance(instruction, Adapter):
            return self.adapter(instruction.reference)
        if isinstance(instruction, License):
            return self.license(instruction.text)
        if isinstance(instruction, Message):
            return self._add_message(instruction)

        msg = f"Not an instruction: {instruction!r}"
        raise TypeError(msg)

    def _check_free(self, field: str, current: object, value: str) -> None:
        if current is not None:
            raise ConflictError(field, value)

    def base(self, reference: str) -> ModelfileBuilder:
        """Set the base model (``FROM``)."""
        self._check_free("base", self._base, reference)
        self._base = Base(reference)
        return self

    def parameter(self, name: str, value: object) -> ModelfileBuilder:
        """
        Append a parameter.

        Non-string values are converted with ``str()``, so
        ``parameter("num_ctx", 4096)`` is accepted.
        """
        if isinstance(value, bool) or value is None:
            msg = f"PARAMETER {name} value must be a string or number, got {value!r}"
            raise ValidationError(msg)
        return self._add_parameter(Parameter(name=name, value=str(value)))

    def _add_parameter(self, parameter: Parameter) -> ModelfileBuilder:
        self._parameters.append(parameter)
        return self

    def template(self, body: str) -> ModelfileBuilder:
        """Set the prompt template (``TEMPLATE``)."""
        self._check_free("template", self._template, body)
        self._template = Template(body)
        return self

    def system(self, prompt: str) -> ModelfileBuilder:
        """Set the system prompt (``SYSTEM``)."""
        self._check_free("system", self._system, prompt)
        self._system = System(prompt)
        return self

    def adapter(self, reference: str) -> ModelfileBuilder:
        """Set the adapter (``ADAPTER``)."""
        self._check_free("adapter", self._adapter, reference)
        self._adapter = Adapter(reference)
        return self

    def license(self, text: str) -> ModelfileBuilder:
        """Set the license, or append to it on a new line if already set."""
        new = License(text)
        if self._license is not None:
            new = License(f"{self._license.text}\n{new.text}")
        self._license = new
        return self

    def message(self, role: MessageRole | str, content: str) -> ModelfileBuilder:
        """Append a message to the conversation history (``MESSAGE``)."""
        return self._add_message(Message(role=role, content=content))

    def _add_message(self, message: Message) -> ModelfileBuilder:
        self._messages.append(message)
        return self

    def build(self) -> Document:
        """
        Assemble the document.

        Instructions are emitted in canonical order: base, parameters,
        template, system, adapter, license, messages.

        Returns
        -------
        Document
            The built document.

        Raises
        ------
        MissingFieldError
            If no base model was set.
        """
        if self._base is None:
            raise MissingFieldError("base")

        instructions: list[Instruction] = [self._base, *self._parameters]
        for single in (self._template, self._system, self._adapter, self._license):
            if single is not None:
                instructions.append(single)
        instructions.extend(self._messages)

        logger.debug(f"Built Modelfile with {len(instructions)} instructions")
        return Document(instructions)
