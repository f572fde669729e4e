"""
The parsed representation of a Modelfile.

A :class:`Document` is an immutable, ordered sequence of instructions. It
keeps every instruction found in the source, including repeated
single-occurrence instructions such as two ``SYSTEM`` lines; enforcing
uniqueness is the job of :class:`modelfile.builder.ModelfileBuilder`.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .instructions import (
    Adapter,
    Base,
    Instruction,
    License,
    Message,
    Parameter,
    System,
    Template,
)

if TYPE_CHECKING:
    from .builder import ModelfileBuilder

__all__ = ["Document"]


@dataclass(frozen=True)
class Document:
    """
    An ordered collection of Modelfile instructions.

    Parameters
    ----------
    instructions
        Instructions in file order. Any iterable is accepted and stored as
        a tuple.

    Examples
    --------
    >>> doc = Document([Base("llama3.2"), System("You are terse.")])
    >>> doc.system
    'You are terse.'
    """

    instructions: tuple[Instruction, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        """Store the instructions as a tuple."""
        object.__setattr__(self, "instructions", tuple(self.instructions))

    @classmethod
    def parse(cls, text: str) -> Document:
        """Parse Modelfile text. See :func:`modelfile.parser.parse`."""
        from .parser import parse  # noqa: PLC0415

        return parse(text)

    def __iter__(self) -> Iterator[Instruction]:
        return iter(self.instructions)

    def __len__(self) -> int:
        return len(self.instructions)

    def _of_type(self, kind: type) -> Iterable:
        return (i for i in self.instructions if isinstance(i, kind))

    def _last(self, kind: type):
        found = None
        for instruction in self._of_type(kind):
            found = instruction
        return found

    @property
    def base(self) -> str | None:
        """The base model reference (last ``FROM``), if any."""
        found = self._last(Base)
        return found.reference if found else None

    @property
    def parameters(self) -> tuple[Parameter, ...]:
        """All ``PARAMETER`` instructions, in order."""
        return tuple(self._of_type(Parameter))

    @property
    def template(self) -> str | None:
        """The template body (last ``TEMPLATE``), if any."""
        found = self._last(Template)
        return found.body if found else None

    @property
    def system(self) -> str | None:
        """The system prompt (last ``SYSTEM``), if any."""
        found = self._last(System)
        return found.prompt if found else None

    @property
    def adapter(self) -> str | None:
        """The adapter reference (last ``ADAPTER``), if any."""
        found = self._last(Adapter)
        return found.reference if found else None

    @property
    def license(self) -> str | None:
        """The license text (last ``LICENSE``), if any."""
        found = self._last(License)
        return found.text if found else None

    @property
    def messages(self) -> tuple[Message, ...]:
        """All ``MESSAGE`` instructions, in order."""
        return tuple(self._of_type(Message))

    def parameter_values(self, name: str) -> list[str]:
        """
        Return the values of every parameter with the given name.

        Parameters
        ----------
        name
            Parameter name (case-insensitive).

        Returns
        -------
        list[str]
            Raw values in file order.
        """
        return [p.value for p in self.parameters if p.name.lower() == name.lower()]

    def render(self) -> str:
        """Render as Modelfile text. See :func:`modelfile.renderer.render`."""
        from .renderer import render  # noqa: PLC0415

        return render(self)

    def build_on(self) -> ModelfileBuilder:
        """Create a builder seeded with this document's instructions."""
        from .builder import ModelfileBuilder  # noqa: PLC0415

        return ModelfileBuilder.from_document(self)
