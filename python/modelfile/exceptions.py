"""
Custom exceptions for Modelfile handling.

This module defines the exception hierarchy:
- ModelfileError: Base exception for all Modelfile errors
- ParseError: Malformed Modelfile text (carries the line number)
- ValidationError: Empty or malformed instruction arguments
- ConflictError: A single-occurrence instruction set more than once
- MissingFieldError: A required instruction is absent at build time
- IncompatibleSchemaError: Structured-data schema version mismatch
"""

from __future__ import annotations

__all__ = [
    "ConflictError",
    "IncompatibleSchemaError",
    "MissingFieldError",
    "ModelfileError",
    "ParseError",
    "ValidationError",
]


def _keyword(field: str) -> str:
    """Return the Modelfile keyword for a builder slot name."""
    return "FROM" if field == "base" else field.upper()


class ModelfileError(Exception):
    """Base exception for all Modelfile errors."""

    pass


class ValidationError(ModelfileError):
    """
    Raised when an instruction argument is empty or structurally invalid.

    This includes empty values, unrecognised message roles and values that
    cannot be rendered back into Modelfile text.
    """

    pass


class ParseError(ModelfileError):
    """
    Raised when Modelfile text cannot be parsed.

    Parameters
    ----------
    line
        1-based line number where the problem was found.
    token
        The offending token (keyword, role, or unexpected text).
    cause
        Human-readable description of the problem.
    """

    def __init__(self, line: int, token: str, cause: str) -> None:
        """
        Initialize the exception.

        Parameters
        ----------
        line
            1-based line number.
        token
            Offending token.
        cause
            Description of the problem.
        """
        super().__init__(f"line {line}: {cause} (at {token!r})")
        self.line = line
        self.token = token
        self.cause = cause


class ConflictError(ModelfileError):
    """
    Raised when a single-occurrence instruction is set more than once.

    Parameters
    ----------
    field
        Name of the instruction slot (e.g. "system").
    value
        The rejected value.
    """

    def __init__(self, field: str, value: str) -> None:
        """
        Initialize the exception.

        Parameters
        ----------
        field
            Instruction slot that is already set.
        value
            The value that could not be applied.
        """
        message = (
            f"Modelfile can only have one {_keyword(field)} instruction, "
            f"refusing to set {value!r}"
        )
        super().__init__(message)
        self.field = field
        self.value = value


class MissingFieldError(ModelfileError):
    """
    Raised when a required instruction was never provided.

    Parameters
    ----------
    field
        Name of the missing instruction slot.
    """

    def __init__(self, field: str) -> None:
        super().__init__(f"Modelfile requires a {_keyword(field)} instruction")
        self.field = field


class IncompatibleSchemaError(ModelfileError):
    """
    Raised when a structured document's schema version is incompatible.

    This typically occurs when there's a major version mismatch.

    Parameters
    ----------
    config_version
        The version string found in the structured document.
    loader_version
        The version string supported by this package.
    """

    def __init__(self, config_version: str, loader_version: str) -> None:
        message = (
            f"Incompatible schema version: document has version {config_version}, "
            f"but loader supports version {loader_version}."
        )
        super().__init__(message)
        self.config_version = config_version
        self.loader_version = loader_version
