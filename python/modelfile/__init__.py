"""
Parser, builder and renderer for Ollama Modelfiles.

This package provides:
- parse: Modelfile text -> Document (ordered, typed instructions)
- render: Document -> Modelfile text (round-trips through parse)
- ModelfileBuilder: build or modify a Document under Modelfile rules
- JSON/TOML exchange of documents and file helpers
- A registry of known model parameters with documentation

Example:
    >>> from modelfile import parse, render
    >>> doc = parse("FROM llama3.2\\nSYSTEM You are terse.\\n")
    >>> updated = doc.build_on().parameter("temperature", 0.2).build()
    >>> render(updated)
    'FROM llama3.2\\nPARAMETER temperature 0.2\\nSYSTEM \"\"\"You are terse.\"\"\"\\n'
"""

from __future__ import annotations

from .builder import ModelfileBuilder
from .docs import export_parameter_json, generate_parameter_docs
from .document import Document
from .exceptions import (
    ConflictError,
    IncompatibleSchemaError,
    MissingFieldError,
    ModelfileError,
    ParseError,
    ValidationError,
)
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
from .loader import load_document, load_modelfile, save_modelfile
from .parameters import PARAMETERS, ParameterInfo, check_parameters
from .parser import parse
from .renderer import render
from .serialization import (
    document_from_dict,
    document_to_dict,
    from_json,
    from_toml,
    to_json,
    to_toml,
)


def build_on(document: Document) -> ModelfileBuilder:
    """Create a builder seeded with ``document``'s instructions."""
    return ModelfileBuilder.from_document(document)


__all__ = [
    "PARAMETERS",
    "Adapter",
    "Base",
    "ConflictError",
    "Document",
    "IncompatibleSchemaError",
    "Instruction",
    "License",
    "Message",
    "MessageRole",
    "MissingFieldError",
    "ModelfileBuilder",
    "ModelfileError",
    "Parameter",
    "ParameterInfo",
    "ParseError",
    "System",
    "Template",
    "ValidationError",
    "build_on",
    "check_parameters",
    "document_from_dict",
    "document_to_dict",
    "export_parameter_json",
    "from_json",
    "from_toml",
    "generate_parameter_docs",
    "load_document",
    "load_modelfile",
    "parse",
    "render",
    "save_modelfile",
    "to_json",
    "to_toml",
]
