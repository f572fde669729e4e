"""
Documentation generation from the known parameter registry.

This module provides:
- generate_parameter_docs: Generate markdown documentation
- export_parameter_json: Export to JSON-ready data for tooling
"""

from __future__ import annotations

from typing import Any

from .parameters import PARAMETERS, ParameterInfo

__all__ = ["export_parameter_json", "generate_parameter_docs"]


def generate_parameter_docs(
    parameters: dict[str, ParameterInfo] | None = None,
) -> str:
    """Generate markdown documentation for Modelfile parameters.

    Parameters
    ----------
    parameters : dict[str, ParameterInfo] | None
        Registry to document. Defaults to :data:`PARAMETERS`.

    Returns
    -------
    str
        Markdown-formatted documentation

    Examples
    --------
    >>> md = generate_parameter_docs()
    >>> "### `temperature`" in md
    True
    """
    if parameters is None:
        parameters = PARAMETERS

    lines = ["# Modelfile parameters", ""]
    lines.append(
        "Set with `PARAMETER <name> <value>`. Unknown names are accepted by the "
        "parser and reported by `check_parameters`."
    )
    lines.append("")

    for name in sorted(parameters):
        info = parameters[name]
        lines.append(f"### `{name}`")
        lines.append("")
        lines.append(info.description)
        lines.append("")
        lines.append(f"- **Type**: {info.type.__name__}")
        default = "-" if info.default is None else f"`{info.default}`"
        lines.append(f"- **Default**: {default}")
        if info.range is not None:
            min_val, max_val = info.range
            lines.append(f"- **Valid range**: [{min_val}, {max_val}]")
        if info.repeatable:
            lines.append("- **Repeatable**: yes")
        lines.append("")

    return "\n".join(lines)


def export_parameter_json(
    parameters: dict[str, ParameterInfo] | None = None,
) -> dict[str, Any]:
    """Export parameter metadata as JSON-serializable data.

    Returns
    -------
    dict
        JSON-serializable dict with structure:
        {
            "parameters": [
                {
                    "name": str,
                    "type": str,
                    "default": Any,
                    "description": str,
                    "range": [min, max] | None,
                    "repeatable": bool,
                }
            ]
        }
    """
    if parameters is None:
        parameters = PARAMETERS

    return {
        "parameters": [
            {
                "name": info.name,
                "type": info.type.__name__,
                "default": info.default,
                "description": info.description,
                "range": list(info.range) if info.range else None,
                "repeatable": info.repeatable,
            }
            for info in sorted(parameters.values(), key=lambda p: p.name)
        ]
    }
