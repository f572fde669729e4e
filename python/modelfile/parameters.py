"""
Registry of known Modelfile parameters.

This module provides structured parameter metadata that can be:
- Used to convert raw ``PARAMETER`` values into typed values
- Used to check the parameters of a parsed Modelfile (types, ranges)
- Aggregated into documentation automatically (see :mod:`modelfile.docs`)

Checking is advisory: unknown parameters and bad values are reported as
messages, never raised, because parsing and building only enforce the
syntax of the file.

Example:
    >>> from modelfile import parse
    >>> from modelfile.parameters import check_parameters
    >>> doc = parse("FROM llama3.2\\nPARAMETER temperature 7.5\\n")
    >>> check_parameters(doc)
    ["Parameter 'temperature' value 7.5 is outside valid range [0.0, 2.0]"]
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .document import Document

logger = logging.getLogger(__name__)

__all__ = [
    "PARAMETERS",
    "ParameterInfo",
    "check_parameters",
    "coerce_parameter_value",
]


@dataclass(frozen=True)
class ParameterInfo:
    """Metadata for a single model parameter.

    Attributes
    ----------
    name : str
        Parameter name as written after ``PARAMETER``
    type : type
        Python type of the value (int, float or str)
    default : Any
        Default value used by the model runner
    description : str
        Human-readable description
    range : tuple[float, float] | None
        Valid range (min, max). Values outside this range are reported.
    repeatable : bool
        Whether the parameter may be given more than once
    """

    name: str
    type: type
    default: Any
    description: str
    range: tuple[float, float] | None = None
    repeatable: bool = False


PARAMETERS: dict[str, ParameterInfo] = {
    p.name: p
    for p in (
        ParameterInfo(
            name="mirostat",
            type=int,
            default=0,
            description=(
                "Enable Mirostat sampling for controlling perplexity "
                "(0 = disabled, 1 = Mirostat, 2 = Mirostat 2.0)."
            ),
            range=(0, 2),
        ),
        ParameterInfo(
            name="mirostat_eta",
            type=float,
            default=0.1,
            description=(
                "How quickly the algorithm responds to feedback from the "
                "generated text. Lower values adjust more slowly."
            ),
        ),
        ParameterInfo(
            name="mirostat_tau",
            type=float,
            default=5.0,
            description=(
                "Balance between coherence and diversity of the output. "
                "Lower values give more focused text."
            ),
        ),
        ParameterInfo(
            name="num_ctx",
            type=int,
            default=2048,
            description="Size of the context window used to generate the next token.",
            range=(1, 2**31 - 1),
        ),
        ParameterInfo(
            name="repeat_last_n",
            type=int,
            default=64,
            description=(
                "How far back the model looks to prevent repetition "
                "(0 = disabled, -1 = num_ctx)."
            ),
            range=(-1, 2**31 - 1),
        ),
        ParameterInfo(
            name="repeat_penalty",
            type=float,
            default=1.1,
            description=(
                "How strongly to penalize repetitions. Higher values penalize "
                "more strongly."
            ),
        ),
        ParameterInfo(
            name="temperature",
            type=float,
            default=0.8,
            description=(
                "Temperature of the model. Higher values make answers more "
                "creative."
            ),
            range=(0.0, 2.0),
        ),
        ParameterInfo(
            name="seed",
            type=int,
            default=0,
            description=(
                "Random number seed. A fixed seed makes the model generate the "
                "same text for the same prompt."
            ),
        ),
        ParameterInfo(
            name="stop",
            type=str,
            default=None,
            description=(
                "Stop sequence. Generation stops when the pattern is produced. "
                "May be given several times."
            ),
            repeatable=True,
        ),
        ParameterInfo(
            name="tfs_z",
            type=float,
            default=1.0,
            description=(
                "Tail free sampling, reduces the impact of less probable "
                "tokens. 1.0 disables it."
            ),
        ),
        ParameterInfo(
            name="num_predict",
            type=int,
            default=128,
            description=(
                "Maximum number of tokens to predict "
                "(-1 = infinite generation, -2 = fill context)."
            ),
            range=(-2, 2**31 - 1),
        ),
        ParameterInfo(
            name="top_k",
            type=int,
            default=40,
            description=(
                "Reduces the probability of generating nonsense. Higher values "
                "give more diverse answers."
            ),
            range=(0, 2**31 - 1),
        ),
        ParameterInfo(
            name="top_p",
            type=float,
            default=0.9,
            description=(
                "Works together with top_k. Higher values lead to more diverse "
                "text."
            ),
            range=(0.0, 1.0),
        ),
        ParameterInfo(
            name="min_p",
            type=float,
            default=0.0,
            description=(
                "Minimum probability for a token to be considered, relative to "
                "the probability of the most likely token."
            ),
            range=(0.0, 1.0),
        ),
    )
}


def coerce_parameter_value(name: str, value: str) -> Any:
    """Convert a raw parameter value to the parameter's known type.

    Parameters
    ----------
    name : str
        Parameter name (case-insensitive)
    value : str
        Raw value as written in the Modelfile

    Returns
    -------
    Any
        The converted value, or ``value`` unchanged for unknown parameters

    Raises
    ------
    ValueError
        If the value cannot be converted to the parameter's type

    Examples
    --------
    >>> coerce_parameter_value("num_ctx", "4096")
    4096
    >>> coerce_parameter_value("custom", "x")
    'x'
    """
    info = PARAMETERS.get(name.lower())
    if info is None:
        return value
    try:
        return info.type(value.strip())
    except ValueError as err:
        msg = (
            f"Parameter '{name}' value {value!r} is not a valid "
            f"{info.type.__name__}"
        )
        raise ValueError(msg) from err


def check_parameters(document: Document) -> list[str]:
    """Check a document's parameters against the known parameter registry.

    Parameters
    ----------
    document : Document
        Parsed or built Modelfile document

    Returns
    -------
    list[str]
        List of problem messages (empty if every parameter is known and valid)
    """
    errors = []
    seen: set[str] = set()

    for parameter in document.parameters:
        name = parameter.name.lower()
        info = PARAMETERS.get(name)
        if info is None:
            errors.append(f"Unknown parameter '{parameter.name}'")
            continue

        if name in seen and not info.repeatable:
            errors.append(f"Parameter '{parameter.name}' is set more than once")
        seen.add(name)

        try:
            value = coerce_parameter_value(name, parameter.value)
        except ValueError as err:
            errors.append(str(err))
            continue

        if info.range is not None:
            min_val, max_val = info.range
            if value < min_val or value > max_val:
                errors.append(
                    f"Parameter '{parameter.name}' value {value} is outside "
                    f"valid range [{min_val}, {max_val}]"
                )

    for message in errors:
        logger.warning(message)

    return errors
