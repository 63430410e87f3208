"""Literal-or-placeholder numeric fields.

Every numeric field of a definition is classified once, at parse time, into
either a literal ``float`` or a ``Placeholder``. Later stages never re-parse
strings, so a literal can't be mistaken for a lookup key or vice versa.
"""

from __future__ import annotations

import re
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, PlainSerializer
from pydantic_core import PydanticCustomError

from statforge.core.errors import InvalidPlaceholderError

PLACEHOLDER_PATTERN = re.compile(r"^\{\{\s*([A-Za-z_][A-Za-z0-9_]*)\s*\}\}$")
_NUMBER_PATTERN = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$")


class Placeholder(BaseModel):
    """Whole-field reference to a named parameter, written ``{{name}}``.

    Example:
        >>> Placeholder(name="level").token
        '{{level}}'
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(pattern=r"^[A-Za-z_][A-Za-z0-9_]*$")

    @property
    def token(self) -> str:
        """Placeholder as written in definition text."""
        return "{{" + self.name + "}}"

    def __str__(self) -> str:
        return self.token


def parse_placeholder(text: str) -> Placeholder:
    """Parse an exact ``{{identifier}}`` token.

    Args:
        text: Raw field text

    Returns:
        Placeholder naming the referenced parameter

    Raises:
        InvalidPlaceholderError: If text is not exactly one placeholder token

    Example:
        >>> parse_placeholder("{{ base_hp }}").name
        'base_hp'
    """
    match = PLACEHOLDER_PATTERN.match(text)
    if match is None:
        raise InvalidPlaceholderError(text)
    return Placeholder(name=match.group(1))


def classify_value(raw: Any) -> float | Placeholder:
    """Classify a raw field value as a literal or a placeholder.

    Numbers (and strings holding a plain number) become floats; strings of
    the form ``{{name}}`` become placeholders.

    Args:
        raw: Value as decoded from JSON/YAML

    Returns:
        Literal float or Placeholder

    Raises:
        InvalidPlaceholderError: If a string is neither a number nor a placeholder
        TypeError: If the value is not a number or string
    """
    if isinstance(raw, Placeholder):
        return raw
    if isinstance(raw, bool):
        raise TypeError(f"Expected a number or placeholder, got boolean {raw!r}")
    if isinstance(raw, int | float):
        return float(raw)
    if isinstance(raw, str):
        if _NUMBER_PATTERN.match(raw):
            return float(raw)
        return parse_placeholder(raw)
    raise TypeError(f"Expected a number or placeholder, got {type(raw).__name__}")


def _validate_param_value(raw: Any) -> float | Placeholder:
    try:
        return classify_value(raw)
    except InvalidPlaceholderError as e:
        raise PydanticCustomError(
            "invalid_placeholder",
            "Invalid placeholder '{value}'",
            {"value": e.value},
        ) from e
    except TypeError as e:
        raise PydanticCustomError("param_value_type", str(e)) from e


def _serialize_param_value(value: float | Placeholder) -> float | str:
    if isinstance(value, Placeholder):
        return value.token
    return value


ParamValue = Annotated[
    float | Placeholder,
    BeforeValidator(_validate_param_value),
    PlainSerializer(_serialize_param_value),
]
"""Numeric definition field: a literal float or a ``Placeholder``."""


__all__ = [
    "PLACEHOLDER_PATTERN",
    "ParamValue",
    "Placeholder",
    "classify_value",
    "parse_placeholder",
]
