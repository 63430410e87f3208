"""Definition parser - decodes JSON/YAML text into typed definition documents.

Validates shape only. Placeholder bindings, dependency existence and
ordering are checked by later stages.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_core import ErrorDetails

from statforge.core.definitions.models import (
    AdditiveTransformDef,
    ClampTransformDef,
    ConditionalTransformDef,
    ConstantSourceDef,
    MapSourceDef,
    MapTransformDef,
    MultiplicativeTransformDef,
    ScalingSourceDef,
    StatDocument,
)
from statforge.core.errors import (
    InvalidPlaceholderError,
    MissingFieldError,
    ParseError,
    UnknownVariantError,
)

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = ("json", "yaml")

# pydantic inserts the matched variant tag into error locations
_VARIANT_TAGS = frozenset(
    model.model_fields["type"].default
    for model in (
        ConstantSourceDef,
        ScalingSourceDef,
        MapSourceDef,
        MultiplicativeTransformDef,
        AdditiveTransformDef,
        ClampTransformDef,
        MapTransformDef,
        ConditionalTransformDef,
    )
)
_BRANCH_FIELDS = ("then", "else_then")


def detect_format(file_path: Path | str) -> str:
    """Detect document format from extension.

    Args:
        file_path: Path to definition file

    Returns:
        Format string: "json" or "yaml"

    Raises:
        ValueError: If format cannot be determined

    Example:
        >>> detect_format("stats.json")
        'json'
        >>> detect_format("templates.yml")
        'yaml'
    """
    suffix = Path(file_path).suffix.lower()
    if suffix == ".json":
        return "json"
    elif suffix in [".yaml", ".yml"]:
        return "yaml"
    else:
        raise ValueError(f"Unsupported definition format: {suffix}")


def decode_text(text: str, fmt: str = "json") -> Any:
    """Decode raw JSON or YAML text into plain Python data.

    Args:
        text: Document text
        fmt: "json" or "yaml"

    Returns:
        Decoded data (an empty dict for an empty YAML document)

    Raises:
        ParseError: If the text is not valid for the format
        ValueError: If ``fmt`` is not supported
    """
    if fmt == "json":
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise ParseError(f"Invalid JSON: {e.msg}", location=f"line {e.lineno}") from e
    elif fmt == "yaml":
        try:
            content = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ParseError(f"Invalid YAML: {e}") from e
        # safe_load returns None for empty documents
        return content if content is not None else {}
    else:
        raise ValueError(f"Unsupported format: {fmt} (expected one of {SUPPORTED_FORMATS})")


def parse_document(text: str, fmt: str = "json") -> StatDocument:
    """Parse definition text into a StatDocument.

    Args:
        text: Document text with a ``stats`` and/or ``templates`` section
        fmt: "json" or "yaml"

    Returns:
        Parsed StatDocument

    Raises:
        ParseError: Malformed text or unexpected shape
        UnknownVariantError: Unrecognized source/transform ``type``
        MissingFieldError: Required field absent for a variant
        InvalidPlaceholderError: String field that is neither number nor placeholder

    Example:
        >>> doc = parse_document('{"stats": {"HP": {"sources": [{"type": "constant", "value": 1}]}}}')
        >>> list(doc.stats)
        ['HP']
    """
    return validate_document(decode_text(text, fmt))


def validate_document(data: Any) -> StatDocument:
    """Validate already-decoded data into a StatDocument.

    Args:
        data: Decoded JSON/YAML data

    Returns:
        Parsed StatDocument

    Raises:
        ParseError: See ``parse_document`` for the subclasses raised
    """
    try:
        document = StatDocument.model_validate(data)
    except ValidationError as e:
        for detail in e.errors():
            logger.debug(f"Definition validation error: {detail['type']} at {detail['loc']}")
        raise _translate_error(e.errors()[0]) from e

    logger.debug(
        f"Parsed document with {len(document.stats)} stats, {len(document.templates)} templates"
    )
    return document


def load_document(path: str | Path) -> StatDocument:
    """Load and parse a definition file (.json, .yaml, or .yml).

    Args:
        path: Path to definition file

    Returns:
        Parsed StatDocument

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the extension is not supported
        ParseError: If the content is invalid
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Definition file does not exist: {path}")

    fmt = detect_format(path)
    return parse_document(path.read_text(encoding="utf-8"), fmt)


def dump_document(document: StatDocument, fmt: str = "json") -> str:
    """Serialize a StatDocument back to text.

    Placeholders are written as ``{{name}}`` tokens and unset optional
    fields are omitted, so the output parses back to an equal document.

    Args:
        document: Document to serialize
        fmt: "json" or "yaml"

    Returns:
        Document text
    """
    data = document.model_dump(mode="json", exclude_none=True)
    if fmt == "json":
        return json.dumps(data, indent=2)
    elif fmt == "yaml":
        return yaml.safe_dump(data, sort_keys=False)
    else:
        raise ValueError(f"Unsupported format: {fmt} (expected one of {SUPPORTED_FORMATS})")


def format_location(loc: tuple[int | str, ...]) -> str:
    """Render a pydantic error location as ``templates.BaseHP.sources[0]``."""
    rendered = ""
    for part in loc:
        if isinstance(part, int):
            rendered += f"[{part}]"
        else:
            rendered += f".{part}" if rendered else str(part)
    return rendered


def _strip_variant_tags(loc: tuple[int | str, ...]) -> tuple[int | str, ...]:
    stripped: list[int | str] = []
    for part in loc:
        if (
            part in _VARIANT_TAGS
            and stripped
            and (isinstance(stripped[-1], int) or stripped[-1] in _BRANCH_FIELDS)
        ):
            continue
        stripped.append(part)
    return tuple(stripped)


def _translate_error(detail: ErrorDetails) -> Exception:
    error_type = detail["type"]
    loc = _strip_variant_tags(tuple(detail["loc"]))
    ctx = detail.get("ctx") or {}

    if error_type == "union_tag_invalid":
        expected = tuple(
            tag.strip().strip("'") for tag in str(ctx.get("expected_tags", "")).split(",") if tag
        )
        return UnknownVariantError(
            str(ctx.get("tag", "")), location=format_location(loc), expected=expected
        )
    if error_type == "union_tag_not_found":
        return MissingFieldError(
            str(ctx.get("discriminator", "type")).strip("'"), location=format_location(loc)
        )
    if error_type == "missing":
        return MissingFieldError(str(loc[-1]), location=format_location(loc[:-1]))
    if error_type == "invalid_placeholder":
        return InvalidPlaceholderError(str(ctx.get("value", "")), location=format_location(loc))
    if error_type == "extra_forbidden":
        return ParseError(f"Unexpected field '{loc[-1]}'", location=format_location(loc[:-1]))
    return ParseError(detail["msg"], location=format_location(loc))


__all__ = [
    "SUPPORTED_FORMATS",
    "decode_text",
    "detect_format",
    "dump_document",
    "format_location",
    "load_document",
    "parse_document",
    "validate_document",
]
