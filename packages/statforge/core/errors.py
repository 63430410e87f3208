"""Error taxonomy for stat definition compilation.

Every failure raised while parsing, substituting or compiling stat
definitions derives from ``StatConfigError``. Errors raised by the
resolution engine (``statforge.core.engine.errors``) are a separate
hierarchy and are never wrapped by the compiler layer.
"""

from __future__ import annotations


class StatConfigError(Exception):
    """Base class for stat configuration errors."""


class ParseError(StatConfigError):
    """Raised when definition text is malformed or has an unexpected shape.

    Attributes:
        reason: What specifically went wrong.
        location: Dotted path to the offending element (may be empty).
    """

    def __init__(self, reason: str, *, location: str = "") -> None:
        self.reason = reason
        self.location = location
        message = f"{reason} (at {location})" if location else reason
        super().__init__(message)


class UnknownVariantError(ParseError):
    """Raised when a source/transform object carries an unrecognized ``type`` tag.

    Attributes:
        tag: The offending tag value.
        location: Where the tag was found (e.g. ``templates.BaseHP.sources[0]``).
    """

    def __init__(self, tag: str, *, location: str = "", expected: tuple[str, ...] = ()) -> None:
        self.tag = tag
        self.expected = expected
        reason = f"Unknown variant type '{tag}'"
        if expected:
            reason += f" (expected one of: {', '.join(expected)})"
        super().__init__(reason, location=location)


class MissingFieldError(ParseError):
    """Raised when a required field is absent for a given variant.

    Attributes:
        field: Name of the missing field.
        location: Object that is missing the field.
    """

    def __init__(self, field: str, *, location: str = "") -> None:
        self.field = field
        super().__init__(f"Missing required field '{field}'", location=location)


class InvalidPlaceholderError(StatConfigError):
    """Raised when a string field is neither a number nor a ``{{name}}`` token.

    Attributes:
        value: The offending raw text.
        location: Where the value was found (may be empty).
    """

    def __init__(self, value: str, *, location: str = "") -> None:
        self.value = value
        self.location = location
        message = f"Invalid placeholder {value!r}: expected a number or '{{{{name}}}}'"
        if location:
            message += f" (at {location})"
        super().__init__(message)


class UnknownTemplateError(StatConfigError, KeyError):
    """Raised when a template is not found in the registry."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"Unknown template: {self.name}"


class MissingParameterError(StatConfigError):
    """Raised when a placeholder has no binding in the parameter map.

    Attributes:
        parameter: Name of the unbound parameter.
        owner: Template or stat whose definition referenced it (may be empty).
    """

    def __init__(self, parameter: str, *, owner: str = "") -> None:
        self.parameter = parameter
        self.owner = owner
        message = f"Missing parameter '{parameter}'"
        if owner:
            message += f" for '{owner}'"
        super().__init__(message)


class InvalidDefinitionError(StatConfigError):
    """Raised when a definition cannot be turned into a concrete instance.

    Attributes:
        reason: What specifically went wrong.
        owner: Template or stat being compiled (may be empty).
    """

    def __init__(self, reason: str, *, owner: str = "") -> None:
        self.reason = reason
        self.owner = owner
        parts = [f"Invalid definition: {reason}"]
        if owner:
            parts.append(f"owner={owner}")
        super().__init__(" | ".join(parts))


__all__ = [
    "InvalidDefinitionError",
    "InvalidPlaceholderError",
    "MissingFieldError",
    "MissingParameterError",
    "ParseError",
    "StatConfigError",
    "UnknownTemplateError",
    "UnknownVariantError",
]
