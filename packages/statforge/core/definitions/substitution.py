"""Parameter substitution - binds placeholders to caller-supplied values.

Substitution walks every numeric field of a definition, including nested
conditional branches, and returns a copy holding only literal floats.
Nothing is instantiated here, so a failure leaves no partial state behind.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from statforge.core.definitions.models import (
    ConditionalTransformDef,
    MapSourceDef,
    MapTransformDef,
    SourceDef,
    StatDefinition,
    TransformDef,
)
from statforge.core.definitions.values import Placeholder, classify_value, parse_placeholder
from statforge.core.errors import MissingParameterError

ENTITY_SEPARATOR = ":"

# Numeric fields per variant; conditional branches are handled separately.
_SOURCE_FIELDS: dict[str, tuple[str, ...]] = {
    "constant": ("value",),
    "scaling": ("base", "scale", "level"),
    "map": ("multiplier",),
}
_TRANSFORM_FIELDS: dict[str, tuple[str, ...]] = {
    "multiplicative": ("value",),
    "additive": ("value",),
    "clamp": ("min", "max"),
    "map": ("multiplier",),
    "conditional": ("condition_value",),
}


def substitute(field: Any, params: Mapping[str, float], *, owner: str = "") -> float:
    """Resolve one numeric field.

    Args:
        field: Literal float, Placeholder, or raw string/number to classify first
        params: Parameter name -> value
        owner: Template or stat name used in error messages

    Returns:
        Literal value, or the value bound to the placeholder

    Raises:
        MissingParameterError: If the placeholder has no binding
        InvalidPlaceholderError: If a raw string is not a valid placeholder

    Example:
        >>> substitute("{{x}}", {"x": 5.0})
        5.0
        >>> substitute(2.5, {})
        2.5
    """
    value = classify_value(field)
    if isinstance(value, Placeholder):
        if value.name not in params:
            raise MissingParameterError(value.name, owner=owner)
        return float(params[value.name])
    return value


def substitute_source(
    definition: SourceDef, params: Mapping[str, float], *, owner: str = ""
) -> SourceDef:
    """Return a copy of a source definition with every placeholder bound."""
    update = {
        field: substitute(getattr(definition, field), params, owner=owner)
        for field in _SOURCE_FIELDS[definition.type]
    }
    return definition.model_copy(update=update)


def substitute_transform(
    definition: TransformDef, params: Mapping[str, float], *, owner: str = ""
) -> TransformDef:
    """Return a copy of a transform definition with every placeholder bound.

    Conditional branches are substituted recursively.
    """
    update: dict[str, Any] = {}
    for field in _TRANSFORM_FIELDS[definition.type]:
        current = getattr(definition, field)
        # Absent clamp bounds stay open
        if current is not None:
            update[field] = substitute(current, params, owner=owner)

    if isinstance(definition, ConditionalTransformDef):
        update["then"] = substitute_transform(definition.then, params, owner=owner)
        if definition.else_then is not None:
            update["else_then"] = substitute_transform(definition.else_then, params, owner=owner)

    return definition.model_copy(update=update)


def substitute_definition(
    definition: StatDefinition, params: Mapping[str, float], *, owner: str = ""
) -> StatDefinition:
    """Bind every placeholder of a definition or template.

    Args:
        definition: StatDefinition or StatTemplate
        params: Parameter name -> value
        owner: Template or stat name used in error messages

    Returns:
        Plain StatDefinition holding only literal values

    Raises:
        MissingParameterError: On the first unbound placeholder
    """
    return StatDefinition(
        sources=tuple(substitute_source(s, params, owner=owner) for s in definition.sources),
        transforms=tuple(
            substitute_transform(t, params, owner=owner) for t in definition.transforms
        ),
    )


def required_parameters(definition: StatDefinition) -> set[str]:
    """Collect every placeholder name a definition references.

    Args:
        definition: StatDefinition or StatTemplate

    Returns:
        Set of parameter names (nested branches included)
    """
    names: set[str] = set()

    def collect(item: Any, fields: tuple[str, ...]) -> None:
        for field in fields:
            value = getattr(item, field)
            if isinstance(value, Placeholder):
                names.add(value.name)

    def walk_transform(transform: TransformDef) -> None:
        collect(transform, _TRANSFORM_FIELDS[transform.type])
        if isinstance(transform, ConditionalTransformDef):
            walk_transform(transform.then)
            if transform.else_then is not None:
                walk_transform(transform.else_then)

    for source in definition.sources:
        collect(source, _SOURCE_FIELDS[source.type])
    for transform in definition.transforms:
        walk_transform(transform)
    return names


def entity_stat_id(entity_id: str, stat_type: str) -> str:
    """Build the composite ``entity_id:stat_type`` identifier.

    The separator is not escaped: ids containing ``:`` can collide.

    Example:
        >>> entity_stat_id("player_123", "HP")
        'player_123:HP'
    """
    return f"{entity_id}{ENTITY_SEPARATOR}{stat_type}"


def entity_scope(stat_name: str) -> str | None:
    """Return the entity part of a composite stat name, or None for global stats."""
    if ENTITY_SEPARATOR not in stat_name:
        return None
    return stat_name.split(ENTITY_SEPARATOR, 1)[0]


def scope_definition(definition: StatDefinition, entity_id: str) -> StatDefinition:
    """Qualify every stat reference of a definition with ``entity_id``.

    Map dependencies and conditional ``condition_stat`` names become
    ``entity_id:name``, so a template instantiated for an entity reads that
    entity's stats. References already holding ``:`` (e.g. ``guild:Bonus``)
    are left unchanged, so a template can read another entity's stats. A
    plain name is always qualified; templates cannot reach global stats.

    Args:
        definition: Substituted definition
        entity_id: Entity identifier

    Returns:
        Copy with qualified stat references
    """

    def qualify(name: str) -> str:
        if entity_scope(name) is not None:
            return name
        return entity_stat_id(entity_id, name)

    def scope_source(source: SourceDef) -> SourceDef:
        if isinstance(source, MapSourceDef):
            deps = tuple(qualify(dep) for dep in source.dependencies)
            return source.model_copy(update={"dependencies": deps})
        return source

    def scope_transform(transform: TransformDef) -> TransformDef:
        if isinstance(transform, MapTransformDef):
            deps = tuple(qualify(dep) for dep in transform.dependencies)
            return transform.model_copy(update={"dependencies": deps})
        if isinstance(transform, ConditionalTransformDef):
            update: dict[str, Any] = {
                "condition_stat": qualify(transform.condition_stat),
                "then": scope_transform(transform.then),
            }
            if transform.else_then is not None:
                update["else_then"] = scope_transform(transform.else_then)
            return transform.model_copy(update=update)
        return transform

    return StatDefinition(
        sources=tuple(scope_source(s) for s in definition.sources),
        transforms=tuple(scope_transform(t) for t in definition.transforms),
    )


__all__ = [
    "ENTITY_SEPARATOR",
    "entity_scope",
    "entity_stat_id",
    "parse_placeholder",
    "required_parameters",
    "scope_definition",
    "substitute",
    "substitute_definition",
    "substitute_source",
    "substitute_transform",
]
