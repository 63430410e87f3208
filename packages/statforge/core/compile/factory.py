"""Source/transform factory - turns substituted definitions into engine instances.

Definitions must already be substituted: every numeric field a literal.
Conditional branches are built depth-first before the conditional wrapping
them. Map dependency names are carried verbatim; the engine checks them
lazily at resolution time.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from statforge.core.compile.sources import ConstantSource, MapSource, ScalingSource
from statforge.core.compile.transforms import (
    AdditiveTransform,
    ClampTransform,
    ConditionalTransform,
    IdentityTransform,
    MapTransform,
    MultiplicativeTransform,
)
from statforge.core.definitions.models import (
    AdditiveTransformDef,
    ClampTransformDef,
    ConditionalTransformDef,
    ConstantSourceDef,
    MapSourceDef,
    MapTransformDef,
    MultiplicativeTransformDef,
    ScalingSourceDef,
    SourceDef,
    StatDefinition,
    TransformDef,
)
from statforge.core.definitions.values import Placeholder
from statforge.core.engine.protocols import StatSource, StatTransform
from statforge.core.errors import InvalidDefinitionError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompiledStat:
    """Instances built from one definition, not yet registered anywhere.

    Attributes:
        sources: Source instances in declared order.
        transforms: Transform instances in declared order.
    """

    sources: tuple[StatSource, ...] = ()
    transforms: tuple[StatTransform, ...] = ()


def _literal(value: float | Placeholder | None, field: str, owner: str) -> float:
    if isinstance(value, Placeholder):
        raise InvalidDefinitionError(
            f"Unsubstituted placeholder {value.token} in '{field}'", owner=owner
        )
    if value is None:
        raise InvalidDefinitionError(f"Missing value for '{field}'", owner=owner)
    return float(value)


def _dependencies(dependencies: tuple[str, ...], kind: str, owner: str) -> tuple[str, ...]:
    if not dependencies:
        raise InvalidDefinitionError(f"{kind} requires at least one dependency", owner=owner)
    if any(not dep for dep in dependencies):
        raise InvalidDefinitionError(f"{kind} has an empty dependency name", owner=owner)
    return tuple(dependencies)


def build_source(definition: SourceDef, *, owner: str = "") -> StatSource:
    """Create a source instance from a substituted source definition.

    Args:
        definition: Source definition with literal values only
        owner: Template or stat name used in error messages

    Returns:
        Source instance ready for registration

    Raises:
        InvalidDefinitionError: If the definition is structurally invalid
    """
    if isinstance(definition, ConstantSourceDef):
        return ConstantSource(_literal(definition.value, "value", owner))
    if isinstance(definition, ScalingSourceDef):
        return ScalingSource(
            base=_literal(definition.base, "base", owner),
            scale=_literal(definition.scale, "scale", owner),
            level=_literal(definition.level, "level", owner),
        )
    if isinstance(definition, MapSourceDef):
        return MapSource(
            dependencies=_dependencies(definition.dependencies, "map source", owner),
            multiplier=_literal(definition.multiplier, "multiplier", owner),
        )
    raise InvalidDefinitionError(f"Unsupported source definition: {definition!r}", owner=owner)


def build_transform(definition: TransformDef, *, owner: str = "") -> StatTransform:
    """Create a transform instance from a substituted transform definition.

    Conditional ``then``/``else_then`` branches are built first; a missing
    ``else_then`` becomes an ``IdentityTransform``.

    Args:
        definition: Transform definition with literal values only
        owner: Template or stat name used in error messages

    Returns:
        Transform instance ready for registration

    Raises:
        InvalidDefinitionError: If the definition is structurally invalid
    """
    if isinstance(definition, MultiplicativeTransformDef):
        return MultiplicativeTransform(_literal(definition.value, "value", owner))
    if isinstance(definition, AdditiveTransformDef):
        return AdditiveTransform(_literal(definition.value, "value", owner))
    if isinstance(definition, ClampTransformDef):
        min_value = (
            -math.inf if definition.min is None else _literal(definition.min, "min", owner)
        )
        max_value = math.inf if definition.max is None else _literal(definition.max, "max", owner)
        if min_value > max_value:
            raise InvalidDefinitionError(
                f"clamp min ({min_value}) is greater than max ({max_value})", owner=owner
            )
        return ClampTransform(min_value=min_value, max_value=max_value)
    if isinstance(definition, MapTransformDef):
        return MapTransform(
            dependencies=_dependencies(definition.dependencies, "map transform", owner),
            multiplier=_literal(definition.multiplier, "multiplier", owner),
        )
    if isinstance(definition, ConditionalTransformDef):
        then_transform = build_transform(definition.then, owner=owner)
        else_transform = (
            build_transform(definition.else_then, owner=owner)
            if definition.else_then is not None
            else IdentityTransform()
        )
        return ConditionalTransform(
            condition_stat=definition.condition_stat,
            condition_value=_literal(definition.condition_value, "condition_value", owner),
            operator=definition.operator,
            then_transform=then_transform,
            else_transform=else_transform,
        )
    raise InvalidDefinitionError(
        f"Unsupported transform definition: {definition!r}", owner=owner
    )


def compile_definition(definition: StatDefinition, *, owner: str = "") -> CompiledStat:
    """Build every source and transform of a substituted definition.

    Nothing is registered; callers register the result once everything
    compiled successfully.

    Args:
        definition: Substituted definition
        owner: Template or stat name used in error messages

    Returns:
        CompiledStat holding the instances in declared order
    """
    compiled = CompiledStat(
        sources=tuple(build_source(s, owner=owner) for s in definition.sources),
        transforms=tuple(build_transform(t, owner=owner) for t in definition.transforms),
    )
    logger.debug(
        f"Compiled {owner or 'definition'}: {len(compiled.sources)} sources, "
        f"{len(compiled.transforms)} transforms"
    )
    return compiled


__all__ = ["CompiledStat", "build_source", "build_transform", "compile_definition"]
