"""Typed stat definition models.

Sources and transforms are closed sets of shapes, modeled as pydantic
discriminated unions on the ``type`` tag. Conditional transforms nest the
same ``TransformDef`` union in their branches, so nesting depth is unbounded.
"""

from __future__ import annotations

import sys
from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from statforge.core.definitions.values import ParamValue


class ConditionalOperator(str, Enum):
    """Comparison operators accepted by conditional transforms."""

    GT = ">"
    LT = "<"
    GE = ">="
    LE = "<="
    EQ = "=="

    def evaluate(self, stat_value: float, condition_value: float) -> bool:
        """Compare ``stat_value`` against ``condition_value``.

        Equality uses a machine-epsilon tolerance.
        """
        if self is ConditionalOperator.GT:
            return stat_value > condition_value
        if self is ConditionalOperator.LT:
            return stat_value < condition_value
        if self is ConditionalOperator.GE:
            return stat_value >= condition_value
        if self is ConditionalOperator.LE:
            return stat_value <= condition_value
        return abs(stat_value - condition_value) < sys.float_info.epsilon


# ============================================================================
# Sources
# ============================================================================


class ConstantSourceDef(BaseModel):
    """Contributes ``value``."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    type: Literal["constant"] = "constant"
    value: ParamValue
    name: str | None = Field(default=None, description="Documentation only")


class ScalingSourceDef(BaseModel):
    """Contributes ``base + scale * level``."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    type: Literal["scaling"] = "scaling"
    base: ParamValue
    scale: ParamValue
    level: ParamValue
    name: str | None = Field(default=None, description="Documentation only")


class MapSourceDef(BaseModel):
    """Contributes ``multiplier * sum(dependency values)``."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    type: Literal["map"] = "map"
    dependencies: tuple[str, ...]
    multiplier: ParamValue
    name: str | None = Field(default=None, description="Documentation only")


SourceDef = Annotated[
    ConstantSourceDef | ScalingSourceDef | MapSourceDef,
    Field(discriminator="type"),
]


# ============================================================================
# Transforms
# ============================================================================


class MultiplicativeTransformDef(BaseModel):
    """``x * value``."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    type: Literal["multiplicative"] = "multiplicative"
    value: ParamValue
    name: str | None = Field(default=None, description="Documentation only")


class AdditiveTransformDef(BaseModel):
    """``x + value``."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    type: Literal["additive"] = "additive"
    value: ParamValue
    name: str | None = Field(default=None, description="Documentation only")


class ClampTransformDef(BaseModel):
    """Clamp the running value; an absent bound is open."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    type: Literal["clamp"] = "clamp"
    min: ParamValue | None = None
    max: ParamValue | None = None
    name: str | None = Field(default=None, description="Documentation only")


class MapTransformDef(BaseModel):
    """``x + multiplier * sum(dependency values)``."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    type: Literal["map"] = "map"
    dependencies: tuple[str, ...]
    multiplier: ParamValue
    name: str | None = Field(default=None, description="Documentation only")


class ConditionalTransformDef(BaseModel):
    """Apply ``then`` when ``condition_stat <operator> condition_value`` holds.

    Otherwise apply ``else_then``, or pass the value through unchanged when
    no else branch is given.

    Attributes:
        condition_stat: Stat whose value is compared.
        condition_value: Value to compare against.
        operator: One of ``>``, ``<``, ``>=``, ``<=``, ``==``.
        then: Transform applied when the condition holds.
        else_then: Transform applied otherwise (optional).
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    type: Literal["conditional"] = "conditional"
    condition_stat: str = Field(min_length=1)
    condition_value: ParamValue
    operator: ConditionalOperator
    then: TransformDef
    else_then: TransformDef | None = None
    name: str | None = Field(default=None, description="Documentation only")


TransformDef = Annotated[
    MultiplicativeTransformDef
    | AdditiveTransformDef
    | ClampTransformDef
    | MapTransformDef
    | ConditionalTransformDef,
    Field(discriminator="type"),
]

ConditionalTransformDef.model_rebuild()


# ============================================================================
# Definitions and documents
# ============================================================================


class StatDefinition(BaseModel):
    """Sources (summed) and transforms (applied in declared order) of one stat.

    Sequences are tuples, so a definition is immutable all the way down.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    sources: tuple[SourceDef, ...] = ()
    transforms: tuple[TransformDef, ...] = ()


class StatTemplate(StatDefinition):
    """Parameterized stat definition; numeric fields may hold placeholders."""

    description: str | None = None


class StatDocument(BaseModel):
    """Top-level definition document.

    Either key may be omitted; unknown top-level keys are rejected.

    Example::

        {"stats": {"HP": {"sources": [{"type": "constant", "value": 100}]}}}
        {"templates": {"BaseHP": {"sources": [{"type": "constant", "value": "{{base_hp}}"}]}}}
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    stats: dict[str, StatDefinition] = Field(default_factory=dict)
    templates: dict[str, StatTemplate] = Field(default_factory=dict)


__all__ = [
    "AdditiveTransformDef",
    "ClampTransformDef",
    "ConditionalOperator",
    "ConditionalTransformDef",
    "ConstantSourceDef",
    "MapSourceDef",
    "MapTransformDef",
    "MultiplicativeTransformDef",
    "ScalingSourceDef",
    "SourceDef",
    "StatDefinition",
    "StatDocument",
    "StatTemplate",
    "TransformDef",
]
