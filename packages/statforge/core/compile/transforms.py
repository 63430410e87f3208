"""Concrete stat transforms produced by the factory.

Conditional transforms hold other transforms as branches, so a branch may
itself be conditional to any depth.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass

from statforge.core.definitions.models import ConditionalOperator
from statforge.core.engine.models import StatContext
from statforge.core.engine.protocols import StatTransform


@dataclass(frozen=True)
class IdentityTransform:
    """Passes the running value through unchanged."""

    def depends_on(self) -> list[str]:
        return []

    def apply(
        self, value: float, dependencies: Mapping[str, float], context: StatContext
    ) -> float:
        return value

    def description(self) -> str:
        return "IdentityTransform"


@dataclass(frozen=True)
class MultiplicativeTransform:
    """``x * value``."""

    value: float

    def depends_on(self) -> list[str]:
        return []

    def apply(
        self, value: float, dependencies: Mapping[str, float], context: StatContext
    ) -> float:
        return value * self.value

    def description(self) -> str:
        return f"MultiplicativeTransform(x{self.value})"


@dataclass(frozen=True)
class AdditiveTransform:
    """``x + value``."""

    value: float

    def depends_on(self) -> list[str]:
        return []

    def apply(
        self, value: float, dependencies: Mapping[str, float], context: StatContext
    ) -> float:
        return value + self.value

    def description(self) -> str:
        return f"AdditiveTransform(+{self.value})"


@dataclass(frozen=True)
class ClampTransform:
    """Clamp into ``[min_value, max_value]``; infinite bounds are open."""

    min_value: float = -math.inf
    max_value: float = math.inf

    def depends_on(self) -> list[str]:
        return []

    def apply(
        self, value: float, dependencies: Mapping[str, float], context: StatContext
    ) -> float:
        return max(self.min_value, min(self.max_value, value))

    def description(self) -> str:
        return f"ClampTransform({self.min_value}, {self.max_value})"


@dataclass(frozen=True)
class MapTransform:
    """``x + multiplier * sum(dependency values)``."""

    dependencies: tuple[str, ...]
    multiplier: float

    def depends_on(self) -> list[str]:
        return list(self.dependencies)

    def apply(
        self, value: float, dependencies: Mapping[str, float], context: StatContext
    ) -> float:
        total = sum(dependencies[dep] for dep in self.dependencies)
        return value + total * self.multiplier

    def description(self) -> str:
        return f"MapTransform(sum of {list(self.dependencies)} x {self.multiplier})"


@dataclass(frozen=True)
class ConditionalTransform:
    """Applies ``then_transform`` or ``else_transform`` depending on another stat.

    Attributes:
        condition_stat: Stat id whose resolved value is compared.
        condition_value: Value to compare against.
        operator: Comparison operator.
        then_transform: Applied when the condition holds.
        else_transform: Applied otherwise (identity when the definition has none).
    """

    condition_stat: str
    condition_value: float
    operator: ConditionalOperator
    then_transform: StatTransform
    else_transform: StatTransform

    def depends_on(self) -> list[str]:
        deps = [self.condition_stat]
        for dep in (*self.then_transform.depends_on(), *self.else_transform.depends_on()):
            if dep not in deps:
                deps.append(dep)
        return deps

    def apply(
        self, value: float, dependencies: Mapping[str, float], context: StatContext
    ) -> float:
        stat_value = dependencies[self.condition_stat]
        if self.operator.evaluate(stat_value, self.condition_value):
            return self.then_transform.apply(value, dependencies, context)
        return self.else_transform.apply(value, dependencies, context)

    def description(self) -> str:
        return (
            f"ConditionalTransform(if {self.condition_stat} {self.operator.value} "
            f"{self.condition_value} then {self.then_transform.description()} "
            f"else {self.else_transform.description()})"
        )


__all__ = [
    "AdditiveTransform",
    "ClampTransform",
    "ConditionalTransform",
    "IdentityTransform",
    "MapTransform",
    "MultiplicativeTransform",
]
