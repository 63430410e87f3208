"""Concrete stat sources produced by the factory."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from statforge.core.engine.models import StatContext


@dataclass(frozen=True)
class ConstantSource:
    """Contributes a fixed value."""

    value: float

    def depends_on(self) -> list[str]:
        return []

    def get_value(self, dependencies: Mapping[str, float], context: StatContext) -> float:
        return self.value

    def description(self) -> str:
        return f"ConstantSource({self.value})"


@dataclass(frozen=True)
class ScalingSource:
    """Contributes ``base + scale * level``."""

    base: float
    scale: float
    level: float

    def depends_on(self) -> list[str]:
        return []

    def get_value(self, dependencies: Mapping[str, float], context: StatContext) -> float:
        return self.base + self.scale * self.level

    def description(self) -> str:
        return f"ScalingSource({self.base} + {self.scale} x {self.level})"


@dataclass(frozen=True)
class MapSource:
    """Contributes ``multiplier * sum(dependency values)``.

    Attributes:
        dependencies: Stat ids summed, resolved by the engine before this source.
        multiplier: Factor applied to the sum.
    """

    dependencies: tuple[str, ...]
    multiplier: float

    def depends_on(self) -> list[str]:
        return list(self.dependencies)

    def get_value(self, dependencies: Mapping[str, float], context: StatContext) -> float:
        return self.multiplier * sum(dependencies[dep] for dep in self.dependencies)

    def description(self) -> str:
        return f"MapSource(sum of {list(self.dependencies)} x {self.multiplier})"


__all__ = ["ConstantSource", "MapSource", "ScalingSource"]
