"""Resolution context and result models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class StatContext(BaseModel):
    """Key/value bag handed to every source and transform during resolution.

    Compiled definitions never read it; caller-provided sources and
    transforms may (e.g. current zone, time of day).
    """

    model_config = ConfigDict(extra="forbid")

    values: dict[str, Any] = Field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        """Return a context value or ``default`` when unset."""
        return self.values.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Set a context value."""
        self.values[key] = value


class ResolutionStep(BaseModel):
    """One entry of a resolution breakdown.

    Attributes:
        kind: ``"source"`` or ``"transform"``.
        description: Description of the source/transform.
        before: Running value before the step (0.0 for sources).
        after: Running value after the step.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: str
    description: str
    before: float
    after: float


class ResolvedStat(BaseModel):
    """Result of resolving one stat.

    Attributes:
        stat_id: Resolved stat identifier.
        value: Final value after all transforms.
        base_value: Sum of all source contributions.
        breakdown: Source contributions followed by transform steps, in order.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    stat_id: str
    value: float
    base_value: float
    breakdown: tuple[ResolutionStep, ...] = ()
