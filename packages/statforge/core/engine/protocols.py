"""Protocol definitions for stat sources and transforms.

The resolver only talks to these interfaces, so callers can register
their own implementations (equipment bonuses, buffs, debuffs) next to
the instances compiled from definitions.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from statforge.core.engine.models import StatContext


@runtime_checkable
class StatSource(Protocol):
    """Contributor to a stat's base value. All sources of a stat are summed.

    Resolved values are cached per stat id, not per context. A source that
    reads the context needs ``resolver.invalidate(stat_id)`` (or
    ``invalidate_all()``) after the context changes.

    Example:
        >>> class GoldBonus:
        ...     def depends_on(self) -> list[str]:
        ...         return []
        ...     def get_value(self, dependencies, context) -> float:
        ...         return context.get("gold", 0.0) * 0.01
        ...     def description(self) -> str:
        ...         return "GoldBonus"
        >>> resolver.register_source("Loot", GoldBonus())
        >>> resolver.resolve("Loot", StatContext(values={"gold": 500.0})).value
        5.0
        >>> resolver.invalidate("Loot")  # gold changed; drop the cached value
        >>> resolver.resolve("Loot", StatContext(values={"gold": 900.0})).value
        9.0
    """

    def depends_on(self) -> list[str]:
        """Stat ids that must be resolved before this source."""
        ...

    def get_value(self, dependencies: Mapping[str, float], context: StatContext) -> float:
        """Compute the contribution.

        Args:
            dependencies: Resolved values of the ids returned by ``depends_on``
            context: Caller-supplied resolution context

        Returns:
            Contribution to the base value
        """
        ...

    def description(self) -> str:
        """Human-readable summary used in resolution breakdowns."""
        ...


@runtime_checkable
class StatTransform(Protocol):
    """Sequential adjustment applied to the summed source value."""

    def depends_on(self) -> list[str]:
        """Stat ids that must be resolved before this transform."""
        ...

    def apply(
        self, value: float, dependencies: Mapping[str, float], context: StatContext
    ) -> float:
        """Apply the adjustment.

        Args:
            value: Running value before this transform
            dependencies: Resolved values of the ids returned by ``depends_on``
            context: Caller-supplied resolution context

        Returns:
            Running value after this transform
        """
        ...

    def description(self) -> str:
        """Human-readable summary used in resolution breakdowns."""
        ...


__all__ = ["StatSource", "StatTransform"]
