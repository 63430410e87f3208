"""Stat resolver - evaluates the dependency graph of registered stats.

The resolver handles:
1. Registration of sources/transforms under a stat id
2. Depth-first resolution of dependencies with cycle detection
3. Per-stat value caching and invalidation of dependents
"""

from __future__ import annotations

import logging
from collections import defaultdict

from statforge.core.engine.errors import (
    CircularDependencyError,
    MissingDependencyError,
    UnknownStatError,
)
from statforge.core.engine.models import ResolutionStep, ResolvedStat, StatContext
from statforge.core.engine.protocols import StatSource, StatTransform

logger = logging.getLogger(__name__)


class StatResolver:
    """Mutable graph of stats, owned by the caller.

    A stat's value is the sum of its sources followed by each transform in
    registration order. Registration is append-only; nothing is ever
    unregistered.

    Example:
        resolver = StatResolver()
        resolver.register_source("HP", ConstantSource(100.0))
        resolver.register_transform("HP", MultiplicativeTransform(1.5))

        resolver.resolve("HP").value  # 150.0
    """

    def __init__(self) -> None:
        """Initialize an empty resolver."""
        self._sources: dict[str, list[StatSource]] = defaultdict(list)
        self._transforms: dict[str, list[StatTransform]] = defaultdict(list)
        self._dependents: dict[str, set[str]] = defaultdict(set)
        self._cache: dict[str, ResolvedStat] = {}

    def register_source(self, stat_id: str, source: StatSource) -> None:
        """Register a source under ``stat_id``.

        Args:
            stat_id: Stat identifier
            source: Source instance
        """
        self._sources[stat_id].append(source)
        self._track_dependencies(stat_id, source.depends_on())
        self.invalidate(stat_id)
        logger.debug(f"Registered source on {stat_id}: {source.description()}")

    def register_transform(self, stat_id: str, transform: StatTransform) -> None:
        """Register a transform under ``stat_id`` (applied after earlier ones).

        Args:
            stat_id: Stat identifier
            transform: Transform instance
        """
        self._transforms[stat_id].append(transform)
        self._track_dependencies(stat_id, transform.depends_on())
        self.invalidate(stat_id)
        logger.debug(f"Registered transform on {stat_id}: {transform.description()}")

    def has_stat(self, stat_id: str) -> bool:
        """Check whether any source or transform is registered under ``stat_id``."""
        return bool(self._sources.get(stat_id)) or bool(self._transforms.get(stat_id))

    def stat_ids(self) -> list[str]:
        """List registered stat ids, sorted."""
        ids = {sid for sid, items in self._sources.items() if items}
        ids.update(sid for sid, items in self._transforms.items() if items)
        return sorted(ids)

    def sources(self, stat_id: str) -> list[StatSource]:
        """Return a copy of the sources registered under ``stat_id``."""
        return list(self._sources.get(stat_id, ()))

    def transforms(self, stat_id: str) -> list[StatTransform]:
        """Return a copy of the transforms registered under ``stat_id``, in order."""
        return list(self._transforms.get(stat_id, ()))

    def resolve(self, stat_id: str, context: StatContext | None = None) -> ResolvedStat:
        """Resolve a stat and everything it depends on.

        Args:
            stat_id: Stat identifier
            context: Resolution context (empty when omitted)

        Returns:
            ResolvedStat with final value and breakdown

        Raises:
            UnknownStatError: If nothing is registered under ``stat_id``
            MissingDependencyError: If a dependency was never registered
            CircularDependencyError: If the dependency graph has a cycle
        """
        if not self.has_stat(stat_id):
            raise UnknownStatError(stat_id)
        return self._resolve(stat_id, context if context is not None else StatContext(), [])

    def invalidate(self, stat_id: str) -> None:
        """Drop cached values of ``stat_id`` and every stat depending on it."""
        pending = [stat_id]
        seen: set[str] = set()
        while pending:
            current = pending.pop()
            if current in seen:
                continue
            seen.add(current)
            self._cache.pop(current, None)
            pending.extend(self._dependents.get(current, ()))

    def invalidate_all(self) -> None:
        """Drop every cached value."""
        self._cache.clear()

    def is_cached(self, stat_id: str) -> bool:
        """Check whether a resolved value is cached for ``stat_id``."""
        return stat_id in self._cache

    def _track_dependencies(self, stat_id: str, dependencies: list[str]) -> None:
        for dep in dependencies:
            self._dependents[dep].add(stat_id)

    def _dependencies_of(self, stat_id: str) -> list[str]:
        deps: list[str] = []
        for item in (*self._sources.get(stat_id, ()), *self._transforms.get(stat_id, ())):
            for dep in item.depends_on():
                if dep not in deps:
                    deps.append(dep)
        return deps

    def _resolve(self, stat_id: str, context: StatContext, stack: list[str]) -> ResolvedStat:
        cached = self._cache.get(stat_id)
        if cached is not None:
            return cached

        if stat_id in stack:
            cycle = stack[stack.index(stat_id) :] + [stat_id]
            raise CircularDependencyError(cycle)

        stack.append(stat_id)
        try:
            dep_values: dict[str, float] = {}
            for dep in self._dependencies_of(stat_id):
                if not self.has_stat(dep):
                    raise MissingDependencyError(stat_id, dep)
                dep_values[dep] = self._resolve(dep, context, stack).value
        finally:
            stack.pop()

        steps: list[ResolutionStep] = []
        base = 0.0
        for source in self._sources.get(stat_id, ()):
            contribution = source.get_value(dep_values, context)
            steps.append(
                ResolutionStep(
                    kind="source",
                    description=source.description(),
                    before=base,
                    after=base + contribution,
                )
            )
            base += contribution

        value = base
        for transform in self._transforms.get(stat_id, ()):
            after = transform.apply(value, dep_values, context)
            steps.append(
                ResolutionStep(
                    kind="transform",
                    description=transform.description(),
                    before=value,
                    after=after,
                )
            )
            value = after

        resolved = ResolvedStat(
            stat_id=stat_id, value=value, base_value=base, breakdown=tuple(steps)
        )
        self._cache[stat_id] = resolved
        return resolved


__all__ = ["StatResolver"]
