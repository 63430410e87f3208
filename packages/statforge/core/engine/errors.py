"""Errors raised by the stat resolution engine."""

from __future__ import annotations


class StatResolutionError(Exception):
    """Base class for resolution failures.

    Attributes:
        stat_id: Stat being resolved when the failure occurred.
    """

    def __init__(self, message: str, *, stat_id: str) -> None:
        self.stat_id = stat_id
        super().__init__(message)


class UnknownStatError(StatResolutionError, KeyError):
    """Raised when resolving a stat that has no registered sources or transforms."""

    def __init__(self, stat_id: str) -> None:
        super().__init__(f"Unknown stat: {stat_id}", stat_id=stat_id)

    def __str__(self) -> str:
        return f"Unknown stat: {self.stat_id}"


class MissingDependencyError(StatResolutionError):
    """Raised when a stat depends on a stat that was never registered.

    Attributes:
        dependency: The unregistered stat id.
    """

    def __init__(self, stat_id: str, dependency: str) -> None:
        self.dependency = dependency
        super().__init__(
            f"Stat '{stat_id}' depends on unregistered stat '{dependency}'", stat_id=stat_id
        )


class CircularDependencyError(StatResolutionError):
    """Raised when stats depend on each other in a cycle.

    Attributes:
        cycle: Stat ids forming the cycle, first id repeated at the end.
    """

    def __init__(self, cycle: list[str]) -> None:
        self.cycle = cycle
        super().__init__(f"Circular dependency: {' -> '.join(cycle)}", stat_id=cycle[0])


__all__ = [
    "CircularDependencyError",
    "MissingDependencyError",
    "StatResolutionError",
    "UnknownStatError",
]
