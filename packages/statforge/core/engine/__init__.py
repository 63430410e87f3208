"""Stat resolution engine.

Evaluates registered sources and transforms, resolving dependencies first,
caching results per stat, and invalidating them on demand.
"""

from statforge.core.engine.errors import (
    CircularDependencyError,
    MissingDependencyError,
    StatResolutionError,
    UnknownStatError,
)
from statforge.core.engine.models import ResolutionStep, ResolvedStat, StatContext
from statforge.core.engine.protocols import StatSource, StatTransform
from statforge.core.engine.resolver import StatResolver

__all__ = [
    "CircularDependencyError",
    "MissingDependencyError",
    "ResolutionStep",
    "ResolvedStat",
    "StatContext",
    "StatResolutionError",
    "StatResolver",
    "StatSource",
    "StatTransform",
    "UnknownStatError",
]
