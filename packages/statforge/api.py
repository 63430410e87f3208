"""Convenience entry points for building resolvers from definition text.

Example:
    >>> resolver = load_from_json(
    ...     '{"stats": {"HP": {"sources": [{"type": "constant", "value": 100},'
    ...     ' {"type": "constant", "value": 50}],'
    ...     ' "transforms": [{"type": "multiplicative", "value": 1.5}]}}}'
    ... )
    >>> resolver.resolve("HP").value
    225.0
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path

from statforge.core.compile.factory import CompiledStat, compile_definition
from statforge.core.definitions.models import StatDocument
from statforge.core.definitions.parser import load_document, parse_document
from statforge.core.definitions.substitution import entity_stat_id, substitute_definition
from statforge.core.engine.models import ResolvedStat, StatContext
from statforge.core.engine.resolver import StatResolver
from statforge.core.entities.manager import EntityStatManager
from statforge.core.templates.registry import TemplateRegistry

logger = logging.getLogger(__name__)


def build_resolver(document: StatDocument, resolver: StatResolver | None = None) -> StatResolver:
    """Register a document's direct stat definitions into a resolver.

    Every stat is compiled before anything is registered. Sources of all
    stats are registered before transforms.

    Args:
        document: Parsed document with a ``stats`` section
        resolver: Resolver to extend (a new one when omitted)

    Returns:
        The resolver holding the stats

    Raises:
        MissingParameterError: If a direct stat contains a placeholder
        InvalidDefinitionError: If a definition is structurally invalid
    """
    compiled: dict[str, CompiledStat] = {}
    for stat_name, definition in document.stats.items():
        # Direct stats have no parameters; any placeholder is unbound
        literal = substitute_definition(definition, {}, owner=stat_name)
        compiled[stat_name] = compile_definition(literal, owner=stat_name)

    resolver = resolver if resolver is not None else StatResolver()
    for stat_name, stat in compiled.items():
        for source in stat.sources:
            resolver.register_source(stat_name, source)
    for stat_name, stat in compiled.items():
        for transform in stat.transforms:
            resolver.register_transform(stat_name, transform)

    logger.debug(f"Built resolver with {len(compiled)} stats")
    return resolver


def load_from_json(json_content: str) -> StatResolver:
    """Create a resolver from JSON direct stat definitions.

    Args:
        json_content: JSON string with a ``stats`` section

    Returns:
        StatResolver that can resolve the defined stats
    """
    return build_resolver(parse_document(json_content, "json"))


def load_from_yaml(yaml_content: str) -> StatResolver:
    """Create a resolver from YAML direct stat definitions."""
    return build_resolver(parse_document(yaml_content, "yaml"))


def load_from_file(path: str | Path) -> StatResolver:
    """Create a resolver from a .json/.yaml/.yml definition file."""
    return build_resolver(load_document(path))


def resolve_stat_from_json(
    json_content: str, stat_name: str, context: StatContext | None = None
) -> ResolvedStat:
    """Load direct stat definitions and resolve one stat.

    Args:
        json_content: JSON string with a ``stats`` section
        stat_name: Stat to resolve
        context: Resolution context (empty when omitted)

    Returns:
        ResolvedStat

    Raises:
        UnknownStatError: If ``stat_name`` is not defined
    """
    return load_from_json(json_content).resolve(stat_name, context)


def create_entity_stats(
    json_content: str,
    entity_id: str,
    template_name: str,
    params: Mapping[str, float],
    *,
    stat_type: str | None = None,
) -> StatResolver:
    """Instantiate one template into a new resolver.

    Args:
        json_content: JSON string with a ``templates`` section
        entity_id: Stat name to register under, or the entity part of the
            composite id when ``stat_type`` is given
        template_name: Template to apply
        params: Template parameters
        stat_type: Optional stat type; registers under ``entity_id:stat_type``

    Returns:
        StatResolver holding the instantiated stat

    Raises:
        UnknownTemplateError: If template not found
        MissingParameterError: If a placeholder has no binding
    """
    manager = EntityStatManager(TemplateRegistry.from_text(json_content))
    stat_name = entity_id if stat_type is None else entity_stat_id(entity_id, stat_type)
    resolver = StatResolver()
    manager.apply_template(resolver, template_name, stat_name, params)
    return resolver


__all__ = [
    "build_resolver",
    "create_entity_stats",
    "load_from_file",
    "load_from_json",
    "load_from_yaml",
    "resolve_stat_from_json",
]
