"""Entity stat manager - instantiates templates into a shared resolver.

Each entity's stats live in the same resolver under composite
``entity_id:stat_type`` ids. Templates instantiated under a composite id have
their stat references (map dependencies, conditional stats) qualified with
the same entity, so one template set serves every entity.

Ordering contract: the manager performs no topological sort. Callers must
apply a stat's dependencies before the stats that depend on them.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Iterable, Mapping, Sequence

from statforge.core.compile.factory import CompiledStat, compile_definition
from statforge.core.definitions.substitution import (
    entity_scope,
    entity_stat_id,
    scope_definition,
    substitute_definition,
)
from statforge.core.engine.models import ResolvedStat, StatContext
from statforge.core.engine.protocols import StatSource, StatTransform
from statforge.core.engine.resolver import StatResolver
from statforge.core.entities.models import EntityParams, EntityStatConfig
from statforge.core.templates.registry import TemplateRegistry
from statforge.core.utils.logging import get_logger

logger = logging.getLogger(__name__)

TemplateApplication = tuple[str, str, Mapping[str, float]]
"""``(template_name, stat_name, params)`` triple."""


class EntityStatManager:
    """Applies registry templates to a caller-owned StatResolver.

    Example:
        manager = EntityStatManager(TemplateRegistry.from_text(text))
        resolver = StatResolver()

        manager.apply_template(
            resolver, "BaseHP", entity_stat_id("player_123", "HP"), {"base_hp": 100.0}
        )
        manager.resolve_entity_stat(resolver, "player_123", "HP").value
    """

    def __init__(self, registry: TemplateRegistry) -> None:
        """Initialize manager.

        Args:
            registry: Templates available for instantiation
        """
        self.registry = registry
        self._entity_configs: dict[str, list[EntityStatConfig]] = defaultdict(list)

    @classmethod
    def from_text(cls, text: str, fmt: str = "json") -> EntityStatManager:
        """Build a manager over templates parsed from JSON or YAML text."""
        return cls(TemplateRegistry.from_text(text, fmt))

    # ------------------------------------------------------------------
    # Template instantiation
    # ------------------------------------------------------------------

    def compile_template(
        self, template_name: str, stat_name: str, params: Mapping[str, float]
    ) -> CompiledStat:
        """Substitute and compile a template without registering anything.

        Args:
            template_name: Template to instantiate
            stat_name: Target stat id; a composite id scopes stat references
            params: Template parameters

        Returns:
            CompiledStat ready for registration

        Raises:
            UnknownTemplateError: If template not found
            MissingParameterError: If a placeholder has no binding
            InvalidDefinitionError: If the substituted definition is invalid
        """
        template = self.registry.get(template_name)
        definition = substitute_definition(template, params, owner=template_name)

        scope = entity_scope(stat_name)
        if scope is not None:
            definition = scope_definition(definition, scope)

        return compile_definition(definition, owner=template_name)

    def apply_template(
        self,
        resolver: StatResolver,
        template_name: str,
        stat_name: str,
        params: Mapping[str, float],
    ) -> None:
        """Instantiate a template and register it under ``stat_name``.

        Every placeholder is bound and every instance built before the first
        registration call, so a failure leaves the resolver untouched.

        Args:
            resolver: Resolver to register into
            template_name: Template to instantiate
            stat_name: Stat id (plain or ``entity_id:stat_type``)
            params: Template parameters

        Raises:
            UnknownTemplateError: If template not found
            MissingParameterError: If a placeholder has no binding
            InvalidDefinitionError: If the substituted definition is invalid
        """
        compiled = self.compile_template(template_name, stat_name, params)
        register_compiled(resolver, stat_name, compiled)
        logger.debug(f"Applied template {template_name} to {stat_name}")

    def apply_templates(
        self, resolver: StatResolver, applications: Iterable[TemplateApplication]
    ) -> None:
        """Apply several templates in order.

        Stops at the first failure. Applications committed before the failure
        stay registered.

        Args:
            resolver: Resolver to register into
            applications: ``(template_name, stat_name, params)`` triples
        """
        for template_name, stat_name, params in applications:
            self.apply_template(resolver, template_name, stat_name, params)

    # ------------------------------------------------------------------
    # Entity loading
    # ------------------------------------------------------------------

    def load_entity_stats(
        self, resolver: StatResolver, configs: Sequence[EntityStatConfig]
    ) -> None:
        """Apply entity stat configs in input order.

        Callers must order configs so a stat's dependencies come first.
        Configs applied before a failure stay registered and remembered.

        Args:
            resolver: Resolver to register into
            configs: Entity stat configurations
        """
        for config in configs:
            self.apply_template(resolver, config.template_name, config.stat_id, config.params)
            self._entity_configs[config.entity_id].append(config)

        logger.info(f"Loaded {len(configs)} entity stat configs")

    def load_entity(
        self,
        resolver: StatResolver,
        entity: str | EntityParams,
        configs: Sequence[EntityStatConfig],
    ) -> None:
        """Apply stat configs to a single entity.

        The entity id comes from ``entity``; each config's own ``entity_id`` is
        ignored. When ``entity`` is an EntityParams, its params are shared by
        every config (config params win on conflict).

        Args:
            resolver: Resolver to register into
            entity: Entity id or EntityParams
            configs: Stat configurations for this entity
        """
        if isinstance(entity, EntityParams):
            entity_id, shared = entity.entity_id, entity
        else:
            entity_id, shared = entity, EntityParams(entity_id=entity)

        entity_logger = get_logger(__name__, entity_id=entity_id)
        for config in configs:
            params = shared.merged_with(config.params)
            self.apply_template(
                resolver,
                config.template_name,
                entity_stat_id(entity_id, config.stat_type),
                params,
            )
            entity_logger.debug(f"Applied {config.template_name} as {config.stat_type}")

    def entity_configs(self, entity_id: str) -> list[EntityStatConfig]:
        """Configs successfully applied for ``entity_id`` through ``load_entity_stats``."""
        return list(self._entity_configs.get(entity_id, ()))

    @staticmethod
    def entity_params_to_configs(
        entity_id: str, stat_mappings: Iterable[tuple[str, str, Mapping[str, float]]]
    ) -> list[EntityStatConfig]:
        """Build configs from ``(stat_type, template_name, params)`` triples.

        Example:
            >>> configs = EntityStatManager.entity_params_to_configs(
            ...     "archer", [("HP", "BaseHP", {"base_hp": 120.0})]
            ... )
            >>> configs[0].stat_id
            'archer:HP'
        """
        return [
            EntityStatConfig(
                entity_id=entity_id,
                stat_type=stat_type,
                template_name=template_name,
                params=dict(params),
            )
            for stat_type, template_name, params in stat_mappings
        ]

    # ------------------------------------------------------------------
    # Direct injection and resolution
    # ------------------------------------------------------------------

    def add_source_to_entity(
        self, resolver: StatResolver, entity_id: str, stat_type: str, source: StatSource
    ) -> None:
        """Register a caller-built source (equipment, buffs) on an entity stat."""
        resolver.register_source(entity_stat_id(entity_id, stat_type), source)

    def add_transform_to_entity(
        self,
        resolver: StatResolver,
        entity_id: str,
        stat_type: str,
        transform: StatTransform,
    ) -> None:
        """Register a caller-built transform (buffs, debuffs) on an entity stat."""
        resolver.register_transform(entity_stat_id(entity_id, stat_type), transform)

    def resolve_entity_stat(
        self,
        resolver: StatResolver,
        entity_id: str,
        stat_type: str,
        context: StatContext | None = None,
    ) -> ResolvedStat:
        """Resolve ``entity_id:stat_type``; engine errors propagate unchanged."""
        return resolver.resolve(entity_stat_id(entity_id, stat_type), context)


def register_compiled(resolver: StatResolver, stat_id: str, compiled: CompiledStat) -> None:
    """Register compiled sources, then transforms, under ``stat_id``."""
    for source in compiled.sources:
        resolver.register_source(stat_id, source)
    for transform in compiled.transforms:
        resolver.register_transform(stat_id, transform)


__all__ = ["EntityStatManager", "TemplateApplication", "register_compiled"]
