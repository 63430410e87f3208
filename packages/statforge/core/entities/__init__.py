"""Entity-scoped stat management."""

from statforge.core.definitions.substitution import entity_stat_id
from statforge.core.entities.manager import EntityStatManager, TemplateApplication
from statforge.core.entities.models import EntityParams, EntityStatConfig

__all__ = [
    "EntityParams",
    "EntityStatConfig",
    "EntityStatManager",
    "TemplateApplication",
    "entity_stat_id",
]
