"""Per-entity stat assignment models.

These are transient inputs consumed per call. They serialize to JSON so
callers can keep them in their own storage.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from statforge.core.definitions.substitution import entity_stat_id


class EntityStatConfig(BaseModel):
    """Assignment of one template to one stat of one entity.

    Attributes:
        entity_id: Entity identifier.
        stat_type: Stat type name (e.g. "HP", "ATK").
        template_name: Template to instantiate.
        params: Template parameters.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    entity_id: str
    stat_type: str
    template_name: str
    params: dict[str, float] = Field(default_factory=dict)

    @property
    def stat_id(self) -> str:
        """Composite ``entity_id:stat_type`` identifier."""
        return entity_stat_id(self.entity_id, self.stat_type)


class EntityParams(BaseModel):
    """Parameters shared by every template applied to one entity.

    Attributes:
        entity_id: Entity identifier.
        params: Parameter name -> value.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    entity_id: str
    params: dict[str, float] = Field(default_factory=dict)

    def merged_with(self, params: dict[str, float]) -> dict[str, float]:
        """Return entity params overlaid with stat-specific ``params``."""
        return {**self.params, **params}


__all__ = ["EntityParams", "EntityStatConfig"]
