"""statforge - compile declarative stat definitions into a resolution graph.

Two authoring modes:
- direct definitions (``{"stats": ...}``) via ``load_from_json``
- parameterized templates (``{"templates": ...}``) via ``TemplateRegistry``
  and ``EntityStatManager``
"""

from statforge.api import (
    build_resolver,
    create_entity_stats,
    load_from_file,
    load_from_json,
    load_from_yaml,
    resolve_stat_from_json,
)
from statforge.core.definitions import (
    StatDefinition,
    StatDocument,
    StatTemplate,
    parse_document,
    substitute,
)
from statforge.core.engine import ResolvedStat, StatContext, StatResolver
from statforge.core.entities import (
    EntityParams,
    EntityStatConfig,
    EntityStatManager,
    entity_stat_id,
)
from statforge.core.errors import (
    InvalidDefinitionError,
    InvalidPlaceholderError,
    MissingFieldError,
    MissingParameterError,
    ParseError,
    StatConfigError,
    UnknownTemplateError,
    UnknownVariantError,
)
from statforge.core.templates import TemplateRegistry

__version__ = "0.1.0"

__all__ = [
    "EntityParams",
    "EntityStatConfig",
    "EntityStatManager",
    "InvalidDefinitionError",
    "InvalidPlaceholderError",
    "MissingFieldError",
    "MissingParameterError",
    "ParseError",
    "ResolvedStat",
    "StatConfigError",
    "StatContext",
    "StatDefinition",
    "StatDocument",
    "StatResolver",
    "StatTemplate",
    "TemplateRegistry",
    "UnknownTemplateError",
    "UnknownVariantError",
    "build_resolver",
    "create_entity_stats",
    "entity_stat_id",
    "load_from_file",
    "load_from_json",
    "load_from_yaml",
    "parse_document",
    "resolve_stat_from_json",
    "substitute",
]
