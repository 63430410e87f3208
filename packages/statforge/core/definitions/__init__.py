"""Stat definition models, parser and parameter substitution."""

from statforge.core.definitions.models import (
    AdditiveTransformDef,
    ClampTransformDef,
    ConditionalOperator,
    ConditionalTransformDef,
    ConstantSourceDef,
    MapSourceDef,
    MapTransformDef,
    MultiplicativeTransformDef,
    ScalingSourceDef,
    SourceDef,
    StatDefinition,
    StatDocument,
    StatTemplate,
    TransformDef,
)
from statforge.core.definitions.parser import (
    detect_format,
    dump_document,
    load_document,
    parse_document,
    validate_document,
)
from statforge.core.definitions.substitution import (
    entity_scope,
    entity_stat_id,
    required_parameters,
    scope_definition,
    substitute,
    substitute_definition,
    substitute_source,
    substitute_transform,
)
from statforge.core.definitions.values import ParamValue, Placeholder, parse_placeholder

__all__ = [
    "AdditiveTransformDef",
    "ClampTransformDef",
    "ConditionalOperator",
    "ConditionalTransformDef",
    "ConstantSourceDef",
    "MapSourceDef",
    "MapTransformDef",
    "MultiplicativeTransformDef",
    "ParamValue",
    "Placeholder",
    "ScalingSourceDef",
    "SourceDef",
    "StatDefinition",
    "StatDocument",
    "StatTemplate",
    "TransformDef",
    "detect_format",
    "dump_document",
    "entity_scope",
    "entity_stat_id",
    "load_document",
    "parse_document",
    "parse_placeholder",
    "required_parameters",
    "scope_definition",
    "substitute",
    "substitute_definition",
    "substitute_source",
    "substitute_transform",
    "validate_document",
]
