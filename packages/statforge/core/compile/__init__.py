"""Compilation of substituted definitions into engine sources and transforms."""

from statforge.core.compile.factory import (
    CompiledStat,
    build_source,
    build_transform,
    compile_definition,
)
from statforge.core.compile.sources import ConstantSource, MapSource, ScalingSource
from statforge.core.compile.transforms import (
    AdditiveTransform,
    ClampTransform,
    ConditionalTransform,
    IdentityTransform,
    MapTransform,
    MultiplicativeTransform,
)

__all__ = [
    "AdditiveTransform",
    "ClampTransform",
    "CompiledStat",
    "ConditionalTransform",
    "ConstantSource",
    "IdentityTransform",
    "MapSource",
    "MapTransform",
    "MultiplicativeTransform",
    "ScalingSource",
    "build_source",
    "build_transform",
    "compile_definition",
]
