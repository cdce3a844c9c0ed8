from .aggregate import (
    ShadowResult,
    SkippedPair,
    aggregate,
    aggregate_json,
    aggregate_scene,
)
from .errors import (
    BooleanOperationError,
    DegenerateGeometryError,
    ShadowError,
    UnsupportedOperationError,
)
from .geometry import intersect_boundary, rectangle_vertices
from .scaled_ops import (
    scaled_boolean,
    scaled_difference,
    scaled_intersection,
    scaled_symmetric_difference,
    scaled_union,
    scaled_xor,
)
from .shadow import shadow_polygon
from .types import DEFAULT_SCALE, Light, Rectangle, Scene, WorldBoundary

__all__ = [
    "DEFAULT_SCALE",
    "BooleanOperationError",
    "DegenerateGeometryError",
    "Light",
    "Rectangle",
    "Scene",
    "ShadowError",
    "ShadowResult",
    "SkippedPair",
    "UnsupportedOperationError",
    "WorldBoundary",
    "aggregate",
    "aggregate_json",
    "aggregate_scene",
    "intersect_boundary",
    "rectangle_vertices",
    "scaled_boolean",
    "scaled_difference",
    "scaled_intersection",
    "scaled_symmetric_difference",
    "scaled_union",
    "scaled_xor",
    "shadow_polygon",
]
