"""Polygon set operations on a snapped integer grid.

GEOS overlays are exact on the coordinates they are given, but shadow
polygons arrive with irregular float coordinates: hull vertices a few ulps
apart, cast points that almost coincide, slivers with next to no area. Those
are the inputs that make overlays fail or return debris. This module snaps
both operands before every operation:

  1. multiply every coordinate by ``scale`` and round to the nearest integer
     (``numpy.round``, i.e. round-half-to-even, on every path);
  2. run the overlay in GEOS on the integer-valued polygons;
  3. divide the result's coordinates by ``scale``.

Snapping moves each coordinate by at most ``0.5 / scale`` world units, so
``scale`` trades positional fidelity for robustness. ``DEFAULT_SCALE`` is 10.

Every result is normalized to a ``MultiPolygon`` of positive-area polygons.
GEOS returns a bare ``Polygon`` for single-part results and a
``GeometryCollection`` with line or point debris when operands only touch;
callers never see either.

Nothing here repairs input. A GEOS failure surfaces as
``BooleanOperationError``; an unknown operation name as
``UnsupportedOperationError``.
"""

from __future__ import annotations

import math
from collections.abc import Callable

import numpy as np
import shapely
from shapely.errors import GEOSException
from shapely.geometry import MultiPolygon, Polygon
from shapely.geometry.base import BaseGeometry

from .errors import BooleanOperationError, UnsupportedOperationError
from .types import DEFAULT_SCALE, Point2

EMPTY_REGION = MultiPolygon()

_SetOp = Callable[[BaseGeometry, BaseGeometry], BaseGeometry]

_OPERATIONS: dict[str, _SetOp] = {
    "union": shapely.union,
    "intersection": shapely.intersection,
    "difference": shapely.difference,
    "symmetric_difference": shapely.symmetric_difference,
    "xor": shapely.symmetric_difference,
}

SUPPORTED_OPERATIONS = tuple(_OPERATIONS)


def _collect_polygons(geom: BaseGeometry, out: list[Polygon]) -> None:
    if geom.is_empty:
        return
    if isinstance(geom, Polygon):
        if geom.area > 0:
            out.append(geom)
    elif hasattr(geom, "geoms"):
        # MultiPolygon or GeometryCollection; lines and points are dropped.
        for part in geom.geoms:
            _collect_polygons(part, out)


def as_region(geom: BaseGeometry | None) -> MultiPolygon:
    """Normalize any geometry to a MultiPolygon of positive-area parts."""
    if geom is None:
        return EMPTY_REGION
    if isinstance(geom, MultiPolygon) and all(
        p.area > 0 for p in geom.geoms
    ):
        return geom
    polys: list[Polygon] = []
    _collect_polygons(geom, polys)
    if not polys:
        return EMPTY_REGION
    return MultiPolygon(polys)


def check_scale(scale: float) -> None:
    if not (math.isfinite(scale) and scale > 0):
        raise ValueError(f"scale must be finite and positive, got {scale!r}")


def snap_to_grid(geom: BaseGeometry, scale: float) -> MultiPolygon:
    """Scale coordinates up and round them to integers."""
    snapped = shapely.transform(geom, lambda coords: np.round(coords * scale))
    return as_region(snapped)


def unsnap(geom: BaseGeometry, scale: float) -> MultiPolygon:
    """Inverse of ``snap_to_grid`` (minus the rounding)."""
    return as_region(shapely.transform(geom, lambda coords: coords / scale))


def scaled_boolean(
    op: str,
    a: BaseGeometry,
    b: BaseGeometry,
    scale: float = DEFAULT_SCALE,
) -> MultiPolygon:
    """Run the named set operation on snapped copies of ``a`` and ``b``.

    ``op`` is one of ``SUPPORTED_OPERATIONS``; ``"xor"`` is an alias for
    ``"symmetric_difference"``.
    """
    func = _OPERATIONS.get(op)
    if func is None:
        raise UnsupportedOperationError(
            f"Unsupported boolean operation {op!r}; expected one of "
            f"{', '.join(SUPPORTED_OPERATIONS)}"
        )
    check_scale(scale)

    p = snap_to_grid(a, scale)
    q = snap_to_grid(b, scale)
    try:
        result = func(p, q)
    except GEOSException as e:
        raise BooleanOperationError(op, str(e)) from e
    return unsnap(result, scale)


def scaled_union(
    a: BaseGeometry, b: BaseGeometry, scale: float = DEFAULT_SCALE
) -> MultiPolygon:
    return scaled_boolean("union", a, b, scale)


def scaled_intersection(
    a: BaseGeometry, b: BaseGeometry, scale: float = DEFAULT_SCALE
) -> MultiPolygon:
    return scaled_boolean("intersection", a, b, scale)


def scaled_difference(
    a: BaseGeometry, b: BaseGeometry, scale: float = DEFAULT_SCALE
) -> MultiPolygon:
    """Area of ``a`` not covered by ``b``."""
    return scaled_boolean("difference", a, b, scale)


def scaled_symmetric_difference(
    a: BaseGeometry, b: BaseGeometry, scale: float = DEFAULT_SCALE
) -> MultiPolygon:
    """Area covered by exactly one of ``a`` and ``b``."""
    return scaled_boolean("symmetric_difference", a, b, scale)


scaled_xor = scaled_symmetric_difference


def _open_ring(coords) -> list[Point2]:
    ring = [(float(x), float(y)) for x, y in coords]
    if ring and ring[-1] == ring[0]:
        ring = ring[:-1]
    return ring


def polygon_rings(poly: Polygon) -> tuple[list[Point2], list[list[Point2]]]:
    """Exterior ring and hole rings of a polygon, without closing vertices."""
    return (
        _open_ring(poly.exterior.coords),
        [_open_ring(hole.coords) for hole in poly.interiors],
    )


def region_rings(region: BaseGeometry) -> list[list[Point2]]:
    """Exterior ring of every polygon in a region."""
    return [_open_ring(p.exterior.coords) for p in as_region(region).geoms]


def region_area(region: BaseGeometry) -> float:
    return float(as_region(region).area)


def region_to_json(region: BaseGeometry) -> list[dict]:
    result = []
    for poly in as_region(region).geoms:
        exterior, holes = polygon_rings(poly)
        result.append(
            {
                "exterior": [[x, y] for x, y in exterior],
                "holes": [[[x, y] for x, y in hole] for hole in holes],
            }
        )
    return result
