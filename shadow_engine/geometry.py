"""Oriented rectangles and boundary ray casting.

Two building blocks of the shadow construction live here:

  * ``rectangle_vertices`` / ``obb_corners``: the four world-space corners
    of an obstacle, in a fixed order (bottom-left, bottom-right, top-right,
    top-left in the rectangle's own frame). ``rectangle_vertices_array`` is
    the NumPy batch version used by the aggregator to compute every
    obstacle's corners once per frame instead of once per light.
  * ``intersect_boundary``: where a ray from a light through a point leaves
    the world rectangle. This is a slab test specialized to a ray that
    starts inside the box: per axis, only the edge the ray is heading toward
    can be hit, and the nearer of the two axis hits wins.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np

from .errors import DegenerateGeometryError
from .types import Point2, Rectangle, WorldBoundary

Corners = list[Point2]

# Local-frame corner signs: bottom-left, bottom-right, top-right, top-left.
_CORNER_SIGNS = ((-1, -1), (1, -1), (1, 1), (-1, 1))


def obb_corners(
    cx: float,
    cy: float,
    half_w: float,
    half_h: float,
    rot_rad: float,
) -> Corners:
    """Compute the 4 corners of a rotated rectangle."""
    cos_r = math.cos(rot_rad)
    sin_r = math.sin(rot_rad)
    result: Corners = []
    for sx, sy in _CORNER_SIGNS:
        lx = sx * half_w
        ly = sy * half_h
        result.append(
            (
                cx + lx * cos_r - ly * sin_r,
                cy + lx * sin_r + ly * cos_r,
            )
        )
    return result


def rectangle_vertices(rect: Rectangle) -> Corners:
    return obb_corners(
        rect.x, rect.y, rect.width / 2, rect.height / 2, rect.rotation
    )


def rectangle_vertices_array(rects: Sequence[Rectangle]) -> np.ndarray:
    """Corners of many rectangles at once, shape (N, 4, 2).

    Same corner order and values as ``rectangle_vertices``.
    """
    if not rects:
        return np.empty((0, 4, 2), dtype=np.float64)
    params = np.array(
        [(r.x, r.y, r.width / 2, r.height / 2, r.rotation) for r in rects],
        dtype=np.float64,
    )
    cx = params[:, 0:1]  # (N, 1)
    cy = params[:, 1:2]
    half_w = params[:, 2:3]
    half_h = params[:, 3:4]
    cos_r = np.cos(params[:, 4:5])
    sin_r = np.sin(params[:, 4:5])

    signs = np.array(_CORNER_SIGNS, dtype=np.float64)  # (4, 2)
    lx = signs[:, 0] * half_w  # (N, 4)
    ly = signs[:, 1] * half_h

    out = np.empty((len(rects), 4, 2), dtype=np.float64)
    out[:, :, 0] = cx + lx * cos_r - ly * sin_r
    out[:, :, 1] = cy + lx * sin_r + ly * cos_r
    return out


def intersect_boundary(
    light: Point2,
    through: Point2,
    boundary: WorldBoundary,
) -> Point2:
    """Find where the ray from ``light`` through ``through`` exits the world.

    The light must be strictly inside the boundary. Raises
    ``DegenerateGeometryError`` for a zero-length ray or a light outside.
    """
    lx, ly = light
    dx = through[0] - lx
    dy = through[1] - ly
    if dx == 0.0 and dy == 0.0:
        raise DegenerateGeometryError(
            f"Ray from {light} through {through} has no direction"
        )
    if not boundary.contains(light, strict=True):
        raise DegenerateGeometryError(
            f"Light {light} is not strictly inside the world boundary"
        )

    edge_x = boundary.min_x if dx < 0 else boundary.max_x
    edge_y = boundary.min_y if dy < 0 else boundary.max_y

    # A zero component never reaches the edges on that axis.
    s = (edge_x - lx) / dx if dx != 0.0 else math.inf
    t = (edge_y - ly) / dy if dy != 0.0 else math.inf

    if s < t:
        y = ly + dy * s
        return (edge_x, min(max(y, boundary.min_y), boundary.max_y))
    x = lx + dx * t
    return (min(max(x, boundary.min_x), boundary.max_x), edge_y)

