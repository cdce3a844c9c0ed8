"""Hard shadow of one rectangular obstacle from one point light.

Because the obstacle is convex and the light is a point, the occluded part of
the world is itself convex: it is the convex hull of

  1. the obstacle's four corners (the silhouette nearest the light),
  2. each corner projected away from the light onto the world boundary
     (the far edge of the shadow, cast onto the walls), and
  3. every world corner whose line of sight to the light crosses the
     obstacle. Those corners sit fully inside the shadow, and without them
     the hull would cut across the corner of the world.

Building the hull avoids clipping polygons against the world entirely. The
only clipping is of the obstacle itself: when it pokes out of the world, the
hull is built from the part inside, so every vertex of the result stays
inside the boundary. An obstacle wholly outside the world casts nothing and
gives an empty polygon.

A light inside (or on the edge of) its obstacle has no meaningful shadow
direction; that and any hull without area raise ``DegenerateGeometryError``
rather than returning some arbitrary shape.
"""

from __future__ import annotations

from collections.abc import Sequence

import shapely
from shapely.geometry import LineString, MultiPoint, Point, Polygon

from .errors import DegenerateGeometryError
from .geometry import intersect_boundary, rectangle_vertices
from .types import Point2, Rectangle, WorldBoundary


def occluded_world_corners(
    light: Point2,
    footprint,
    boundary: WorldBoundary,
) -> list[Point2]:
    """World corners whose segment to the light touches the obstacle."""
    return [
        corner
        for corner in boundary.corners()
        if LineString([light, corner]).intersects(footprint)
    ]


def shadow_polygon_from_corners(
    light: Point2,
    corners: Sequence[Point2],
    boundary: WorldBoundary,
) -> Polygon:
    """Shadow polygon for an obstacle given by its world-space corners.

    Returns an empty polygon when the obstacle lies entirely outside the
    world.
    """
    corners = [(float(x), float(y)) for x, y in corners]
    if not boundary.contains(light, strict=True):
        raise DegenerateGeometryError(
            f"Light {light} is not strictly inside the world boundary"
        )

    # Polygon for a real rectangle, LineString or Point if it has no area.
    footprint = MultiPoint(corners).convex_hull
    if footprint.covers(Point(light)):
        raise DegenerateGeometryError(
            f"Light {light} lies inside or on the obstacle"
        )

    # Only the part inside the world can block light. Casting corners that
    # lie outside would land on walls in front of the obstacle.
    if not all(boundary.contains(c) for c in corners):
        footprint = shapely.clip_by_rect(
            footprint,
            boundary.min_x,
            boundary.min_y,
            boundary.max_x,
            boundary.max_y,
        )
        if footprint.is_empty:
            return Polygon()
        corners = [
            (float(x), float(y))
            for x, y in shapely.get_coordinates(footprint)
        ]

    cast = [intersect_boundary(light, c, boundary) for c in corners]
    hidden = occluded_world_corners(light, footprint, boundary)

    hull = MultiPoint(corners + cast + hidden).convex_hull
    if not isinstance(hull, Polygon) or hull.area <= 0:
        raise DegenerateGeometryError(
            f"Shadow of obstacle from light {light} has no area "
            f"(hull is {hull.geom_type})"
        )
    return hull


def shadow_polygon(
    light: Point2,
    obstacle: Rectangle,
    boundary: WorldBoundary,
) -> Polygon:
    """Convex region of the world hidden from ``light`` by ``obstacle``."""
    return shadow_polygon_from_corners(
        light, rectangle_vertices(obstacle), boundary
    )
