"""Fold per-pair shadow polygons into per-light and composite regions.

For every light, the shadow polygons of all obstacles are unioned into that
light's region. Those per-light regions are then combined two ways:

  union_region         in shadow from at least one light
  intersection_region  in shadow from every light at once

All merging goes through the scaled boolean engine (``scaled_ops.py``). Union
folds start from the empty region; the intersection is a reduce over the
per-light regions, so it needs at least one light (``ValueError`` otherwise).

Degenerate pairs (a light inside an obstacle, a light outside the world, a
shadow with no area) are skipped and reported in ``ShadowResult.skipped`` so
one bad pair only drops its own contribution for the frame. Pass
``strict=True`` to get the ``DegenerateGeometryError`` instead. Boolean
engine failures always propagate.

Every call recomputes everything from its arguments; there is no state
between calls. Per-light regions are independent, so ``max_workers`` can
spread them over a thread pool; results are collected in light order and
are identical to the serial path.

The JSON-facing entry point is ``aggregate_json(dict)``, mirroring the scene
document format of ``types.Scene``.
"""

from __future__ import annotations

import functools
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

from shapely.geometry import MultiPolygon

from .errors import DegenerateGeometryError
from .geometry import rectangle_vertices_array
from .scaled_ops import (
    EMPTY_REGION,
    check_scale,
    region_area,
    region_to_json,
    scaled_intersection,
    scaled_union,
)
from .shadow import shadow_polygon_from_corners
from .types import (
    DEFAULT_SCALE,
    Light,
    Point2,
    Rectangle,
    Scene,
    WorldBoundary,
)


@dataclass
class SkippedPair:
    light_index: int
    obstacle_index: int
    reason: str

    def to_dict(self) -> dict:
        return {
            "light_index": self.light_index,
            "obstacle_index": self.obstacle_index,
            "reason": self.reason,
        }


@dataclass
class ShadowResult:
    union_region: MultiPolygon
    intersection_region: MultiPolygon
    light_regions: list[MultiPolygon] = field(default_factory=list)
    skipped: list[SkippedPair] = field(default_factory=list)

    @property
    def union_area(self) -> float:
        return region_area(self.union_region)

    @property
    def intersection_area(self) -> float:
        return region_area(self.intersection_region)

    def to_dict(self) -> dict:
        return {
            "union": region_to_json(self.union_region),
            "intersection": region_to_json(self.intersection_region),
            "lights": [region_to_json(r) for r in self.light_regions],
            "skipped": [s.to_dict() for s in self.skipped],
            "union_area": self.union_area,
            "intersection_area": self.intersection_area,
        }


def _light_position(light: Light | Point2) -> Point2:
    if isinstance(light, Light):
        return light.position
    return (float(light[0]), float(light[1]))


def light_shadow_region(
    light: Point2,
    obstacle_corners: Sequence[Sequence[Point2]],
    boundary: WorldBoundary,
    scale: float = DEFAULT_SCALE,
    strict: bool = False,
    light_index: int = 0,
) -> tuple[MultiPolygon, list[SkippedPair]]:
    """Union of one light's shadows over all obstacles.

    Returns the region and the pairs that were skipped as degenerate.
    """
    region = EMPTY_REGION
    skipped: list[SkippedPair] = []
    for j, corners in enumerate(obstacle_corners):
        try:
            poly = shadow_polygon_from_corners(light, corners, boundary)
        except DegenerateGeometryError as e:
            if strict:
                raise
            skipped.append(SkippedPair(light_index, j, str(e)))
            continue
        region = scaled_union(region, poly, scale)
    return region, skipped


def aggregate(
    lights: Sequence[Light | Point2],
    obstacles: Sequence[Rectangle],
    boundary: WorldBoundary,
    scale: float = DEFAULT_SCALE,
    *,
    strict: bool = False,
    max_workers: int = 0,
) -> ShadowResult:
    """Compute per-light, any-light and all-light shadow regions.

    ``max_workers``: 0 evaluates lights serially, N > 0 uses a pool of N
    threads, -1 lets the executor pick.
    """
    if not lights:
        raise ValueError("At least one light is required to aggregate shadows")
    check_scale(scale)

    positions = [_light_position(light) for light in lights]
    # Corners depend only on the obstacle, so compute them once per call.
    obstacle_corners = [
        [(x, y) for x, y in rect]
        for rect in rectangle_vertices_array(obstacles).tolist()
    ]

    def _one(i: int) -> tuple[MultiPolygon, list[SkippedPair]]:
        return light_shadow_region(
            positions[i], obstacle_corners, boundary, scale, strict, i
        )

    if max_workers != 0 and len(positions) > 1:
        workers = None if max_workers < 0 else max_workers
        with ThreadPoolExecutor(max_workers=workers) as pool:
            per_light = list(pool.map(_one, range(len(positions))))
    else:
        per_light = [_one(i) for i in range(len(positions))]

    light_regions = [region for region, _ in per_light]
    skipped = [pair for _, pairs in per_light for pair in pairs]

    union_region = EMPTY_REGION
    for region in light_regions:
        union_region = scaled_union(union_region, region, scale)

    intersection_region = functools.reduce(
        lambda acc, region: scaled_intersection(acc, region, scale),
        light_regions,
    )

    return ShadowResult(
        union_region=union_region,
        intersection_region=intersection_region,
        light_regions=light_regions,
        skipped=skipped,
    )


def aggregate_scene(scene: Scene, **kwargs) -> ShadowResult:
    return aggregate(
        scene.lights, scene.obstacles, scene.boundary, scene.scale, **kwargs
    )


def aggregate_json(scene_dict: dict) -> dict:
    """JSON-dict in, JSON-dict out wrapper."""
    scene = Scene.from_dict(scene_dict)
    return aggregate_scene(scene).to_dict()
