"""Tests for per-light and composite shadow aggregation."""

import math

import pytest
from shapely.geometry import MultiPolygon, Polygon

from shadow_engine.aggregate import (
    ShadowResult,
    aggregate,
    aggregate_json,
    aggregate_scene,
    light_shadow_region,
)
from shadow_engine.errors import DegenerateGeometryError
from shadow_engine.geometry import rectangle_vertices
from shadow_engine.scaled_ops import scaled_intersection, scaled_union
from shadow_engine.scenes import gallery, museum
from shadow_engine.shadow import shadow_polygon
from shadow_engine.types import Light, Rectangle, WorldBoundary

WORLD = WorldBoundary(-480.0, -360.0, 480.0, 360.0)
PILLAR = Rectangle(0.0, -200.0, 60.0, 100.0, 0.0)
WALL = Rectangle(-50.0, 50.0, 10.0, 300.0, math.radians(-60))

# Area slack for comparing snapped regions.
AREA_TOL = 200.0


def _xor_area(a, b):
    return a.symmetric_difference(b).area


class TestInputChecks:
    def test_zero_lights_raises(self):
        with pytest.raises(ValueError, match="light"):
            aggregate([], [PILLAR], WORLD)

    def test_bad_scale_raises(self):
        with pytest.raises(ValueError):
            aggregate([Light(400.0, 0.0)], [PILLAR], WORLD, scale=0.0)

    def test_zero_obstacles_gives_empty_regions(self):
        result = aggregate([Light(400.0, 0.0), Light(-400.0, 0.0)], [], WORLD)
        assert result.union_region.is_empty
        assert result.intersection_region.is_empty
        assert len(result.light_regions) == 2
        assert all(r.is_empty for r in result.light_regions)
        assert result.skipped == []

    def test_tuple_lights_accepted(self):
        a = aggregate([(400.0, 0.0)], [PILLAR], WORLD)
        b = aggregate([Light(400.0, 0.0)], [PILLAR], WORLD)
        assert a.to_dict() == b.to_dict()


class TestSingleLight:
    def test_region_matches_shadow_polygon(self):
        result = aggregate([Light(400.0, 0.0)], [PILLAR], WORLD)
        expected = shadow_polygon((400.0, 0.0), PILLAR, WORLD)
        assert isinstance(result.union_region, MultiPolygon)
        assert _xor_area(result.union_region, expected) < AREA_TOL

    def test_intersection_equals_union(self):
        result = aggregate([Light(400.0, 0.0)], [PILLAR, WALL], WORLD)
        assert result.intersection_region.equals(result.union_region)
        assert result.intersection_area == pytest.approx(result.union_area)

    def test_light_region_unions_all_obstacles(self):
        result = aggregate([Light(400.0, 0.0)], [PILLAR, WALL], WORLD)
        a = shadow_polygon((400.0, 0.0), PILLAR, WORLD)
        b = shadow_polygon((400.0, 0.0), WALL, WORLD)
        assert _xor_area(result.light_regions[0], a.union(b)) < AREA_TOL


class TestTwoLights:
    """Lights on opposite walls, one pillar between them and the floor."""

    LIGHTS = [Light(400.0, 0.0), Light(-400.0, 0.0)]

    def test_union_is_either_shadow(self):
        result = aggregate(self.LIGHTS, [PILLAR], WORLD)
        left = shadow_polygon((400.0, 0.0), PILLAR, WORLD)
        right = shadow_polygon((-400.0, 0.0), PILLAR, WORLD)
        assert _xor_area(result.union_region, left.union(right)) < AREA_TOL

    def test_intersection_is_overlap_of_light_regions(self):
        result = aggregate(self.LIGHTS, [PILLAR], WORLD)
        expected = scaled_intersection(*result.light_regions)
        assert result.intersection_region.equals(expected)

    def test_intersection_contains_obstacle_footprint(self):
        """Each shadow hull includes the obstacle, so the overlap does too."""
        result = aggregate(self.LIGHTS, [PILLAR], WORLD)
        footprint = Polygon(rectangle_vertices(PILLAR))
        missing = footprint.difference(result.intersection_region).area
        assert missing < 1.0
        assert result.intersection_area >= footprint.area - 1.0

    def test_areas_ordered(self):
        result = aggregate(self.LIGHTS, [PILLAR, WALL], WORLD)
        assert 0 < result.intersection_area <= result.union_area
        for region in result.light_regions:
            assert result.intersection_area <= region.area + AREA_TOL
            assert region.area <= result.union_area + AREA_TOL

    def test_lights_are_lit(self):
        result = aggregate(self.LIGHTS, [PILLAR], WORLD)
        for light in self.LIGHTS:
            assert not result.union_region.covers(
                Polygon(
                    [
                        (light.x - 1, light.y - 1),
                        (light.x + 1, light.y - 1),
                        (light.x + 1, light.y + 1),
                        (light.x - 1, light.y + 1),
                    ]
                )
            )


class TestMonotonicity:
    def test_more_lights_shrink_intersection_grow_union(self):
        one = aggregate([Light(400.0, 0.0)], [PILLAR, WALL], WORLD)
        two = aggregate(
            [Light(400.0, 0.0), Light(-400.0, 0.0)], [PILLAR, WALL], WORLD
        )
        assert two.union_area >= one.union_area - AREA_TOL
        assert two.intersection_area <= one.intersection_area + AREA_TOL

    def test_more_obstacles_grow_both(self):
        lights = [Light(400.0, 0.0), Light(-400.0, 0.0)]
        few = aggregate(lights, [PILLAR], WORLD)
        many = aggregate(lights, [PILLAR, WALL], WORLD)
        assert many.union_area >= few.union_area - AREA_TOL
        assert many.intersection_area >= few.intersection_area - AREA_TOL


class TestDeterminism:
    def test_repeat_calls_identical(self):
        scene = museum()
        assert (
            aggregate_scene(scene).to_dict()
            == aggregate_scene(scene).to_dict()
        )

    @pytest.mark.parametrize("workers", [1, 2, -1])
    def test_parallel_matches_serial(self, workers):
        scene = gallery(rows=2, cols=3, lights=3)
        serial = aggregate_scene(scene)
        parallel = aggregate_scene(scene, max_workers=workers)
        assert parallel.to_dict() == serial.to_dict()

    def test_union_fold_matches_manual_fold(self):
        lights = [Light(400.0, 0.0), Light(-400.0, 0.0), Light(0.0, 300.0)]
        result = aggregate(lights, [PILLAR, WALL], WORLD)
        manual = result.light_regions[0]
        for region in result.light_regions[1:]:
            manual = scaled_union(manual, region)
        assert result.union_region.equals(manual)


class TestDegeneratePairs:
    def test_light_inside_obstacle_skipped(self):
        lights = [Light(0.0, -200.0), Light(400.0, 0.0)]
        result = aggregate(lights, [PILLAR], WORLD)
        assert len(result.skipped) == 1
        skip = result.skipped[0]
        assert (skip.light_index, skip.obstacle_index) == (0, 0)
        assert skip.reason
        assert result.light_regions[0].is_empty
        assert result.intersection_region.is_empty
        assert result.union_area > 0

    def test_other_obstacles_still_cast(self):
        result = aggregate([Light(0.0, -200.0)], [PILLAR, WALL], WORLD)
        assert [s.obstacle_index for s in result.skipped] == [0]
        assert result.union_area > 0

    def test_strict_raises(self):
        with pytest.raises(DegenerateGeometryError):
            aggregate([Light(0.0, -200.0)], [PILLAR], WORLD, strict=True)

    def test_light_outside_world_skips_every_pair(self):
        result = aggregate([Light(600.0, 0.0)], [PILLAR, WALL], WORLD)
        assert len(result.skipped) == 2
        assert result.union_region.is_empty

    def test_light_shadow_region_reports_index(self):
        corners = [rectangle_vertices(PILLAR)]
        region, skipped = light_shadow_region(
            (0.0, -200.0), corners, WORLD, light_index=7
        )
        assert region.is_empty
        assert skipped[0].light_index == 7


class TestSerialization:
    def test_result_to_dict(self):
        result = aggregate_scene(museum())
        data = result.to_dict()
        assert set(data) == {
            "union",
            "intersection",
            "lights",
            "skipped",
            "union_area",
            "intersection_area",
        }
        assert len(data["lights"]) == 2
        assert data["union_area"] == pytest.approx(result.union_area)
        for part in data["union"]:
            assert len(part["exterior"]) >= 3

    def test_aggregate_json(self):
        data = aggregate_json(museum().to_dict())
        assert data["skipped"] == []
        assert data["union_area"] > data["intersection_area"] > 0

    def test_empty_result(self):
        empty = ShadowResult(MultiPolygon(), MultiPolygon())
        assert empty.to_dict()["union"] == []
        assert empty.union_area == 0.0


def test_museum_has_no_skipped_pairs():
    result = aggregate_scene(museum())
    assert result.skipped == []
    assert result.union_area > 0
