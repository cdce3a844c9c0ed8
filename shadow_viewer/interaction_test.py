"""Tests for the viewer's camera and drag helpers."""

import math

import pytest

from shadow_engine.scenes import museum
from shadow_engine.types import Light, Rectangle, Scene, WorldBoundary

from .interaction import (
    MAX_ZOOM,
    MIN_ZOOM,
    ViewState,
    hit_test,
    move_item,
    point_in_polygon,
    rotate_obstacle,
)

WORLD = WorldBoundary(-480.0, -360.0, 480.0, 360.0)


class TestViewState:
    def test_scroll_in_and_out(self):
        view = ViewState()
        view.scroll(1)
        assert view.zoom == pytest.approx(0.85)
        view.scroll(-1)
        assert view.zoom == pytest.approx(0.85 * 1.15)

    def test_zero_scroll_is_noop(self):
        view = ViewState(zoom=1.5)
        view.scroll(0)
        assert view.zoom == 1.5

    def test_zoom_clamped(self):
        view = ViewState()
        for _ in range(50):
            view.scroll(1)
        assert view.zoom == MIN_ZOOM
        for _ in range(50):
            view.scroll(-1)
        assert view.zoom == MAX_ZOOM

    def test_ppu_is_inverse_zoom(self):
        assert ViewState(zoom=0.5).ppu == 2.0

    def test_pan_clamped_to_world(self):
        view = ViewState()
        view.pan(24.0, -24.0, WORLD)
        assert view.center == (24.0, -24.0)
        view.pan(10_000.0, -10_000.0, WORLD)
        assert view.center == (480.0, -360.0)

    def test_reset(self):
        view = ViewState(zoom=2.0, center_x=10.0, center_y=-5.0)
        view.reset()
        assert view == ViewState()


class TestPointInPolygon:
    SQUARE = [(0, 0), (1, 0), (1, 1), (0, 1)]

    def test_inside(self):
        assert point_in_polygon(0.5, 0.5, self.SQUARE) is True

    def test_outside(self):
        assert point_in_polygon(1.5, 0.5, self.SQUARE) is False
        assert point_in_polygon(0.5, -0.5, self.SQUARE) is False

    def test_concave(self):
        poly = [(0, 0), (2, 0), (2, 1), (1, 1), (1, 2), (0, 2)]
        assert point_in_polygon(0.5, 1.5, poly) is True
        assert point_in_polygon(1.5, 1.5, poly) is False


class TestHitTest:
    def test_light_hit(self):
        assert hit_test(museum(), (405.0, -3.0)) == ("light", 0)
        assert hit_test(museum(), (-400.0, 9.0)) == ("light", 1)

    def test_obstacle_hit(self):
        assert hit_test(museum(), (0.0, -200.0)) == ("obstacle", 0)

    def test_rotated_obstacle_hit(self):
        # Along the long axis of the -60 degree wall.
        x = -50.0 + 100.0 * math.sin(math.radians(60))
        y = 50.0 + 100.0 * math.cos(math.radians(60))
        assert hit_test(museum(), (x, y)) == ("obstacle", 1)

    def test_miss(self):
        assert hit_test(museum(), (200.0, 300.0)) is None

    def test_light_wins_over_obstacle(self):
        scene = Scene(
            boundary=WORLD,
            lights=[Light(0.0, 0.0)],
            obstacles=[Rectangle(0.0, 0.0, 100.0, 100.0)],
        )
        assert hit_test(scene, (1.0, 1.0)) == ("light", 0)

    def test_topmost_obstacle_wins(self):
        scene = Scene(
            boundary=WORLD,
            obstacles=[
                Rectangle(0.0, 0.0, 100.0, 100.0),
                Rectangle(10.0, 10.0, 20.0, 20.0),
            ],
        )
        assert hit_test(scene, (10.0, 10.0)) == ("obstacle", 1)
        assert hit_test(scene, (-40.0, -40.0)) == ("obstacle", 0)


class TestMoveItem:
    def test_move_light(self):
        scene = museum()
        move_item(scene, ("light", 0), (100.0, 50.0))
        assert scene.lights[0] == Light(100.0, 50.0)

    def test_light_kept_off_the_edge(self):
        scene = museum()
        move_item(scene, ("light", 1), (-900.0, 900.0))
        light = scene.lights[1]
        assert scene.boundary.contains(light.position, strict=True)
        assert light.x == pytest.approx(-479.0)
        assert light.y == pytest.approx(359.0)

    def test_move_obstacle_keeps_size_and_rotation(self):
        scene = museum()
        before = scene.obstacles[1]
        move_item(scene, ("obstacle", 1), (600.0, 0.0))
        after = scene.obstacles[1]
        assert after.center == (480.0, 0.0)
        assert (after.width, after.height, after.rotation) == (
            before.width,
            before.height,
            before.rotation,
        )

    def test_unknown_kind(self):
        with pytest.raises(ValueError):
            move_item(museum(), ("mirror", 0), (0.0, 0.0))


def test_rotate_obstacle():
    scene = museum()
    rotate_obstacle(scene, 0, math.radians(30))
    assert scene.obstacles[0].rotation == pytest.approx(math.radians(30))
