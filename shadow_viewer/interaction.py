"""Camera and drag state for the viewer, kept free of Tk so it can be tested.

``ViewState`` is the camera: a zoom factor (world units per screen pixel, so
smaller means closer) and a pan center. Scrolling multiplies the zoom by
0.85 or 1.15 and clamps it to [0.2, 3.0]; panning is clamped so the camera
center never leaves the world; ``reset`` goes back to 1:1 at the origin.

``hit_test`` and ``move_item`` implement drag-and-drop of lights and
obstacles. Lights are tested first since they are drawn on top.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from shadow_engine.geometry import rectangle_vertices
from shadow_engine.types import Point2, Scene, WorldBoundary

from .renderer import LIGHT_RADIUS

ZOOM_IN_FACTOR = 0.85
ZOOM_OUT_FACTOR = 1.15
MIN_ZOOM = 0.2
MAX_ZOOM = 3.0
PAN_STEP = 24.0  # world units per arrow key press

# Lights are kept this far inside the world so they never sit on the edge.
LIGHT_EDGE_MARGIN = 1.0


@dataclass
class ViewState:
    zoom: float = 1.0
    center_x: float = 0.0
    center_y: float = 0.0

    @property
    def ppu(self) -> float:
        return 1.0 / self.zoom

    @property
    def center(self) -> Point2:
        return (self.center_x, self.center_y)

    def scroll(self, direction: int) -> None:
        """Positive direction zooms in, negative zooms out."""
        if direction > 0:
            self.zoom *= ZOOM_IN_FACTOR
        elif direction < 0:
            self.zoom *= ZOOM_OUT_FACTOR
        self.zoom = min(max(self.zoom, MIN_ZOOM), MAX_ZOOM)

    def pan(self, dx: float, dy: float, boundary: WorldBoundary) -> None:
        self.center_x, self.center_y = boundary.clamp(
            (self.center_x + dx, self.center_y + dy)
        )

    def reset(self) -> None:
        self.zoom = 1.0
        self.center_x = 0.0
        self.center_y = 0.0


def point_in_polygon(px: float, py: float, vertices: list[Point2]) -> bool:
    """Ray-casting point-in-polygon test."""
    n = len(vertices)
    inside = False
    j = n - 1
    for i in range(n):
        xi, yi = vertices[i]
        xj, yj = vertices[j]
        if (yi > py) != (yj > py):
            intersect_x = (xj - xi) * (py - yi) / (yj - yi) + xi
            if px < intersect_x:
                inside = not inside
        j = i
    return inside


def hit_test(scene: Scene, point: Point2) -> tuple[str, int] | None:
    """Return ("light", i) or ("obstacle", i) under the point, or None.

    Later items win, matching draw order.
    """
    x, y = point
    for i in reversed(range(len(scene.lights))):
        light = scene.lights[i]
        if (
            abs(x - light.x) <= LIGHT_RADIUS
            and abs(y - light.y) <= LIGHT_RADIUS
        ):
            return ("light", i)
    for i in reversed(range(len(scene.obstacles))):
        if point_in_polygon(x, y, rectangle_vertices(scene.obstacles[i])):
            return ("obstacle", i)
    return None


def _inside(boundary: WorldBoundary, point: Point2, margin: float) -> Point2:
    x, y = point
    return (
        min(max(x, boundary.min_x + margin), boundary.max_x - margin),
        min(max(y, boundary.min_y + margin), boundary.max_y - margin),
    )


def move_item(scene: Scene, target: tuple[str, int], point: Point2) -> None:
    """Move a light or obstacle center to ``point``, clamped to the world."""
    kind, i = target
    if kind == "light":
        x, y = _inside(scene.boundary, point, LIGHT_EDGE_MARGIN)
        scene.lights[i] = replace(scene.lights[i], x=x, y=y)
    elif kind == "obstacle":
        x, y = scene.boundary.clamp(point)
        scene.obstacles[i] = replace(scene.obstacles[i], x=x, y=y)
    else:
        raise ValueError(f"Unknown item kind {kind!r}")


def rotate_obstacle(scene: Scene, i: int, delta_rad: float) -> None:
    rect = scene.obstacles[i]
    scene.obstacles[i] = replace(rect, rotation=rect.rotation + delta_rad)
