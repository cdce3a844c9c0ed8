"""Built-in scenes.

``museum`` is the default room: two lights on opposite walls and three
obstacles of different sizes and angles in a 960 x 720 world. The others are
small fixtures that are handy for the viewer and benchmarks.
"""

from __future__ import annotations

import math

from .types import (
    WORLD_HEIGHT,
    WORLD_WIDTH,
    Light,
    Rectangle,
    Scene,
    WorldBoundary,
)


def museum() -> Scene:
    return Scene(
        boundary=WorldBoundary.centered(WORLD_WIDTH, WORLD_HEIGHT),
        lights=[Light(400.0, 0.0), Light(-400.0, 0.0)],
        obstacles=[
            Rectangle(0.0, -200.0, 60.0, 100.0, 0.0),
            Rectangle(-50.0, 50.0, 10.0, 300.0, math.radians(-60.0)),
            Rectangle(-350.0, -250.0, 20.0, 70.0, math.radians(-45.0)),
        ],
    )


def single_pillar() -> Scene:
    """One light and one pillar, no overlaps."""
    return Scene(
        boundary=WorldBoundary.centered(WORLD_WIDTH, WORLD_HEIGHT),
        lights=[Light(400.0, 0.0)],
        obstacles=[Rectangle(0.0, -200.0, 60.0, 100.0, 0.0)],
    )


def gallery(rows: int = 4, cols: int = 6, lights: int = 3) -> Scene:
    """Grid of rotated plinths lit from points along the top wall."""
    boundary = WorldBoundary.centered(WORLD_WIDTH, WORLD_HEIGHT)
    obstacles = []
    for r in range(rows):
        for c in range(cols):
            x = boundary.min_x + (c + 1) * boundary.width / (cols + 1)
            y = boundary.min_y + (r + 1) * boundary.height / (rows + 2)
            rot = math.radians(15.0 * ((r + c) % 6))
            obstacles.append(Rectangle(x, y, 30.0, 50.0, rot))
    light_y = boundary.max_y - 40.0
    spacing = boundary.width / (lights + 1)
    light_list = [
        Light(boundary.min_x + (i + 1) * spacing, light_y)
        for i in range(lights)
    ]
    return Scene(boundary=boundary, lights=light_list, obstacles=obstacles)


BUILTIN_SCENES = {
    "museum": museum,
    "single_pillar": single_pillar,
    "gallery": gallery,
}


def get_scene(name: str) -> Scene:
    try:
        factory = BUILTIN_SCENES[name]
    except KeyError:
        raise KeyError(
            f"Unknown scene {name!r}; expected one of "
            f"{', '.join(BUILTIN_SCENES)}"
        ) from None
    return factory()
