"""Data types matching the shadowcaster scene JSON schema."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

Point2 = tuple[float, float]

DEFAULT_SCALE = 10.0

# World extent of the built-in museum scene.
WORLD_WIDTH = 960.0
WORLD_HEIGHT = 720.0


@dataclass(frozen=True)
class Rectangle:
    """Oriented rectangle: center, full side lengths, rotation in radians."""

    x: float
    y: float
    width: float
    height: float
    rotation: float = 0.0

    @property
    def center(self) -> Point2:
        return (self.x, self.y)

    @staticmethod
    def from_dict(d: dict) -> Rectangle:
        return Rectangle(
            x=d.get("x", 0.0),
            y=d.get("y", 0.0),
            width=d["width"],
            height=d["height"],
            rotation=math.radians(d.get("rotation_deg", 0.0)),
        )

    def to_dict(self) -> dict:
        return {
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "rotation_deg": math.degrees(self.rotation),
        }


@dataclass(frozen=True)
class WorldBoundary:
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    def __post_init__(self) -> None:
        if not (self.min_x < self.max_x and self.min_y < self.max_y):
            raise ValueError(
                "World boundary must have min < max on both axes, got "
                f"({self.min_x}, {self.min_y})-({self.max_x}, {self.max_y})"
            )

    @staticmethod
    def centered(width: float, height: float) -> WorldBoundary:
        """Origin-centered world: x in [-w/2, w/2], y in [-h/2, h/2]."""
        return WorldBoundary(-width / 2, -height / 2, width / 2, height / 2)

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def corners(self) -> list[Point2]:
        """Corners counter-clockwise from the top-right."""
        return [
            (self.max_x, self.max_y),
            (self.min_x, self.max_y),
            (self.min_x, self.min_y),
            (self.max_x, self.min_y),
        ]

    def contains(self, point: Point2, strict: bool = False) -> bool:
        px, py = point
        if strict:
            return (
                self.min_x < px < self.max_x and self.min_y < py < self.max_y
            )
        return (
            self.min_x <= px <= self.max_x and self.min_y <= py <= self.max_y
        )

    def clamp(self, point: Point2) -> Point2:
        px, py = point
        return (
            min(max(px, self.min_x), self.max_x),
            min(max(py, self.min_y), self.max_y),
        )

    @staticmethod
    def from_dict(d: dict) -> WorldBoundary:
        return WorldBoundary(
            min_x=d["min_x"],
            min_y=d["min_y"],
            max_x=d["max_x"],
            max_y=d["max_y"],
        )

    def to_dict(self) -> dict:
        return {
            "min_x": self.min_x,
            "min_y": self.min_y,
            "max_x": self.max_x,
            "max_y": self.max_y,
        }


@dataclass(frozen=True)
class Light:
    x: float
    y: float

    @property
    def position(self) -> Point2:
        return (self.x, self.y)

    @staticmethod
    def from_dict(d: dict) -> Light:
        return Light(x=d["x"], y=d["y"])

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y}


@dataclass
class Scene:
    boundary: WorldBoundary
    lights: list[Light] = field(default_factory=list)
    obstacles: list[Rectangle] = field(default_factory=list)
    scale: float = DEFAULT_SCALE

    @staticmethod
    def from_dict(d: dict) -> Scene:
        world = d.get("world")
        if world is None:
            boundary = WorldBoundary.centered(WORLD_WIDTH, WORLD_HEIGHT)
        else:
            boundary = WorldBoundary.from_dict(world)
        return Scene(
            boundary=boundary,
            lights=[Light.from_dict(lt) for lt in d.get("lights", [])],
            obstacles=[
                Rectangle.from_dict(o) for o in d.get("obstacles", [])
            ],
            scale=d.get("scale", DEFAULT_SCALE),
        )

    def to_dict(self) -> dict:
        return {
            "world": self.boundary.to_dict(),
            "scale": self.scale,
            "lights": [lt.to_dict() for lt in self.lights],
            "obstacles": [o.to_dict() for o in self.obstacles],
        }
