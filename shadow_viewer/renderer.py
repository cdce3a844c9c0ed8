"""Draw a scene and its shadow regions to a Pillow image.

Layers, back to front: the area outside the world, the lit world, the
any-light shadow (pale), the all-light shadow (dark), obstacles, and lights.
World coordinates have y pointing up and the camera center in the middle of
the image; pixel coordinates have y pointing down from the top-left.

Shadow regions can have holes (a ring of obstacles leaves a lit pocket in
the middle), so regions are rasterized through a mask: exteriors are filled,
holes are cleared, and the color is pasted through the mask.
"""

from __future__ import annotations

from PIL import Image, ImageDraw

from shadow_engine.aggregate import ShadowResult
from shadow_engine.geometry import rectangle_vertices
from shadow_engine.scaled_ops import as_region, polygon_rings
from shadow_engine.types import Point2, Scene

# -- Visual constants --

COLOR_OUTSIDE = "#808080"
COLOR_WORLD = "#f0f8ff"
COLOR_SHADOW_UNION = "#c0c0c0"
COLOR_SHADOW_INTERSECTION = "#808080"
COLOR_OBSTACLE = "#404040"
COLOR_LIGHT = "#ff00ff"

LIGHT_RADIUS = 10.0  # world units; cosmetic only


class ShadowRenderer:
    """Renders a scene to a Pillow image.

    ``ppu`` is pixels per world unit; ``center`` is the world point drawn at
    the middle of the image.
    """

    def __init__(
        self,
        width: int,
        height: int,
        ppu: float = 1.0,
        center: Point2 = (0.0, 0.0),
        line_scale: float = 1,
    ):
        self.width = width
        self.height = height
        self.ppu = ppu
        self.center = center
        self.line_scale = line_scale

    def _lw(self, base_width):
        """Scale a pixel width by the supersample factor."""
        return max(1, round(base_width * self.line_scale))

    def to_px(self, x: float, y: float) -> tuple[float, float]:
        """World coords (y up) -> pixel coords (top-left origin, y down)."""
        cx, cy = self.center
        px = (x - cx) * self.ppu + self.width / 2
        py = self.height / 2 - (y - cy) * self.ppu
        return px, py

    def to_world(self, px: float, py: float) -> Point2:
        """Reverse of ``to_px``."""
        cx, cy = self.center
        x = (px - self.width / 2) / self.ppu + cx
        y = (self.height / 2 - py) / self.ppu + cy
        return (x, y)

    def render(self, scene: Scene, result: ShadowResult | None = None):
        img = Image.new("RGB", (self.width, self.height), COLOR_OUTSIDE)
        draw = ImageDraw.Draw(img)

        # 1. World
        b = scene.boundary
        x0, y0 = self.to_px(b.min_x, b.max_y)
        x1, y1 = self.to_px(b.max_x, b.min_y)
        draw.rectangle([x0, y0, x1, y1], fill=COLOR_WORLD)

        # 2. Shadows
        if result is not None:
            self._draw_region(img, result.union_region, COLOR_SHADOW_UNION)
            self._draw_region(
                img, result.intersection_region, COLOR_SHADOW_INTERSECTION
            )

        # 3. Obstacles
        draw = ImageDraw.Draw(img)
        for rect in scene.obstacles:
            corners = rectangle_vertices(rect)
            px_corners = [self.to_px(x, y) for x, y in corners]
            draw.polygon(px_corners, fill=COLOR_OBSTACLE)

        # 4. Lights
        r = LIGHT_RADIUS * self.ppu
        for light in scene.lights:
            px, py = self.to_px(light.x, light.y)
            draw.ellipse([px - r, py - r, px + r, py + r], fill=COLOR_LIGHT)

        # 5. World border
        draw.rectangle([x0, y0, x1, y1], outline="#111111", width=self._lw(2))
        return img

    def _draw_region(self, img, region, color):
        mask = Image.new("L", img.size, 0)
        mdraw = ImageDraw.Draw(mask)
        for poly in as_region(region).geoms:
            exterior, holes = polygon_rings(poly)
            mdraw.polygon([self.to_px(x, y) for x, y in exterior], fill=255)
            for hole in holes:
                mdraw.polygon([self.to_px(x, y) for x, y in hole], fill=0)
        img.paste(color, (0, 0, img.width, img.height), mask)


def fit_ppu(scene: Scene, width: int, height: int, margin: int = 20) -> float:
    """Largest zoom at which the whole world fits with ``margin`` pixels."""
    b = scene.boundary
    ppu = min((width - 2 * margin) / b.width, (height - 2 * margin) / b.height)
    return max(ppu, 1e-6)


def render_image(
    scene: Scene,
    result: ShadowResult | None,
    width: int,
    height: int,
    ppu: float | None = None,
    center: Point2 = (0.0, 0.0),
    supersample: int = 4,
):
    """Render with supersampling, then downsample to ``width`` x ``height``.

    PIL draws polygons without antialiasing; rendering at ``supersample``
    times the size and downsampling with LANCZOS smooths the edges.
    """
    if ppu is None:
        ppu = fit_ppu(scene, width, height)
    renderer = ShadowRenderer(
        width * supersample,
        height * supersample,
        ppu * supersample,
        center,
        line_scale=supersample,
    )
    img = renderer.render(scene, result)
    if supersample != 1:
        img = img.resize((width, height), Image.Resampling.LANCZOS)
    return img
