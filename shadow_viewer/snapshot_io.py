"""Save and load scenes as PNG snapshots (with embedded metadata) or JSON.

The primary format is PNG: the rendered scene is saved with the full scene
JSON embedded in a PNG tEXt chunk (key: ``shadowcaster_scene``). A saved
snapshot is both a shareable picture of the shadows and a complete scene
that can be loaded back into the viewer. JSON files are also supported as a
plain-text alternative.

Used by ``app.py`` for its Save/Load buttons and by
``scripts/render_scene.py``.
"""

import json

from PIL import Image
from PIL.PngImagePlugin import PngInfo

from shadow_engine.scene_io import load_scene
from shadow_engine.types import Scene

METADATA_KEY = "shadowcaster_scene"


def save_snapshot_png(img: Image.Image, scene: Scene, path: str) -> None:
    """Save a rendered image with the scene JSON embedded as a tEXt chunk."""
    info = PngInfo()
    info.add_text(METADATA_KEY, json.dumps(scene.to_dict()))
    img.save(path, pnginfo=info)


def load_snapshot_png(path: str) -> Scene:
    """Load a scene from a PNG file's tEXt metadata.

    Raises ValueError if the PNG does not contain scene metadata.
    """
    img = Image.open(path)
    text_data = getattr(img, "text", None)
    if not text_data or METADATA_KEY not in text_data:
        raise ValueError(
            f"PNG file does not contain scene metadata (missing '{METADATA_KEY}' chunk)"
        )
    return Scene.from_dict(json.loads(text_data[METADATA_KEY]))


def load_snapshot(path: str) -> Scene:
    """Load a scene from a file, dispatching by extension.

    Supports .png (reads embedded metadata) and .json (reads raw JSON).
    Raises ValueError for unsupported extensions.
    """
    lower = path.lower()
    if lower.endswith(".png"):
        return load_snapshot_png(path)
    elif lower.endswith(".json"):
        return load_scene(path)
    else:
        raise ValueError(f"Unsupported file extension: {path}")
