"""Load and save scene documents from/to JSON files.

Provides helpers for reading a scene JSON file into a typed ``Scene`` (via
``types.py``) or a raw dict, and for writing a scene back out.

Used by:
  - ``scripts/render_scene.py``: renders a scene file to PNG.
  - ``shadow_viewer/snapshot_io.py``: JSON half of the viewer's Load button.
"""

from __future__ import annotations

import json
from pathlib import Path

from .types import Scene


def load_scene(path: Path | str) -> Scene:
    """Load a JSON scene file and return a typed ``Scene``."""
    return Scene.from_dict(load_scene_dict(path))


def load_scene_dict(path: Path | str) -> dict:
    with open(path) as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(
            f"Scene file {path} must contain a JSON object, "
            f"got {type(data).__name__}"
        )
    return data


def save_scene(scene: Scene, path: Path | str) -> None:
    """Write a scene to a JSON file.

    Creates parent directories if they don't exist.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(scene.to_dict(), f, indent=2)
        f.write("\n")
