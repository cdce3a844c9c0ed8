"""Tests for scene JSON load/save helpers."""

import json

import pytest

from shadow_engine.scene_io import load_scene, load_scene_dict, save_scene
from shadow_engine.scenes import museum


def test_save_and_load_round_trip(tmp_path):
    scene = museum()
    path = tmp_path / "nested" / "museum.json"

    save_scene(scene, path)
    loaded = load_scene(path)

    assert loaded.boundary == scene.boundary
    assert loaded.lights == scene.lights
    assert len(loaded.obstacles) == len(scene.obstacles)
    for a, b in zip(loaded.obstacles, scene.obstacles):
        assert a.width == b.width
        assert a.rotation == pytest.approx(b.rotation)


def test_saved_file_is_plain_json(tmp_path):
    path = tmp_path / "scene.json"
    save_scene(museum(), str(path))
    data = json.loads(path.read_text())
    assert set(data) == {"world", "scale", "lights", "obstacles"}


def test_load_dict(tmp_path):
    path = tmp_path / "scene.json"
    path.write_text('{"lights": [{"x": 1, "y": 2}]}')
    assert load_scene_dict(path) == {"lights": [{"x": 1, "y": 2}]}


def test_non_object_rejected(tmp_path):
    path = tmp_path / "scene.json"
    path.write_text("[1, 2, 3]")
    with pytest.raises(ValueError, match="JSON object"):
        load_scene(path)
