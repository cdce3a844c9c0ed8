#!/usr/bin/env python3
"""Render a scene's shadows to a PNG snapshot without opening the viewer.

The scene is read from a JSON or PNG snapshot file, or taken from the
built-in scenes by name. The PNG carries the scene as metadata so it can be
opened in the viewer afterwards. Pass --json to also dump the shadow regions.

Usage (from the repo root):
    python scripts/render_scene.py museum out.png
    python scripts/render_scene.py my_scene.json out.png --size 1920x1440
    python scripts/render_scene.py museum out.png --json regions.json
"""

import argparse
import json
import sys
from pathlib import Path

# Add the repo root to path
SCRIPT_DIR = Path(__file__).resolve().parent
ROOT_DIR = SCRIPT_DIR.parent
sys.path.insert(0, str(ROOT_DIR))

from shadow_engine.aggregate import aggregate_scene  # noqa: E402
from shadow_engine.scenes import BUILTIN_SCENES, get_scene  # noqa: E402
from shadow_viewer.renderer import render_image  # noqa: E402
from shadow_viewer.snapshot_io import (  # noqa: E402
    load_snapshot,
    save_snapshot_png,
)


def parse_size(text: str) -> tuple[int, int]:
    try:
        w, h = text.lower().split("x")
        return int(w), int(h)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"Expected WIDTHxHEIGHT, got {text!r}"
        ) from None


def main() -> None:
    parser = argparse.ArgumentParser(description="Render scene shadows")
    parser.add_argument(
        "scene",
        help=f"Scene file (.json/.png) or one of: {', '.join(BUILTIN_SCENES)}",
    )
    parser.add_argument("output", help="Output PNG path")
    parser.add_argument(
        "--size",
        type=parse_size,
        default=(960, 720),
        help="Image size as WIDTHxHEIGHT (default: 960x720)",
    )
    parser.add_argument(
        "--json", metavar="PATH", help="Also write shadow regions as JSON"
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on degenerate light/obstacle pairs instead of skipping",
    )
    args = parser.parse_args()

    if args.scene in BUILTIN_SCENES:
        scene = get_scene(args.scene)
    else:
        scene = load_snapshot(args.scene)

    result = aggregate_scene(scene, strict=args.strict)
    for skip in result.skipped:
        print(
            f"Skipped light {skip.light_index} / obstacle "
            f"{skip.obstacle_index}: {skip.reason}"
        )

    width, height = args.size
    img = render_image(scene, result, width, height)
    Path(args.output).parent.mkdir(parents=True, exist_ok=True)
    save_snapshot_png(img, scene, args.output)
    print(f"Wrote {args.output}")
    print(f"Union area:        {result.union_area:.1f}")
    print(f"Intersection area: {result.intersection_area:.1f}")

    if args.json:
        with open(args.json, "w") as f:
            json.dump(result.to_dict(), f, indent=2)
        print(f"Wrote {args.json}")


if __name__ == "__main__":
    main()
