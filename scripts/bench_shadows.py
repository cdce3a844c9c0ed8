#!/usr/bin/env python3
"""Benchmark shadow aggregation.

Usage (from the repo root):
    python scripts/bench_shadows.py                    # museum, 5 iterations
    python scripts/bench_shadows.py -n 20              # 20 iterations
    python scripts/bench_shadows.py --scene gallery    # built-in gallery scene
    python scripts/bench_shadows.py -j 4 --scale 100   # 4 threads, finer grid
"""

import argparse
import statistics
import sys
import time
from pathlib import Path

# Add the repo root to path
SCRIPT_DIR = Path(__file__).resolve().parent
ROOT_DIR = SCRIPT_DIR.parent
sys.path.insert(0, str(ROOT_DIR))

from shadow_engine.aggregate import aggregate  # noqa: E402
from shadow_engine.scenes import BUILTIN_SCENES, get_scene  # noqa: E402


def main():
    parser = argparse.ArgumentParser(description="Benchmark shadow engine")
    parser.add_argument(
        "-n",
        "--iterations",
        type=int,
        default=5,
        help="Number of iterations (default: 5)",
    )
    parser.add_argument(
        "--scene",
        choices=sorted(BUILTIN_SCENES),
        default="museum",
        help="Built-in scene to benchmark (default: museum)",
    )
    parser.add_argument(
        "--scale",
        type=float,
        default=None,
        help="Override the scene's snapping scale",
    )
    parser.add_argument(
        "-j",
        "--workers",
        type=int,
        default=0,
        help="Thread pool size per call, -1 for auto (default: serial)",
    )
    args = parser.parse_args()

    scene = get_scene(args.scene)
    scale = scene.scale if args.scale is None else args.scale

    print(
        f"Benchmark: {args.scene}, {len(scene.lights)} lights, "
        f"{len(scene.obstacles)} obstacles, scale={scale}, "
        f"workers={args.workers}"
    )
    print(f"Iterations: {args.iterations}")
    print()

    def run():
        return aggregate(
            scene.lights,
            scene.obstacles,
            scene.boundary,
            scale,
            max_workers=args.workers,
        )

    # Warmup
    print("Warmup...", end=" ", flush=True)
    result = run()
    print("done")
    print(
        f"Union area: {result.union_area:.1f}, "
        f"intersection area: {result.intersection_area:.1f}"
    )

    # Timed runs
    times_ms = []
    for i in range(args.iterations):
        start = time.perf_counter()
        run()
        elapsed_ms = (time.perf_counter() - start) * 1000
        times_ms.append(elapsed_ms)
        print(f"  Run {i + 1}: {elapsed_ms:.1f} ms")

    median = statistics.median(times_ms)
    mean = statistics.mean(times_ms)
    print()
    print(f"Median: {median:.1f} ms")
    print(f"Mean:   {mean:.1f} ms")
    if len(times_ms) > 1:
        stdev = statistics.stdev(times_ms)
        print(f"Stdev:  {stdev:.1f} ms")


if __name__ == "__main__":
    main()
