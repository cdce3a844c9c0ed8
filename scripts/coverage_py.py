#!/usr/bin/env python3
"""Run the engine and viewer unit tests with coverage.

Produces a terminal summary and an HTML report in coverage_py/html/.

Usage:
    python scripts/coverage_py.py                  # terminal + HTML report
    python scripts/coverage_py.py --html           # also open the report
    python scripts/coverage_py.py --fail-under 90  # exit 2 below 90%
"""

import argparse
import subprocess
import sys
from pathlib import Path

from _env import ROOT_DIR, child_env, find_python

COV_DIR = ROOT_DIR / "coverage_py"
PACKAGES = ("shadow_engine", "shadow_viewer")


def run(python: Path, *args: str) -> None:
    """Run ``python -m <args>`` from the repo root, exiting on failure."""
    result = subprocess.run(
        [str(python), "-m", *args],
        cwd=str(ROOT_DIR),
        env=child_env(python),
    )
    if result.returncode != 0:
        sys.exit(result.returncode)


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument(
        "--html", action="store_true", help="Open the HTML report"
    )
    parser.add_argument(
        "--fail-under",
        type=float,
        default=None,
        help="Fail if total coverage is below this percentage",
    )
    args = parser.parse_args()

    python = find_python()
    data_file = f"--data-file={COV_DIR / '.coverage'}"

    print("Running unit tests with coverage...")
    run(
        python,
        "coverage",
        "run",
        data_file,
        f"--source={','.join(PACKAGES)}",
        "-m",
        "pytest",
        *(f"{p}/" for p in PACKAGES),
    )

    print("\n=== Coverage Report ===")
    report = ["coverage", "report", data_file]
    if args.fail_under is not None:
        report.append(f"--fail-under={args.fail_under}")
    run(python, *report)

    html_dir = COV_DIR / "html"
    print("\nGenerating HTML report...")
    run(python, "coverage", "html", data_file, f"--directory={html_dir}")

    index = html_dir / "index.html"
    print(f"HTML report: {index}")

    if args.html:
        import webbrowser

        webbrowser.open(index.as_uri())


if __name__ == "__main__":
    main()
