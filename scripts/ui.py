#!/usr/bin/env python3
"""Run the Shadowcaster viewer from anywhere.

Extra arguments are passed through to ``shadow_viewer.app``.

Usage:
    python scripts/ui.py
    python scripts/ui.py --scene gallery
"""

import os
import sys

from _env import ROOT_DIR, child_env, find_python


def main() -> None:
    python = find_python()
    os.chdir(ROOT_DIR)
    os.execve(
        str(python),
        [str(python), "-m", "shadow_viewer.app", *sys.argv[1:]],
        child_env(python),
    )


if __name__ == "__main__":
    main()
