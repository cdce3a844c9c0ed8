"""Interpreter discovery shared by the helper scripts.

Prefers the repo-local venv at ``.env/`` (created with
``python3 -m venv .env && .env/bin/pip install -e .[test]``) and falls back
to the interpreter running the script, which is the right choice when the
package was installed into an already-active environment.
"""

import os
import sys
from pathlib import Path

SCRIPT_DIR = Path(__file__).resolve().parent
ROOT_DIR = SCRIPT_DIR.parent


def find_python() -> Path:
    # Windows: Scripts/python.exe, Unix: bin/python
    candidates = [
        ROOT_DIR / ".env" / "bin" / "python",
        ROOT_DIR / ".env" / "Scripts" / "python.exe",
    ]
    for p in candidates:
        if p.is_file():
            return p
    print(
        f"No venv at {ROOT_DIR / '.env'}, using {sys.executable}",
        file=sys.stderr,
    )
    return Path(sys.executable)


def child_env(python: Path) -> dict:
    """Environment for running ``python`` with the repo root importable."""
    env = os.environ.copy()
    env["PYTHONPATH"] = os.pathsep.join(
        p for p in (str(ROOT_DIR), env.get("PYTHONPATH", "")) if p
    )
    if python.parent.parent.joinpath("pyvenv.cfg").is_file():
        env["VIRTUAL_ENV"] = str(python.parent.parent)
        env["PATH"] = str(python.parent) + os.pathsep + env.get("PATH", "")
    return env
