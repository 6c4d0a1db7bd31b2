"""
Utilities for running the CLI in tests.
"""

import json
import os
import subprocess
import sys
from pathlib import Path


def run_cli(root: Path, *args: str) -> subprocess.CompletedProcess:
    """
    Run `python -m compinst.cli --root <root> ARGS...` with the project root as cwd.
    """
    env = os.environ.copy()
    env.pop("COMPINST_DEBUG", None)
    return subprocess.run(
        [sys.executable, "-m", "compinst.cli", "--root", str(root), *args],
        cwd=root, env=env, capture_output=True, text=True, encoding="utf-8",
    )


def jload(stdout: str):
    """Parse JSON from CLI stdout."""
    return json.loads(stdout)


__all__ = ["run_cli", "jload"]
