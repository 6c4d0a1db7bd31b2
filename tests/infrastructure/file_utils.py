"""
Helpers for creating project trees in tests.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional


def write(p: Path, text: str) -> Path:
    """
    Write text to a file, creating parent directories as needed.

    Written without newline translation, so '\\r\\n' fixtures stay '\\r\\n'.
    """
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", encoding="utf-8", newline="") as f:
        f.write(text)
    return p


def read(p: Path) -> str:
    with p.open("r", encoding="utf-8", newline="") as f:
        return f.read()


def write_installer_config(root: Path, text: str) -> Path:
    return write(root / ".component-installer.yaml", text)


def write_composer_json(p: Path, name: str, laminas: Optional[Dict[str, Any]] = None, *, key: str = "laminas") -> Path:
    """composer.json of a package declaring component installer metadata under extra.<key>."""
    data: Dict[str, Any] = {"name": name, "type": "library"}
    if laminas is not None:
        data["extra"] = {key: laminas}
    return write(p, json.dumps(data, indent=4) + "\n")


__all__ = ["write", "read", "write_composer_json", "write_installer_config"]
