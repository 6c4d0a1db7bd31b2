from __future__ import annotations

from importlib import metadata

_DISTRIBUTIONS = ("component-installer", "compinst")


def tool_version() -> str:
    """Installed version of the tool; "0.0.0" when running from a source checkout."""
    for dist in _DISTRIBUTIONS:
        try:
            return metadata.version(dist)
        except metadata.PackageNotFoundError:
            continue
    return "0.0.0"


__all__ = ["tool_version"]
