"""
Base exception for user-facing errors.

All expected errors that should be displayed to the user
as clean messages (without stack traces) must inherit from InstallerUserError.

Programming errors and bugs should NOT inherit from InstallerUserError;
they will propagate with full tracebacks.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class InstallerUserError(Exception):
    """
    Base class for all user-facing errors of the component installer.

    These errors indicate problems that the user can fix:
    a config file the installer cannot read safely, invalid project
    configuration, unreadable package metadata, etc.
    """
    pass


class AmbiguousSpanError(InstallerUserError):
    """
    The list literal was found but its closing delimiter could not be matched.

    Raised instead of guessing: a guessed span could corrupt the file.
    """

    def __init__(
        self,
        path: Optional[Path],
        role: Optional[str],
        entry: Optional[str],
        detail: str,
    ) -> None:
        self.path = path
        self.role = role
        self.entry = entry
        self.detail = detail
        where = str(path) if path is not None else "<text>"
        what = f" while processing {role or 'entry'} '{entry}'" if entry else ""
        super().__init__(f"Cannot safely edit {where}{what}: {detail}")


class ConfigLoadError(InstallerUserError):
    """Invalid .component-installer.yaml (with the offending key in the message)."""
    pass


class PackageMetadataError(InstallerUserError):
    """Package description (composer.json) is missing or malformed."""
    pass


__all__ = ["InstallerUserError", "AmbiguousSpanError", "ConfigLoadError", "PackageMetadataError"]
