"""
Project configuration: optional `.component-installer.yaml` in the project root.

    remember: ask            # ask | always | never
    exclude:
      - config/development.config.php
    files:                   # extra config files -> injector name
      config/autoload/extra.modules.php: modules-config
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Any, Dict, Iterable, List, Literal, Optional, Tuple

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import ConfigLoadError

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".component-installer.yaml"

RememberPolicy = Literal["ask", "always", "never"]

_yaml = YAML(typ="safe")


def _assert_only_keys(d: Dict[str, Any], allowed: Iterable[str], *, ctx: str) -> None:
    extra = set(d.keys()) - set(allowed)
    if extra:
        raise ConfigLoadError(f"{ctx}: unknown key(s): {', '.join(sorted(map(str, extra)))}")


def normalize_rel_path(path: str) -> str:
    """Project-relative path with forward slashes and no "./" prefix."""
    return PurePosixPath(str(path).replace("\\", "/")).as_posix()


@dataclass
class InstallerConfig:
    remember: RememberPolicy = "ask"
    exclude: List[str] = field(default_factory=list)
    # (relative path, injector name), in declaration order
    files: List[Tuple[str, str]] = field(default_factory=list)

    def is_excluded(self, rel_path: str) -> bool:
        return normalize_rel_path(rel_path) in self.exclude

    @staticmethod
    def from_dict(d: Optional[Dict[str, Any]], *, ctx: str = CONFIG_FILE_NAME) -> InstallerConfig:
        if not d:
            return InstallerConfig()
        if not isinstance(d, dict):
            raise ConfigLoadError(f"{ctx}: must be a mapping")
        _assert_only_keys(d, ["remember", "exclude", "files"], ctx=ctx)

        remember = d.get("remember", "ask")
        if remember not in ("ask", "always", "never"):
            raise ConfigLoadError(f"{ctx}: remember must be one of ask, always, never (got {remember!r})")

        exclude_raw = d.get("exclude", []) or []
        if not isinstance(exclude_raw, list) or not all(isinstance(x, str) for x in exclude_raw):
            raise ConfigLoadError(f"{ctx}: exclude must be a list of paths")

        files_raw = d.get("files", {}) or {}
        if not isinstance(files_raw, dict):
            raise ConfigLoadError(f"{ctx}: files must be a mapping of path -> injector name")

        # Imported here: the registry pulls in the injector package
        from .injectors import list_injectors
        known = set(list_injectors())
        files: List[Tuple[str, str]] = []
        for rel, name in files_raw.items():
            if not isinstance(rel, str) or not isinstance(name, str):
                raise ConfigLoadError(f"{ctx}: files.{rel}: expected 'path: injector-name'")
            if name not in known:
                raise ConfigLoadError(
                    f"{ctx}: files.{rel}: unknown injector '{name}' (known: {', '.join(sorted(known))})"
                )
            files.append((normalize_rel_path(rel), name))

        return InstallerConfig(
            remember=remember,
            exclude=[normalize_rel_path(x) for x in exclude_raw],
            files=files,
        )


def load_config(project_root: Path) -> InstallerConfig:
    """Read `.component-installer.yaml`; a missing file means defaults."""
    path = project_root / CONFIG_FILE_NAME
    if not path.is_file():
        logger.debug("No %s in %s, using defaults", CONFIG_FILE_NAME, project_root)
        return InstallerConfig()
    try:
        raw = _yaml.load(path.read_text(encoding="utf-8"))
    except YAMLError as e:
        raise ConfigLoadError(f"{path}: invalid YAML: {e}") from e
    cfg = InstallerConfig.from_dict(raw, ctx=str(path))
    logger.debug("Loaded %s: remember=%s, %d exclude(s), %d extra file(s)",
                 path, cfg.remember, len(cfg.exclude), len(cfg.files))
    return cfg


__all__ = ["CONFIG_FILE_NAME", "InstallerConfig", "RememberPolicy", "load_config", "normalize_rel_path"]
