"""
Discovery of the config files a package can be registered in.

A well-known file is offered when it exists, actually declares the list its
injector edits, and that injector accepts one of the package's roles.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from .config import InstallerConfig
from .core import has_anchor
from .fs import read_text_exact
from .injectors import Injector, ListInjector, NoopInjector, get_injector_by_name, known_config_files
from .types import ListRole

logger = logging.getLogger(__name__)

NOOP_PROMPT = "Do not inject"


@dataclass(frozen=True)
class ConfigOption:
    prompt_text: str
    injector: Injector

    @property
    def is_noop(self) -> bool:
        return isinstance(self.injector, NoopInjector)


class ConfigDiscovery:
    def __init__(self, project_root: Path | str = "", config: Optional[InstallerConfig] = None) -> None:
        self.project_root = Path(project_root) if project_root else Path.cwd()
        self.config = config or InstallerConfig()

    def candidates(self) -> List[Tuple[str, str]]:
        """(relative path, injector name): built-in files first, then configured extras."""
        seen = set()
        out: List[Tuple[str, str]] = []
        for rel, name in [*known_config_files(), *self.config.files]:
            if rel in seen or self.config.is_excluded(rel):
                continue
            seen.add(rel)
            out.append((rel, name))
        return out

    def _probe(self, injector: ListInjector) -> bool:
        path = injector.path
        if not path.is_file():
            return False
        try:
            text = read_text_exact(path)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Skipping %s: cannot read it (%s)", injector.config_file, e)
            return False
        return has_anchor(text, injector.anchors)

    def available_options(self, roles: Iterable[ListRole]) -> List[ConfigOption]:
        """
        Options to offer for a package exposing `roles`.

        The first option is always "Do not inject". When no file qualifies
        the result is empty rather than a lone no-op choice.
        """
        roles = list(roles)
        discovered: List[ConfigOption] = [ConfigOption(NOOP_PROMPT, NoopInjector())]

        for rel, name in self.candidates():
            injector = get_injector_by_name(name)(self.project_root, config_file=rel)
            if not self._probe(injector):
                logger.debug("Discovery: %s not present or without a %s list", rel, name)
                continue
            if not any(injector.registers_type(r) for r in roles):
                logger.debug("Discovery: %s cannot take %s", rel, ", ".join(r.value for r in roles))
                continue
            discovered.append(ConfigOption(rel, injector))

        if len(discovered) == 1:
            return []
        return discovered


__all__ = ["ConfigOption", "ConfigDiscovery", "NOOP_PROMPT"]
