"""
Package install/uninstall orchestration.

Reads the package metadata (`extra.laminas`, or the legacy `extra.zf`),
asks discovery which config files can take the package, lets the operator
choose one (or reuses a remembered choice) and drives the injectors.
"""

from __future__ import annotations

import json
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence, TextIO

from .config import InstallerConfig, load_config
from .discovery import ConfigDiscovery, ConfigOption
from .errors import PackageMetadataError
from .injectors import Injector, NoopInjector
from .report import ActionRecord, InstallReport
from .types import ROLE_ORDER, ListRole

logger = logging.getLogger(__name__)


# ----------------------------- Package metadata ----------------------------- #

def extract_metadata(extra: Any) -> Dict[str, Any]:
    """`extra.laminas` when it is a mapping, else the legacy `extra.zf`, else {}."""
    if not isinstance(extra, Mapping):
        return {}
    for key in ("laminas", "zf"):
        value = extra.get(key)
        if isinstance(value, Mapping):
            if key == "zf":
                logger.debug("Using legacy extra.zf metadata")
            return dict(value)
    return {}


def discover_package_types(metadata: Mapping[str, Any]) -> List[ListRole]:
    """Roles declared by the metadata, in config-provider, component, module order."""
    return [role for role in ROLE_ORDER if role.value in metadata]


def metadata_entry(metadata: Mapping[str, Any], role: ListRole) -> Optional[str]:
    """The entry declared for `role`; None when absent, empty or not a string."""
    value = metadata.get(role.value)
    if isinstance(value, str) and value:
        return value
    return None


@dataclass(frozen=True)
class PackageInfo:
    name: str
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def metadata(self) -> Dict[str, Any]:
        return extract_metadata(self.extra)

    @staticmethod
    def from_composer_json(path: Path) -> PackageInfo:
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError as e:
            raise PackageMetadataError(f"Package description not found: {path}") from e
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise PackageMetadataError(f"Cannot read package description {path}: {e}") from e
        if not isinstance(raw, dict):
            raise PackageMetadataError(f"{path}: expected a JSON object")
        name = raw.get("name")
        if not isinstance(name, str) or not name:
            raise PackageMetadataError(f"{path}: missing package name")
        extra = raw.get("extra") or {}
        if not isinstance(extra, dict):
            raise PackageMetadataError(f"{path}: 'extra' must be an object")
        return PackageInfo(name=name, extra=extra)


# ----------------------------- Operator IO ----------------------------- #

class InstallerIO(Protocol):
    def ask(self, question: str, default: str) -> str: ...   # noqa: E704

    def write(self, message: str) -> None: ...   # noqa: E704


class ConsoleIO:
    """Interactive IO on the terminal. Prompts go to stderr so stdout stays machine-readable."""

    def __init__(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None) -> None:
        self._in = stdin or sys.stdin
        self._out = stdout or sys.stderr

    def ask(self, question: str, default: str) -> str:
        self._out.write(question)
        self._out.flush()
        line = self._in.readline()
        if not line:
            # EOF: non-interactive input
            return default
        answer = line.strip()
        return answer if answer else default

    def write(self, message: str) -> None:
        self._out.write(message.rstrip("\n") + "\n")


class ScriptedIO:
    """Replays prepared answers; the default is used once they run out."""

    def __init__(self, answers: Sequence[str] = ()) -> None:
        self._answers = list(answers)
        self.questions: List[str] = []
        self.output: List[str] = []

    def ask(self, question: str, default: str) -> str:
        self.questions.append(question)
        if self._answers:
            return str(self._answers.pop(0))
        return default

    def write(self, message: str) -> None:
        self.output.append(message)


# ----------------------------- Remembered choices ----------------------------- #

class InjectorCache:
    """
    Process-scoped memory of "remember this option for packages of the same type".

    `reset()` starts a new run; the first injector remembered for a role wins.
    """

    def __init__(self) -> None:
        self._by_role: Dict[ListRole, Injector] = {}

    def reset(self) -> None:
        self._by_role.clear()

    def remember(self, injector: Injector) -> None:
        for role in injector.types_allowed():
            self._by_role.setdefault(role, injector)

    def lookup(self, roles: Sequence[ListRole]) -> Optional[Injector]:
        for role in roles:
            injector = self._by_role.get(role)
            if injector is not None:
                return injector
        return None

    def __len__(self) -> int:
        return len(self._by_role)


# ----------------------------- Orchestrator ----------------------------- #

class ComponentInstaller:
    def __init__(
        self,
        project_root: Path | str = "",
        io: Optional[InstallerIO] = None,
        config: Optional[InstallerConfig] = None,
        *,
        dry_run: bool = False,
    ) -> None:
        self.project_root = Path(project_root) if project_root else Path.cwd()
        self.io: InstallerIO = io or ConsoleIO()
        self.config = config if config is not None else load_config(self.project_root)
        self.dry_run = dry_run
        self.cache = InjectorCache()

    def activate(self, io: Optional[InstallerIO] = None) -> None:
        """Start a new run: forget remembered choices."""
        if io is not None:
            self.io = io
        self.cache.reset()

    def _discovery(self) -> ConfigDiscovery:
        return ConfigDiscovery(self.project_root, self.config)

    # --- install ------------------------------------------
    def on_post_package_install(self, package: PackageInfo, dev_mode: bool = True) -> InstallReport:
        report = InstallReport(package=package.name)
        if not dev_mode:
            logger.debug("%s: not in dev mode, nothing injected", package.name)
            return report

        metadata = package.metadata
        if not metadata:
            logger.debug("%s: no component installer metadata", package.name)
            return report

        roles = discover_package_types(metadata)
        options = self._discovery().available_options(roles)
        if not options:
            report.messages.append("No config file can take this package")
            return report

        if self._already_installed(metadata, options):
            report.messages.append(f"{package.name} is already registered")
            return report

        injector = self._prompt_for_option(package.name, options, roles)
        if isinstance(injector, NoopInjector):
            report.messages.append(f"{package.name} was not injected into any config file")
            return report
        self._inject_package(package.name, metadata, injector, report)
        return report

    def _already_installed(self, metadata: Mapping[str, Any], options: Sequence[ConfigOption]) -> bool:
        for role in ROLE_ORDER:
            entry = metadata_entry(metadata, role)
            if entry is None:
                continue
            for option in options:
                if option.injector.is_registered(entry):
                    logger.info("'%s' is already registered in %s", entry, option.prompt_text)
                    return True
        return False

    def _prompt_for_option(self, name: str, options: Sequence[ConfigOption], roles: Sequence[ListRole]) -> Injector:
        cached = self.cache.lookup(roles)
        if cached is not None:
            logger.debug("Reusing remembered injector %r for %s", cached, name)
            return cached

        lines = [f"\n  Please select which config file you wish to inject '{name}' into:\n"]
        for index, option in enumerate(options):
            lines.append(f"  [{index}] {option.prompt_text}\n")
        lines.append("  Make your selection (default is 0):")
        question = "".join(lines)

        while True:
            answer = self.io.ask(question, "0").strip()
            if answer.isdigit() and int(answer) < len(options):
                injector = options[int(answer)].injector
                self._prompt_to_remember(injector)
                return injector
            self.io.write("Invalid selection")

    def _prompt_to_remember(self, injector: Injector) -> None:
        policy = self.config.remember
        if policy == "never":
            return
        if policy == "always":
            self.cache.remember(injector)
            return
        answer = self.io.ask("\n  Remember this option for other packages of the same type? (y/N)", "n")
        if answer.strip().lower() == "y":
            self.cache.remember(injector)

    def _inject_package(self, name: str, metadata: Mapping[str, Any], injector: Injector, report: InstallReport) -> None:
        for role in ROLE_ORDER:
            if not injector.registers_type(role):
                continue
            entry = metadata_entry(metadata, role)
            if entry is None:
                continue
            self.io.write(f"Installing {entry} from package {name}")
            result = injector.inject(entry, role, dry_run=self.dry_run)
            report.actions.append(ActionRecord.from_result(
                "inject", entry, role.value, injector.config_file or None,
                injector.name, result, dry_run=self.dry_run,
            ))

    # --- uninstall ----------------------------------------
    def on_post_package_uninstall(self, package: PackageInfo, dev_mode: bool = True) -> InstallReport:
        report = InstallReport(package=package.name)
        if not dev_mode:
            logger.debug("%s: not in dev mode, nothing removed", package.name)
            return report

        options = self._discovery().available_options(ROLE_ORDER)
        if not options:
            report.messages.append("No config file to remove the package from")
            return report

        metadata = package.metadata
        for role in ROLE_ORDER:
            entry = metadata_entry(metadata, role)
            if entry is None:
                continue
            for option in options:
                if option.is_noop or not option.injector.registers_type(role):
                    continue
                self.io.write(f"Removing {entry} from package {package.name}")
                result = option.injector.remove(entry, role, dry_run=self.dry_run)
                report.actions.append(ActionRecord.from_result(
                    "remove", entry, role.value, option.prompt_text,
                    option.injector.name, result, dry_run=self.dry_run,
                ))
        return report


__all__ = [
    "ComponentInstaller",
    "ConsoleIO",
    "InjectorCache",
    "InstallerIO",
    "PackageInfo",
    "ScriptedIO",
    "discover_package_types",
    "extract_metadata",
    "metadata_entry",
]
