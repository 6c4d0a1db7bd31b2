from __future__ import annotations

# Public API:
#  • ConfigDiscovery / ComponentInstaller: orchestration over real files
#  • injector classes: text and file operations on one config list
from .discovery import ConfigDiscovery, ConfigOption
from .errors import AmbiguousSpanError, ConfigLoadError, InstallerUserError, PackageMetadataError
from .injectors import ListInjector, NoopInjector, get_injector_by_name, get_injector_for_path
from .installer import ComponentInstaller, InjectorCache, PackageInfo, ScriptedIO
from .types import EditResult, ListRole, SkipReason, SyntaxVariant
from .version import tool_version

__all__ = [
    "AmbiguousSpanError",
    "ComponentInstaller",
    "ConfigDiscovery",
    "ConfigLoadError",
    "ConfigOption",
    "EditResult",
    "InjectorCache",
    "InstallerUserError",
    "ListInjector",
    "ListRole",
    "NoopInjector",
    "PackageInfo",
    "PackageMetadataError",
    "ScriptedIO",
    "SkipReason",
    "SyntaxVariant",
    "get_injector_by_name",
    "get_injector_for_path",
    "tool_version",
]
