from __future__ import annotations

# Public API of the injectors package:
#  • Injector / ListInjector: capability protocol and file-bound base
#  • get_injector_for_path / get_injector_by_name: lazy class lookup
from .base import Injector, ListInjector
from .noop import NoopInjector
from .registry import (
    get_injector_by_name,
    get_injector_for_path,
    known_config_files,
    list_injectors,
    register_lazy,
)

__all__ = [
    "Injector",
    "ListInjector",
    "NoopInjector",
    "get_injector_by_name",
    "get_injector_for_path",
    "known_config_files",
    "list_injectors",
    "register_lazy",
]

# ---- Lazy registration of built-in injectors --------------------
# Only module:class strings here; the module is imported on first lookup.
# Registration order is the discovery order.
register_lazy(
    module=".application", class_name="ApplicationConfigInjector",
    config_files=["config/application.config.php"], name="application-config",
)
register_lazy(
    module=".modules", class_name="ModulesConfigInjector",
    config_files=["config/modules.config.php"], name="modules-config",
)
register_lazy(
    module=".development", class_name="DevelopmentConfigInjector",
    config_files=["config/development.config.php"], name="development-config",
)
register_lazy(
    module=".aggregator", class_name="ConfigAggregatorInjector",
    config_files=["config/config.php"], name="config-aggregator",
)
