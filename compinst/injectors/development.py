from __future__ import annotations

from .application import ApplicationConfigInjector


class DevelopmentConfigInjector(ApplicationConfigInjector):
    """Development-only modules: same `'modules' =>` layout as the application config."""
    name = "development-config"
    config_file = "config/development.config.php"
