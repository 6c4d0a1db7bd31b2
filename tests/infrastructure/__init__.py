"""
Shared test infrastructure.

Modules:
- file_utils: writing project files and composer.json stubs
- php_assets: PHP config fixtures under tests/assets/
- cli_utils: running the CLI in a subprocess
"""

from .file_utils import write, read, write_composer_json, write_installer_config
from .php_assets import ASSETS_DIR, AGGREGATOR_DIALECTS, load_asset, aggregator_asset, install_asset
from .cli_utils import run_cli, jload

__all__ = [
    "write", "read", "write_composer_json", "write_installer_config",
    "ASSETS_DIR", "AGGREGATOR_DIALECTS", "load_asset", "aggregator_asset", "install_asset",
    "run_cli", "jload",
]
