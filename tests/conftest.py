from pathlib import Path

import pytest

from compinst.installer import ScriptedIO

from tests.infrastructure.php_assets import install_asset

# Well-known config files -> asset used to create them
_STANDARD_FILES = {
    "application": ("application/application.config.php", "config/application.config.php"),
    "modules": ("application/modules.config.php", "config/modules.config.php"),
    "development": ("application/development.config.php", "config/development.config.php"),
    "aggregator": ("aggregator/import-short.config.php", "config/config.php"),
}


@pytest.fixture
def project(tmp_path: Path):
    """
    Project tree builder: project("application", "aggregator") copies the
    matching fixtures into config/ and returns the project root.
    """
    def build(*kinds: str) -> Path:
        for kind in kinds:
            asset, target = _STANDARD_FILES[kind]
            install_asset(tmp_path, asset, target)
        return tmp_path
    return build


@pytest.fixture
def scripted_io():
    """ScriptedIO factory: scripted_io("1", "y")."""
    def make(*answers: str) -> ScriptedIO:
        return ScriptedIO(list(answers))
    return make


@pytest.fixture(autouse=True)
def _no_debug_env(monkeypatch):
    monkeypatch.delenv("COMPINST_DEBUG", raising=False)
