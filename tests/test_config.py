from pathlib import Path

import pytest

from compinst.config import InstallerConfig, load_config
from compinst.errors import ConfigLoadError

from tests.infrastructure import write_installer_config


def test_missing_config_gives_defaults(tmp_path: Path):
    cfg = load_config(tmp_path)
    assert cfg == InstallerConfig()
    assert cfg.remember == "ask"


def test_full_config(tmp_path: Path):
    write_installer_config(tmp_path, """
remember: always
exclude:
  - ./config/development.config.php
files:
  config/autoload/extra.modules.php: modules-config
""")
    cfg = load_config(tmp_path)
    assert cfg.remember == "always"
    assert cfg.is_excluded("config/development.config.php")
    assert cfg.files == [("config/autoload/extra.modules.php", "modules-config")]


def test_empty_file_gives_defaults(tmp_path: Path):
    write_installer_config(tmp_path, "")
    assert load_config(tmp_path) == InstallerConfig()


@pytest.mark.parametrize("text, fragment", [
    ("remember: sometimes\n", "remember must be one of"),
    ("colour: blue\n", "unknown key(s): colour"),
    ("exclude: config/x.php\n", "exclude must be a list"),
    ("files:\n  config/x.php: nope\n", "unknown injector 'nope'"),
    ("files: [a, b]\n", "files must be a mapping"),
    ("- just\n- a list\n", "must be a mapping"),
    ("remember: [unclosed\n", "invalid YAML"),
])
def test_invalid_config(tmp_path: Path, text, fragment):
    write_installer_config(tmp_path, text)
    with pytest.raises(ConfigLoadError) as ei:
        load_config(tmp_path)
    assert fragment in str(ei.value)
