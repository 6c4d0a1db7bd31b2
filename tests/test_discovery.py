from pathlib import Path

from compinst.config import InstallerConfig
from compinst.discovery import NOOP_PROMPT, ConfigDiscovery
from compinst.injectors import NoopInjector
from compinst.types import ListRole

from tests.infrastructure import write


def prompts(options):
    return [o.prompt_text for o in options]


def test_noop_first_then_files_in_known_order(project):
    root = project("aggregator", "development", "modules", "application")
    options = ConfigDiscovery(root).available_options([ListRole.MODULE])
    assert prompts(options) == [
        NOOP_PROMPT,
        "config/application.config.php",
        "config/modules.config.php",
        "config/development.config.php",
    ]
    assert isinstance(options[0].injector, NoopInjector)
    assert options[0].is_noop


def test_roles_filter_injectors(project):
    root = project("application", "aggregator")
    assert prompts(ConfigDiscovery(root).available_options([ListRole.CONFIG_PROVIDER])) == [
        NOOP_PROMPT, "config/config.php",
    ]
    assert prompts(ConfigDiscovery(root).available_options([ListRole.CONFIG_PROVIDER, ListRole.MODULE])) == [
        NOOP_PROMPT, "config/application.config.php", "config/config.php",
    ]


def test_only_noop_means_no_options(project):
    root = project("aggregator")
    assert ConfigDiscovery(root).available_options([ListRole.MODULE]) == []


def test_empty_project_has_no_options(tmp_path: Path):
    assert ConfigDiscovery(tmp_path).available_options(list(ListRole)) == []


def test_file_without_expected_list_is_skipped(tmp_path: Path):
    write(tmp_path / "config" / "config.php", "<?php\nreturn ['debug' => true];\n")
    write(tmp_path / "config" / "development.config.php", "<?php\nreturn [\n    'view_manager' => [],\n];\n")
    assert ConfigDiscovery(tmp_path).available_options(list(ListRole)) == []


def test_unbalanced_file_is_still_offered(tmp_path: Path):
    # Discovery only probes for the anchor; editing reports the problem later
    write(tmp_path / "config" / "modules.config.php", "<?php\nreturn [\n    'A',\n")
    assert prompts(ConfigDiscovery(tmp_path).available_options([ListRole.MODULE])) == [
        NOOP_PROMPT, "config/modules.config.php",
    ]


def test_config_exclude_and_extra_files(project):
    root = project("application", "development")
    write(root / "config" / "autoload" / "extra.modules.php", "<?php\nreturn [\n    'Extra',\n];\n")
    config = InstallerConfig(
        exclude=["config/development.config.php"],
        files=[("config/autoload/extra.modules.php", "modules-config")],
    )
    options = ConfigDiscovery(root, config).available_options([ListRole.MODULE])
    assert prompts(options) == [
        NOOP_PROMPT, "config/application.config.php", "config/autoload/extra.modules.php",
    ]
    extra = options[-1].injector
    assert extra.path == root / "config" / "autoload" / "extra.modules.php"
    assert extra.is_registered("Extra")
