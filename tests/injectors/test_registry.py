import pytest

from compinst.injectors import (
    NoopInjector,
    get_injector_by_name,
    get_injector_for_path,
    known_config_files,
    list_injectors,
)
from compinst.injectors.aggregator import ConfigAggregatorInjector
from compinst.injectors.application import ApplicationConfigInjector
from compinst.injectors.base import Injector
from compinst.types import ListRole, SkipReason


def test_builtin_injectors_registered():
    assert list_injectors() == ["application-config", "config-aggregator", "development-config", "modules-config"]


def test_known_files_in_discovery_order():
    assert [f for f, _ in known_config_files()] == [
        "config/application.config.php",
        "config/modules.config.php",
        "config/development.config.php",
        "config/config.php",
    ]


@pytest.mark.parametrize("path, cls", [
    ("config/application.config.php", ApplicationConfigInjector),
    ("./config/application.config.php", ApplicationConfigInjector),
    ("config\\config.php", ConfigAggregatorInjector),
])
def test_lookup_by_path(path, cls):
    assert get_injector_for_path(path) is cls


def test_unknown_path_and_name():
    assert get_injector_for_path("config/autoload/global.php") is None
    with pytest.raises(KeyError):
        get_injector_by_name("nope")


def test_lookup_by_name_returns_class_with_that_name():
    for name in list_injectors():
        assert get_injector_by_name(name).name == name


def test_noop_injector_capabilities():
    noop = NoopInjector()
    assert isinstance(noop, Injector)
    assert all(noop.registers_type(r) for r in ListRole)
    assert noop.types_allowed() == frozenset()
    assert not noop.is_registered("Foo")
    assert noop.inject("Foo", ListRole.MODULE).skipped is SkipReason.NOT_APPLICABLE
    assert noop.remove("Foo").skipped is SkipReason.NOT_APPLICABLE


def test_file_injectors_satisfy_protocol(tmp_path):
    for name in list_injectors():
        assert isinstance(get_injector_by_name(name)(tmp_path), Injector)
