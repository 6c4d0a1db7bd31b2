import importlib

import pytest


@pytest.mark.parametrize("module", [
    "compinst",
    "compinst.types",
    "compinst.core",
    "compinst.injectors",
    "compinst.fs",
])
def test_exported_names_exist(module):
    mod = importlib.import_module(module)
    missing = [name for name in mod.__all__ if not hasattr(mod, name)]
    assert missing == []
