from __future__ import annotations

import importlib
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple, Type

from ..config import normalize_rel_path
from .base import ListInjector

__all__ = [
    "register_lazy",
    "get_injector_for_path",
    "get_injector_by_name",
    "list_injectors",
    "known_config_files",
]


@dataclass(frozen=True)
class _LazySpec:
    module: str
    class_name: str
    name: str
    config_files: Tuple[str, ...]


# Lazy specs: injector name -> where the class lives
_LAZY_BY_NAME: Dict[str, _LazySpec] = {}

# Well-known files -> injector name, in registration order (discovery order)
_NAME_BY_FILE: Dict[str, str] = {}

# Resolved classes, by injector name
_CLASS_BY_NAME: Dict[str, Type[ListInjector]] = {}


def register_lazy(
    *,
    module: str,
    class_name: str,
    config_files: List[str] | Tuple[str, ...],
    name: str,
) -> None:
    """
    Register an injector "by strings", without importing its module.
    The same injector may own several well-known files.
    """
    spec = _LazySpec(
        module=module,
        class_name=class_name,
        name=name,
        config_files=tuple(normalize_rel_path(f) for f in config_files),
    )
    _LAZY_BY_NAME[name] = spec
    for f in spec.config_files:
        _NAME_BY_FILE[f] = name


def _load_injector_from_spec(spec: _LazySpec) -> Type[ListInjector]:
    # Both relative (".modules") and absolute module names are accepted.
    mod = importlib.import_module(spec.module, package=__package__)
    cls = getattr(mod, spec.class_name, None)
    if cls is None:
        raise RuntimeError(f"Injector class '{spec.class_name}' not found in {spec.module}")
    if not issubclass(cls, ListInjector):
        raise TypeError(f"{spec.module}.{spec.class_name} is not a subclass of ListInjector")
    _CLASS_BY_NAME[spec.name] = cls
    return cls


def get_injector_by_name(name: str) -> Type[ListInjector]:
    """Injector CLASS registered under `name`. Raises KeyError for unknown names."""
    cls = _CLASS_BY_NAME.get(name)
    if cls:
        return cls
    spec = _LAZY_BY_NAME.get(name)
    if spec is None:
        raise KeyError(f"Unknown injector '{name}' (known: {', '.join(sorted(_LAZY_BY_NAME))})")
    return _load_injector_from_spec(spec)


def get_injector_for_path(path: str) -> Optional[Type[ListInjector]]:
    """
    Injector CLASS owning a well-known project-relative path. Nothing is instantiated.
    Unknown paths give None.
    """
    name = _NAME_BY_FILE.get(normalize_rel_path(path))
    return get_injector_by_name(name) if name else None


def known_config_files() -> List[Tuple[str, str]]:
    """(relative path, injector name) pairs in discovery order."""
    return list(_NAME_BY_FILE.items())


def list_injectors() -> List[str]:
    return sorted(_LAZY_BY_NAME)
