from __future__ import annotations

# Public API of the text core:
#  • locate: find the span of a list literal
#  • is_registered / inject / remove: pure text -> text operations
from .entries import EntryStyle
from .injector import inject
from .matcher import AnchorPattern, UnbalancedListError, has_anchor, locate
from .membership import inspect_list, is_registered
from .remover import remove

__all__ = [
    "AnchorPattern",
    "EntryStyle",
    "UnbalancedListError",
    "locate",
    "has_anchor",
    "inspect_list",
    "is_registered",
    "inject",
    "remove",
]
