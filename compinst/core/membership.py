"""
Membership check: is an entry already declared in the target list?
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from ..types import ListSpan, SyntaxVariant, normalize_entry
from .aliases import ImportTable, parse_imports
from .entries import Element, parse_elements
from .matcher import AnchorPattern, locate
from .scanner import CodeMap, Token, scan

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ListView:
    """Everything the editors need to know about one located list."""
    text: str
    tokens: List[Token]
    span: ListSpan
    imports: ImportTable
    elements: List[Element]

    def matching(self, entry: str) -> List[int]:
        """Indexes of the elements equal to `entry` (after normalisation)."""
        wanted = normalize_entry(entry)
        return [
            i for i, el in enumerate(self.elements)
            if el.name is not None and normalize_entry(el.name) == wanted
        ]


def inspect_list(
    text: str,
    anchors: Iterable[AnchorPattern],
    *,
    variant: Optional[SyntaxVariant] = None,
) -> Optional[ListView]:
    """Locate the list and parse its elements; None when the file has no such list."""
    tokens = scan(text)
    span = locate(text, anchors, variant=variant, tokens=tokens)
    if span is None:
        return None
    imports = parse_imports(text, CodeMap(tokens))
    elements = parse_elements(text, tokens, span, imports)
    return ListView(text=text, tokens=tokens, span=span, imports=imports, elements=elements)


def is_registered(
    text: str,
    anchors: Iterable[AnchorPattern],
    entry: str,
    *,
    variant: Optional[SyntaxVariant] = None,
) -> bool:
    view = inspect_list(text, anchors, variant=variant)
    if view is None:
        return False
    found = bool(view.matching(entry))
    logger.debug("Entry '%s' %s in %s list", entry, "found" if found else "not found", view.span.variant.slug)
    return found


__all__ = ["ListView", "inspect_list", "is_registered"]
