"""
Entry remover: deletes an entry from a located list and repairs punctuation.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from ..types import EditResult, SkipReason, SyntaxVariant, normalize_entry
from .injector import on_own_line
from .matcher import AnchorPattern, line_end, line_start
from .membership import ListView, inspect_list
from .range_edits import RangeEditor

logger = logging.getLogger(__name__)


def _skip_hspace(text: str, pos: int) -> int:
    while pos < len(text) and text[pos] in " \t":
        pos += 1
    return pos


def _remove_element(view: ListView, idx: int) -> str:
    text, span, elements = view.text, view.span, view.elements
    el = elements[idx]
    prev = elements[idx - 1] if idx > 0 else None
    is_last = idx == len(elements) - 1
    # A last element without a trailing comma leaves its predecessor's comma dangling
    drop_prev_comma = is_last and el.comma_start is None and prev is not None

    editor = RangeEditor(text)
    start, end = el.start, el.del_end
    ls = line_start(text, start)
    le = line_end(text, end)

    if on_own_line(text, span, start):
        rest = text[end:le]
        if not rest.strip():
            # The whole line(s) belong to the element
            nl = text.find("\n", end)
            editor.add_deletion(ls, len(text) if nl < 0 else nl + 1)
        elif ls <= span.end <= le and not text[end:span.end].strip():
            # Closing delimiter follows on the same line: pull it up to the previous line
            cut = ls - 1
            if cut > 0 and text[cut - 1] == "\r":
                cut -= 1
            editor.add_deletion(cut, span.end)
        else:
            # Keep whatever else lives on the line (typically a trailing comment)
            editor.add_deletion(start, _skip_hspace(text, end))
        if drop_prev_comma:
            editor.add_deletion(prev.comma_start, prev.comma_start + 1)
    elif prev is not None and is_last:
        if el.comma_start is None:
            editor.add_deletion(prev.comma_start, el.end)
        else:
            editor.add_deletion(prev.del_end, el.del_end)
    else:
        editor.add_deletion(start, _skip_hspace(text, end))

    return editor.apply()


def remove(
    text: str,
    anchors: Iterable[AnchorPattern],
    entry: str,
    *,
    variant: Optional[SyntaxVariant] = None,
) -> EditResult:
    """
    Remove every occurrence of `entry` from the list described by `anchors`.

    Returns the unchanged text (skipped) when the list or the entry is absent.
    """
    entry = normalize_entry(entry)
    view = inspect_list(text, anchors, variant=variant)
    if view is None:
        return EditResult.skip(text, SkipReason.CONSTRUCT_NOT_FOUND)
    if not view.matching(entry):
        return EditResult.skip(text, SkipReason.ALREADY_ABSENT)

    current = text
    removed = 0
    while view is not None:
        hits = view.matching(entry)
        if not hits:
            break
        current = _remove_element(view, hits[0])
        removed += 1
        view = inspect_list(current, anchors, variant=view.span.variant)

    logger.debug("Removed %d occurrence(s) of '%s'", removed, entry)
    return EditResult(current)


__all__ = ["remove"]
