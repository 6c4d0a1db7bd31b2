"""
Entry injector: adds an entry to a located list, in the list's own style.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from ..types import EditResult, InsertPosition, ListSpan, SkipReason, SyntaxVariant, normalize_entry
from .entries import EntryStyle
from .matcher import AnchorPattern, leading_whitespace, line_end, line_start, newline_of
from .membership import ListView, inspect_list
from .range_edits import RangeEditor

logger = logging.getLogger(__name__)


def on_own_line(text: str, span: ListSpan, pos: int) -> bool:
    """True when only indentation precedes `pos` on its line and that line follows the opening token."""
    ls = line_start(text, pos)
    return ls > span.start and not text[ls:pos].strip()


def _next_line_start(text: str, pos: int) -> int:
    nl = text.find("\n", pos)
    return len(text) if nl < 0 else nl + 1


def _inject_empty(editor: RangeEditor, view: ListView, rendered: str, nl: str) -> None:
    text, span = view.text, view.span
    if "\n" in text[span.body_start:span.end]:
        indent = span.anchor_indent + span.indent_unit
        editor.add_insertion(_next_line_start(text, span.body_start), f"{indent}{rendered},{nl}")
    else:
        # [] -> ['Foo\Bar']
        editor.add_insertion(span.body_start, rendered)


def _prepend(editor: RangeEditor, view: ListView, rendered: str, nl: str) -> None:
    text, span = view.text, view.span
    first = view.elements[0]
    if on_own_line(text, span, first.start):
        # Right after the opening line, so comments above the first element stay attached to it
        indent = leading_whitespace(text, first.start)
        editor.add_insertion(_next_line_start(text, span.body_start), f"{indent}{rendered},{nl}")
    else:
        editor.add_insertion(first.start, f"{rendered}, ")


def _append(editor: RangeEditor, view: ListView, rendered: str, nl: str) -> None:
    text, span = view.text, view.span
    last = view.elements[-1]
    trailing_comma = last.comma_start is not None
    after = last.del_end
    if not trailing_comma:
        editor.add_insertion(last.end, ",")
    tail = "," if trailing_comma else ""

    if on_own_line(text, span, last.start):
        indent = leading_whitespace(text, last.start)
        if "\n" in text[after:span.end]:
            # after a trailing comment on the same line, if any
            pos = line_end(text, after)
        else:
            # closing delimiter shares the line with the last element
            pos = after
        editor.add_insertion(pos, f"{nl}{indent}{rendered}{tail}")
    elif trailing_comma:
        editor.add_insertion(after, f" {rendered},")
    else:
        editor.add_insertion(last.end, f" {rendered}")


def inject(
    text: str,
    anchors: Iterable[AnchorPattern],
    entry: str,
    position: InsertPosition,
    default_style: EntryStyle,
    *,
    variant: Optional[SyntaxVariant] = None,
) -> EditResult:
    """
    Add `entry` to the list described by `anchors`.

    Skips with ALREADY_PRESENT when an equivalent entry exists and with
    CONSTRUCT_NOT_FOUND when the text has no such list.
    """
    entry = normalize_entry(entry)
    view = inspect_list(text, anchors, variant=variant)
    if view is None:
        return EditResult.skip(text, SkipReason.CONSTRUCT_NOT_FOUND)
    if view.matching(entry):
        return EditResult.skip(text, SkipReason.ALREADY_PRESENT)

    style = EntryStyle.detect(view.elements, default_style)
    rendered = style.render(entry)
    nl = newline_of(text)
    editor = RangeEditor(text)

    if not view.elements:
        _inject_empty(editor, view, rendered, nl)
    elif position is InsertPosition.PREPEND:
        _prepend(editor, view, rendered, nl)
    else:
        _append(editor, view, rendered, nl)

    new_text = editor.apply()
    logger.debug("Injected %s (%s) into %s list", rendered, position.value, view.span.variant.slug)
    return EditResult(new_text)


__all__ = ["inject", "on_own_line"]
