"""
List matcher: finds the span of a named list literal in PHP config text.

An anchor is a regex describing what precedes the list (for example
`'modules' =>`) and ending with its opening token (`[` or `array(`). From the
opening token the closing delimiter is found by depth tracking over the
scanned tokens, so nested literals and delimiters inside strings or comments
never end the span early.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from ..types import ListSpan, SyntaxVariant
from .scanner import PAIRS, CodeMap, Token, scan, token_index_at

logger = logging.getLogger(__name__)

DEFAULT_INDENT = "    "


class UnbalancedListError(ValueError):
    """The opening token of an anchored list has no matching closing delimiter."""

    def __init__(self, offset: int, variant: SyntaxVariant, detail: str):
        self.offset = offset
        self.variant = variant
        super().__init__(f"list opened at offset {offset} ({variant.slug}): {detail}")


@dataclass(frozen=True)
class AnchorPattern:
    """
    A regex locating one dialect of a list.

    The opening token is captured by the named group `open` (`[` or
    `array(`) and the match must END right after it.
    """
    variant: SyntaxVariant
    regex: re.Pattern

    @classmethod
    def compile(cls, variant: SyntaxVariant, pattern: str, flags: int = 0) -> "AnchorPattern":
        return cls(variant, re.compile(pattern, flags))


# ----------------------------- Text helpers ----------------------------- #

def line_start(text: str, pos: int) -> int:
    return text.rfind("\n", 0, pos) + 1


def line_end(text: str, pos: int) -> int:
    """Offset of the line break ending the line that contains pos ('\\r\\n' aware)."""
    nl = text.find("\n", pos)
    if nl < 0:
        return len(text)
    if nl > 0 and text[nl - 1] == "\r":
        return nl - 1
    return nl


def leading_whitespace(text: str, pos: int) -> str:
    start = line_start(text, pos)
    j = start
    while j < len(text) and text[j] in " \t":
        j += 1
    return text[start:j]


def newline_of(text: str) -> str:
    return "\r\n" if "\r\n" in text else "\n"


def detect_indent_unit(text: str, code_map: Optional[CodeMap] = None) -> str:
    """
    Smallest indentation of a code line; tabs win if code lines start with tabs.
    Lines that start inside a comment (docblock ' * ') or a string are ignored.
    """
    cmap = code_map or CodeMap.of(text)
    smallest: Optional[int] = None
    pos = 0
    for line in text.splitlines(keepends=True):
        body = line.lstrip(" \t")
        width = len(line) - len(body)
        line_pos, pos = pos, pos + len(line)
        first = line_pos + width
        if not body.strip() or not width or not (cmap.is_code(first) or cmap.starts_literal(first)):
            continue
        if line.startswith("\t"):
            return "\t"
        if smallest is None or width < smallest:
            smallest = width
    return " " * smallest if smallest else DEFAULT_INDENT


# ----------------------------- Matching ----------------------------- #

def _ordered(anchors: Iterable[AnchorPattern], variant: Optional[SyntaxVariant]) -> List[AnchorPattern]:
    priority = {v: i for i, v in enumerate(SyntaxVariant)}
    chosen = [a for a in anchors if variant is None or a.variant is variant]
    return sorted(chosen, key=lambda a: priority[a.variant])


def _find_close(tokens: Sequence[Token], open_idx: int, variant: SyntaxVariant) -> int:
    """Index of the token closing tokens[open_idx]; raises UnbalancedListError."""
    stack: List[str] = []
    for idx in range(open_idx, len(tokens)):
        tok = tokens[idx]
        if tok.kind == "open":
            stack.append(PAIRS[tok.text])
        elif tok.kind == "close":
            if not stack:
                raise UnbalancedListError(tokens[open_idx].start, variant, "unexpected closing delimiter")
            expected = stack.pop()
            if tok.text != expected:
                raise UnbalancedListError(
                    tokens[open_idx].start,
                    variant,
                    f"found '{tok.text}' at offset {tok.start} where '{expected}' was expected",
                )
            if not stack:
                return idx
    raise UnbalancedListError(tokens[open_idx].start, variant, "no matching closing delimiter before end of file")


def _anchor_hits(
    text: str,
    toks: Sequence[Token],
    cmap: CodeMap,
    anchor: AnchorPattern,
) -> Iterator[Tuple[re.Match, int]]:
    """Yield (match, index of the opening token) for matches that are real code."""
    for m in anchor.regex.finditer(text):
        # An anchor may begin with a string literal ('modules'), i.e. exactly at a token start
        if not (cmap.is_code(m.start()) or token_index_at(toks, m.start()) >= 0):
            continue
        # The opening delimiter is the last char of the match
        open_idx = token_index_at(toks, m.end() - 1)
        if open_idx < 0 or toks[open_idx].kind != "open":
            logger.debug("Anchor %s matched at %d but its delimiter is not code", anchor.variant.slug, m.start())
            continue
        yield m, open_idx


def has_anchor(text: str, anchors: Iterable[AnchorPattern]) -> bool:
    """Cheap probe: does any anchor occur in code? (no span, never raises)"""
    toks = scan(text)
    cmap = CodeMap(toks)
    return any(next(_anchor_hits(text, toks, cmap, a), None) is not None for a in anchors)


def locate(
    text: str,
    anchors: Iterable[AnchorPattern],
    *,
    variant: Optional[SyntaxVariant] = None,
    tokens: Optional[List[Token]] = None,
) -> Optional[ListSpan]:
    """
    Find the first list described by `anchors`.

    Anchors are tried in SyntaxVariant priority order; within one anchor the
    first match found in code wins. Returns None when nothing matches.
    Raises UnbalancedListError when the matched list never closes properly.
    """
    toks = tokens if tokens is not None else scan(text)
    cmap = CodeMap(toks)

    for anchor in _ordered(anchors, variant):
        for m, open_idx in _anchor_hits(text, toks, cmap, anchor):
            close_idx = _find_close(toks, open_idx, anchor.variant)
            span = ListSpan(
                start=m.start("open"),
                body_start=m.end(),
                end=toks[close_idx].start,
                indent_unit=detect_indent_unit(text, cmap),
                anchor_indent=leading_whitespace(text, m.start("open")),
                variant=anchor.variant,
            )
            logger.debug(
                "Located %s list: body [%d, %d) (anchor at %d)",
                anchor.variant.slug, span.body_start, span.end, m.start(),
            )
            return span
    return None


__all__ = [
    "AnchorPattern",
    "UnbalancedListError",
    "locate",
    "has_anchor",
    "line_start",
    "line_end",
    "leading_whitespace",
    "newline_of",
    "detect_indent_unit",
    "DEFAULT_INDENT",
]
