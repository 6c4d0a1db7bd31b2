"""
Minimal PHP token scanner.

Not a parser: it only knows enough about the PHP surface to tell code from
string literals (heredoc and nowdoc included) and comments, and to pick out
delimiters and commas. That is all the list matcher needs for depth tracking.
"""

from __future__ import annotations

import re
from bisect import bisect_right
from dataclasses import dataclass
from typing import List, Literal

TokenKind = Literal["string", "comment", "open", "close", "comma", "space", "code"]

OPENERS = "[({"
CLOSERS = "])}"
PAIRS = {"[": "]", "(": ")", "{": "}"}

_CODE_STOP = set(" \t\r\n\f\v'\"[](){},#/<")
_HEREDOC_RE = re.compile(r"<<<[ \t]*([\x27\x22]?)([A-Za-z_]\w*)\1\r?\n")


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    start: int
    end: int
    text: str

    @property
    def significant(self) -> bool:
        return self.kind not in ("space", "comment")


def _scan_quoted(text: str, i: int) -> int:
    """Return the offset right after the string literal starting at i (or len(text))."""
    quote = text[i]
    n = len(text)
    j = i + 1
    while j < n:
        c = text[j]
        if c == "\\":
            j += 2
            continue
        if c == quote:
            return j + 1
        j += 1
    return n


def _scan_heredoc(text: str, label: str, body_start: int) -> int:
    """End of a heredoc/nowdoc whose body starts at body_start (or len(text))."""
    closing = re.compile(r"^[ \t]*" + re.escape(label) + r"(?![A-Za-z0-9_])", re.MULTILINE)
    m = closing.search(text, body_start)
    return m.end() if m else len(text)


def _scan_line_comment(text: str, i: int) -> int:
    n = len(text)
    j = i
    while j < n and text[j] != "\n":
        # '?>' ends a line comment in PHP as well
        if text.startswith("?>", j):
            return j
        j += 1
    return j


def scan(text: str) -> List[Token]:
    """Split PHP source into tokens; concatenating token texts gives back `text`."""
    tokens: List[Token] = []
    n = len(text)
    i = 0
    while i < n:
        c = text[i]
        heredoc = _HEREDOC_RE.match(text, i) if c == "<" else None
        if c in "'\"":
            j = _scan_quoted(text, i)
            kind: TokenKind = "string"
        elif heredoc is not None:
            j = _scan_heredoc(text, heredoc.group(2), heredoc.end())
            kind = "string"
        elif c == "#" and not text.startswith("#[", i):
            j = _scan_line_comment(text, i)
            kind = "comment"
        elif c == "/" and text.startswith("//", i):
            j = _scan_line_comment(text, i)
            kind = "comment"
        elif c == "/" and text.startswith("/*", i):
            close = text.find("*/", i + 2)
            j = n if close < 0 else close + 2
            kind = "comment"
        elif c.isspace():
            j = i + 1
            while j < n and text[j].isspace():
                j += 1
            kind = "space"
        elif c in OPENERS:
            j = i + 1
            kind = "open"
        elif c in CLOSERS:
            j = i + 1
            kind = "close"
        elif c == ",":
            j = i + 1
            kind = "comma"
        else:
            # '#[' (attribute) and a lone '/' (division) also land here
            j = i + 1
            while j < n and text[j] not in _CODE_STOP:
                j += 1
            kind = "code"
        tokens.append(Token(kind, i, j, text[i:j]))
        i = j
    return tokens


class CodeMap:
    """Answers whether an offset lies in code rather than in a string or comment."""

    def __init__(self, tokens: List[Token]):
        self._starts: List[int] = []
        self._ends: List[int] = []
        for tok in tokens:
            if tok.kind in ("string", "comment"):
                self._starts.append(tok.start)
                self._ends.append(tok.end)

    @classmethod
    def of(cls, text: str) -> "CodeMap":
        return cls(scan(text))

    def is_code(self, offset: int) -> bool:
        idx = bisect_right(self._starts, offset) - 1
        if idx < 0:
            return True
        return offset >= self._ends[idx]

    def starts_literal(self, offset: int) -> bool:
        """True when a string or comment begins exactly at `offset`."""
        idx = bisect_right(self._starts, offset) - 1
        return idx >= 0 and self._starts[idx] == offset


def token_index_at(tokens: List[Token], offset: int) -> int:
    """Index of the token starting exactly at `offset`; -1 when none does."""
    lo, hi = 0, len(tokens)
    while lo < hi:
        mid = (lo + hi) // 2
        if tokens[mid].start < offset:
            lo = mid + 1
        else:
            hi = mid
    if lo < len(tokens) and tokens[lo].start == offset:
        return lo
    return -1


__all__ = ["Token", "TokenKind", "scan", "CodeMap", "token_index_at", "OPENERS", "CLOSERS", "PAIRS"]
