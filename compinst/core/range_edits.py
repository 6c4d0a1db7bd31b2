"""
Range-based text editing for config rewrites.
Edits are expressed as character offsets into the original text and applied
in one pass, so everything outside the edited ranges is copied verbatim.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Tuple

logger = logging.getLogger(__name__)


@dataclass
class TextRange:
    """Represents a range in text by character positions."""
    start_char: int
    end_char: int

    def __post_init__(self):
        if self.start_char > self.end_char:
            raise ValueError(f"Invalid range: start_char ({self.start_char}) > end_char ({self.end_char})")

    @property
    def length(self) -> int:
        return self.end_char - self.start_char

    def overlaps(self, other: TextRange) -> bool:
        """Non-empty intersection, or an insertion point strictly inside a non-empty range."""
        if self.length == 0 and other.length == 0:
            return False
        if self.length == 0:
            return other.start_char < self.start_char < other.end_char
        if other.length == 0:
            return self.start_char < other.start_char < self.end_char
        return not (self.end_char <= other.start_char or other.end_char <= self.start_char)


@dataclass
class Edit:
    """Single edit operation; insertions have an empty range."""
    range: TextRange
    replacement: str
    seq: int  # insertion order, keeps same-offset insertions stable

    @property
    def is_insertion(self) -> bool:
        return self.range.length == 0


class RangeEditor:
    """
    Collects edits against `original_text` and applies them at once.

    Overlapping edits are rejected: the caller computes exact ranges and a
    conflict means a bug in that computation, not something to resolve here.
    Several insertions at the same offset are applied in the order they were added.
    """

    def __init__(self, original_text: str):
        self.original_text = original_text
        self.edits: List[Edit] = []

    def _add(self, start_char: int, end_char: int, replacement: str) -> None:
        char_range = TextRange(start_char, end_char)
        if char_range.start_char < 0 or char_range.end_char > len(self.original_text):
            raise ValueError(
                f"Edit [{start_char}, {end_char}) is out of bounds (text length {len(self.original_text)})"
            )
        for existing in self.edits:
            if char_range.overlaps(existing.range):
                raise ValueError(
                    f"Edit [{start_char}, {end_char}) overlaps "
                    f"[{existing.range.start_char}, {existing.range.end_char})"
                )
        self.edits.append(Edit(char_range, replacement, len(self.edits)))

    def add_insertion(self, position_char: int, content: str) -> None:
        """Insert content before the character at position_char."""
        self._add(position_char, position_char, content)

    def add_deletion(self, start_char: int, end_char: int) -> None:
        self._add(start_char, end_char, "")

    def add_replacement(self, start_char: int, end_char: int, replacement: str) -> None:
        self._add(start_char, end_char, replacement)

    def apply_edits(self) -> Tuple[str, Dict[str, int]]:
        """
        Apply all edits and return the modified text and statistics.

        Returns:
            Tuple of (modified_text, statistics)
        """
        if not self.edits:
            return self.original_text, {"edits_applied": 0, "chars_removed": 0, "chars_added": 0}

        ordered = sorted(self.edits, key=lambda e: (e.range.start_char, e.range.end_char, e.seq))
        parts: List[str] = []
        cursor = 0
        removed = added = 0
        for edit in ordered:
            parts.append(self.original_text[cursor:edit.range.start_char])
            parts.append(edit.replacement)
            removed += edit.range.length
            added += len(edit.replacement)
            cursor = edit.range.end_char
        parts.append(self.original_text[cursor:])

        stats = {"edits_applied": len(self.edits), "chars_removed": removed, "chars_added": added}
        logger.debug("Applied %d edit(s): -%d/+%d chars", len(self.edits), removed, added)
        return "".join(parts), stats

    def apply(self) -> str:
        return self.apply_edits()[0]


__all__ = ["TextRange", "Edit", "RangeEditor"]
