from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


def normalize_entry(name: str) -> str:
    """Strip a single leading namespace separator: '\\Foo\\Bar' -> 'Foo\\Bar'."""
    return name[1:] if name.startswith("\\") else name


# -----------------------------
class InsertPosition(Enum):
    PREPEND = "prepend"
    APPEND = "append"


class ListRole(Enum):
    """
    Semantic category of a list; the value is the package metadata key.

    Components and config providers go to the TOP of their list so that
    userland entries declared later can override them. Modules go to the BOTTOM.
    """
    CONFIG_PROVIDER = "config-provider"
    COMPONENT = "component"
    MODULE = "module"

    @property
    def insert_position(self) -> InsertPosition:
        if self is ListRole.MODULE:
            return InsertPosition.APPEND
        return InsertPosition.PREPEND

    @classmethod
    def from_key(cls, key: str) -> "ListRole":
        try:
            return cls(key)
        except ValueError:
            allowed = ", ".join(r.value for r in cls)
            raise ValueError(f"Unknown list type '{key}' (expected one of: {allowed})") from None


# Order in which the orchestrator walks package metadata keys
ROLE_ORDER = (ListRole.CONFIG_PROVIDER, ListRole.COMPONENT, ListRole.MODULE)


class SyntaxVariant(Enum):
    """
    Textual dialect of a list literal: delimiter style x naming style.

    Declaration order is the matcher priority order.
    """
    BRACKET_IMPORTED = ("bracket", "imported")
    BRACKET_QUALIFIED = ("bracket", "qualified")
    FUNCTION_IMPORTED = ("function", "imported")
    FUNCTION_QUALIFIED = ("function", "qualified")

    @property
    def delimiter(self) -> str:
        return self.value[0]

    @property
    def naming(self) -> str:
        return self.value[1]

    @property
    def closing(self) -> str:
        return "]" if self.delimiter == "bracket" else ")"

    @property
    def slug(self) -> str:
        return self.name.lower().replace("_", "-")

    @classmethod
    def from_slug(cls, slug: str) -> "SyntaxVariant":
        for v in cls:
            if v.slug == slug:
                return v
        raise ValueError(f"Unknown syntax variant '{slug}'")


class SkipReason(Enum):
    ALREADY_PRESENT = "already-present"
    ALREADY_ABSENT = "already-absent"
    NOT_APPLICABLE = "not-applicable"
    CONSTRUCT_NOT_FOUND = "construct-not-found"


# ---- List location ----

@dataclass(frozen=True)
class ListSpan:
    """
    Location of the target list literal inside file text.

    body = text[body_start:end]; text[end] is the closing delimiter.
    """
    start: int  # first char of the opening token ('[' or 'array')
    body_start: int  # right after the opening token
    end: int  # offset of the closing delimiter
    indent_unit: str  # one indentation level of the file
    anchor_indent: str  # leading whitespace of the line with the opening token
    variant: SyntaxVariant

    @property
    def close_end(self) -> int:
        return self.end + 1


# ---- Results ----

@dataclass(frozen=True)
class EditResult:
    """
    Outcome of an inject/remove.

    On skip `text` is the unchanged input and nothing must be written.
    """
    text: str
    skipped: Optional[SkipReason] = None

    @property
    def changed(self) -> bool:
        return self.skipped is None

    @classmethod
    def skip(cls, text: str, reason: SkipReason) -> "EditResult":
        return cls(text=text, skipped=reason)


__all__ = [
    "normalize_entry",
    "InsertPosition",
    "ListRole",
    "ROLE_ORDER",
    "SyntaxVariant",
    "SkipReason",
    "ListSpan",
    "EditResult",
]
