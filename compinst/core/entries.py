"""
Elements of a located list and the rendering style of new entries.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Literal, Optional, Sequence

from ..types import ListSpan
from .aliases import ImportTable
from .scanner import Token

_CLASS_CONST_RE = re.compile(r"^(\\?[A-Za-z_]\w*(?:\\[A-Za-z_]\w*)*)::class$")
_BARE_NAME_RE = re.compile(r"^\\?[A-Za-z_]\w*(?:\\[A-Za-z_]\w*)+$")


@dataclass(frozen=True)
class Element:
    """One top-level element of a list literal."""
    start: int  # first significant char
    end: int  # right after the last significant char
    comma_start: Optional[int]  # trailing comma, if any
    raw: str
    name: Optional[str]  # resolved qualified name; None for anything else
    form: Optional[Literal["string", "class", "bare"]] = None

    @property
    def del_end(self) -> int:
        """End of the element including its trailing comma."""
        return self.comma_start + 1 if self.comma_start is not None else self.end


def unquote_php(literal: str) -> str:
    """Value of a PHP string literal (only the escapes that matter for names)."""
    quote, body = literal[0], literal[1:-1]
    out: List[str] = []
    i = 0
    while i < len(body):
        c = body[i]
        if c == "\\" and i + 1 < len(body):
            nxt = body[i + 1]
            if nxt == "\\" or nxt == quote or (quote == '"' and nxt == "$"):
                out.append(nxt)
                i += 2
                continue
        out.append(c)
        i += 1
    return "".join(out)


def _element_name(sig: Sequence[Token], imports: ImportTable):
    if len(sig) != 1:
        return None, None
    tok = sig[0]
    if tok.kind == "string":
        if len(tok.text) < 2 or tok.text[-1] != tok.text[0]:
            return None, None
        return unquote_php(tok.text), "string"
    if tok.kind != "code":
        return None, None
    m = _CLASS_CONST_RE.match(tok.text)
    if m:
        return imports.resolve(m.group(1)), "class"
    if _BARE_NAME_RE.match(tok.text):
        return imports.resolve(tok.text), "bare"
    return None, None


def parse_elements(text: str, tokens: Sequence[Token], span: ListSpan, imports: ImportTable) -> List[Element]:
    """Split the list body into elements at depth-zero commas."""
    elements: List[Element] = []
    current: List[Token] = []
    depth = 0

    def flush(comma: Optional[Token]) -> None:
        if not current:
            return
        start, end = current[0].start, current[-1].end
        name, form = _element_name(current, imports)
        elements.append(Element(
            start=start,
            end=end,
            comma_start=comma.start if comma is not None else None,
            raw=text[start:end],
            name=name,
            form=form,
        ))
        current.clear()

    for tok in tokens:
        if tok.end <= span.body_start:
            continue
        if tok.start >= span.end:
            break
        if tok.kind == "open":
            depth += 1
        elif tok.kind == "close":
            depth -= 1
        elif tok.kind == "comma" and depth == 0:
            flush(tok)
            continue
        if tok.significant:
            current.append(tok)
    flush(None)
    return elements


# ----------------------------- Entry style ----------------------------- #

@dataclass(frozen=True)
class EntryStyle:
    """How a new entry is written: `'Foo\\Bar'`, `"Foo\\\\Bar"` or `\\Foo\\Bar::class`."""
    kind: Literal["string", "class", "bare"] = "string"
    quote: str = "'"
    double_backslash: bool = False

    def render(self, entry: str) -> str:
        if self.kind in ("class", "bare"):
            # relative names would resolve through the namespace or an import
            suffix = "::class" if self.kind == "class" else ""
            return f"\\{entry}{suffix}"
        value = entry.replace("\\", "\\\\") if self.double_backslash else entry
        return f"{self.quote}{value}{self.quote}"

    @classmethod
    def detect(cls, elements: Sequence[Element], default: "EntryStyle") -> "EntryStyle":
        """Copy the convention of the first named sibling; `default` otherwise."""
        for el in elements:
            if el.form == "string":
                quote = el.raw[0]
                if "\\\\" in el.raw:
                    doubled = True
                elif "\\" in el.raw:
                    doubled = False
                else:
                    doubled = quote == '"' or (default.kind == "string" and default.double_backslash)
                return cls(kind="string", quote=quote, double_backslash=doubled)
            if el.form in ("class", "bare"):
                return cls(kind=el.form)
        return default


__all__ = ["Element", "EntryStyle", "parse_elements", "unquote_php"]
