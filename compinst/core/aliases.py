"""
Import (`use`) table of a PHP file.

Class-constant entries such as `ConfigProvider::class` are only comparable
with a fully qualified name after resolving them against the imports
declared near the top of the file.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, Iterator, Optional, Tuple

from .scanner import CodeMap, scan

_USE_RE = re.compile(r"\buse\s+(?!\()([^;]+);")
_NAMESPACE_RE = re.compile(r"\bnamespace\s+([A-Za-z_][\w\\]*)\s*[;{]")
_CLAUSE_RE = re.compile(r"^\\?([A-Za-z_][\w\\]*?)(?:\s+as\s+([A-Za-z_]\w*))?$", re.IGNORECASE)


@dataclass
class ImportTable:
    """Alias (lower-cased) -> fully qualified name, plus the file namespace."""
    aliases: Dict[str, str] = field(default_factory=dict)
    namespace: Optional[str] = None

    def add(self, fqcn: str, alias: Optional[str] = None) -> None:
        fqcn = fqcn.strip("\\")
        short = alias or fqcn.rsplit("\\", 1)[-1]
        self.aliases[short.lower()] = fqcn

    def resolve(self, name: str) -> str:
        """
        Resolve a class reference as written in code to its fully qualified form.

        `\\A\\B` is already fully qualified; `Alias\\Rest` is expanded through the
        import table; any other relative name lives in the file namespace.
        """
        if name.startswith("\\"):
            return name[1:]
        head, sep, rest = name.partition("\\")
        target = self.aliases.get(head.lower())
        if target is not None:
            return f"{target}{sep}{rest}" if sep else target
        if self.namespace:
            return f"{self.namespace}\\{name}"
        return name


def _split_clauses(body: str) -> Iterator[Tuple[str, Optional[str]]]:
    """
    Yield (fqcn, alias) pairs from the body of one `use` statement.

    Handles `A\\B`, `A\\B as C`, comma lists and group syntax `A\\{B, C as D}`.
    """
    body = " ".join(body.split())
    if "{" in body:
        prefix, _, group = body.partition("{")
        prefix = prefix.strip().rstrip("\\")
        group = group.rsplit("}", 1)[0]
        for part in group.split(","):
            part = part.strip()
            if not part:
                continue
            m = _CLAUSE_RE.match(part)
            if m:
                yield f"{prefix}\\{m.group(1)}", m.group(2)
        return
    for part in body.split(","):
        m = _CLAUSE_RE.match(part.strip())
        if m:
            yield m.group(1), m.group(2)


def parse_imports(text: str, code_map: Optional[CodeMap] = None) -> ImportTable:
    cmap = code_map or CodeMap(scan(text))
    table = ImportTable()

    ns = _NAMESPACE_RE.search(text)
    while ns is not None and not cmap.is_code(ns.start()):
        ns = _NAMESPACE_RE.search(text, ns.end())
    if ns is not None:
        table.namespace = ns.group(1).strip("\\")

    for m in _USE_RE.finditer(text):
        if not cmap.is_code(m.start()):
            continue
        body = m.group(1).strip()
        keyword = body.split(None, 1)[0].lower() if body else ""
        if keyword in ("function", "const"):
            continue
        for fqcn, alias in _split_clauses(body):
            table.add(fqcn, alias)
    return table


__all__ = ["ImportTable", "parse_imports"]
