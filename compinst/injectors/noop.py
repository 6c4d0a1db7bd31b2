from __future__ import annotations

from typing import FrozenSet, Optional

from ..types import EditResult, ListRole, SkipReason


class NoopInjector:
    """
    The "Do not inject" choice.

    Accepts every role so it can always be offered, never touches a file.
    """
    name = "noop"
    config_file = ""

    def __repr__(self) -> str:
        return "NoopInjector()"

    def registers_type(self, role: ListRole) -> bool:
        return True

    def types_allowed(self) -> FrozenSet[ListRole]:
        return frozenset()

    def is_registered(self, entry: str) -> bool:
        return False

    def inject(self, entry: str, role: ListRole, *, dry_run: bool = False) -> EditResult:
        return EditResult.skip("", SkipReason.NOT_APPLICABLE)

    def remove(self, entry: str, role: Optional[ListRole] = None, *, dry_run: bool = False) -> EditResult:
        return EditResult.skip("", SkipReason.NOT_APPLICABLE)
