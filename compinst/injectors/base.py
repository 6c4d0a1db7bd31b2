from __future__ import annotations

import logging
from pathlib import Path
from typing import FrozenSet, Optional, Protocol, Tuple, runtime_checkable

from ..core import AnchorPattern, EntryStyle, UnbalancedListError
from ..core import inject as _inject
from ..core import is_registered as _is_registered
from ..core import locate as _locate
from ..core import remove as _remove
from ..errors import AmbiguousSpanError
from ..fs import read_text_exact, write_text_atomic
from ..types import EditResult, ListRole, ListSpan, SkipReason, SyntaxVariant

__all__ = ["Injector", "ListInjector"]

logger = logging.getLogger(__name__)


@runtime_checkable
class Injector(Protocol):
    """
    Capability set of an injector.

    `registers_type` answers whether the injector can take entries of a role;
    `types_allowed` lists the roles it owns (used to remember a choice for
    later packages). `inject`/`remove` never raise for "nothing to do": they
    return a skipped EditResult instead.
    """
    name: str
    config_file: str

    def registers_type(self, role: ListRole) -> bool: ...   # noqa: E704

    def types_allowed(self) -> FrozenSet[ListRole]: ...   # noqa: E704

    def is_registered(self, entry: str) -> bool: ...   # noqa: E704

    def inject(self, entry: str, role: ListRole, *, dry_run: bool = False) -> EditResult: ...   # noqa: E704

    def remove(self, entry: str, role: Optional[ListRole] = None, *, dry_run: bool = False) -> EditResult: ...   # noqa: E704


class ListInjector:
    """
    Injector for one kind of config file holding one list literal.

    Subclasses only declare data: the well-known file, the roles, the anchors
    describing the list and the style used when the list gives no hint.
    Text operations are pure; file operations read, transform in memory and
    replace the file atomically.
    """
    #: Injector name (used in the project config and CLI)
    name: str = "list"
    #: Default config file, relative to the project root
    config_file: str = ""
    #: Roles this injector accepts
    allowed_types: FrozenSet[ListRole] = frozenset()
    #: List dialects, any order (the matcher sorts them by priority)
    anchors: Tuple[AnchorPattern, ...] = ()
    #: Style of new entries when the list has no named sibling
    default_style: EntryStyle = EntryStyle()

    def __init__(
        self,
        project_root: Path | str = "",
        *,
        config_file: Optional[str] = None,
        variant: Optional[SyntaxVariant] = None,
    ) -> None:
        self.project_root = Path(project_root) if project_root else Path.cwd()
        if config_file:
            self.config_file = config_file
        self.variant = variant

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.config_file!r})"

    @property
    def path(self) -> Path:
        return self.project_root / self.config_file

    # --- capabilities --------------------------------
    def registers_type(self, role: ListRole) -> bool:
        return role in self.allowed_types

    def types_allowed(self) -> FrozenSet[ListRole]:
        return self.allowed_types

    # --- pure text operations ------------------------
    def _ambiguous(self, exc: UnbalancedListError, role: Optional[ListRole], entry: Optional[str]) -> AmbiguousSpanError:
        return AmbiguousSpanError(
            self.path,
            role.value if role is not None else None,
            entry,
            str(exc),
        )

    def locate(self, text: str) -> Optional[ListSpan]:
        try:
            return _locate(text, self.anchors, variant=self.variant)
        except UnbalancedListError as e:
            raise self._ambiguous(e, None, None) from e

    def is_registered_in(self, text: str, entry: str) -> bool:
        try:
            return _is_registered(text, self.anchors, entry, variant=self.variant)
        except UnbalancedListError as e:
            raise self._ambiguous(e, None, entry) from e

    def inject_text(self, text: str, entry: str, role: ListRole) -> EditResult:
        if not self.registers_type(role):
            return EditResult.skip(text, SkipReason.NOT_APPLICABLE)
        try:
            return _inject(
                text,
                self.anchors,
                entry,
                role.insert_position,
                self.default_style,
                variant=self.variant,
            )
        except UnbalancedListError as e:
            raise self._ambiguous(e, role, entry) from e

    def remove_text(self, text: str, entry: str, role: Optional[ListRole] = None) -> EditResult:
        if role is not None and not self.registers_type(role):
            return EditResult.skip(text, SkipReason.NOT_APPLICABLE)
        try:
            return _remove(text, self.anchors, entry, variant=self.variant)
        except UnbalancedListError as e:
            raise self._ambiguous(e, role, entry) from e

    # --- file operations -----------------------------
    def read(self) -> Optional[str]:
        if not self.path.is_file():
            return None
        return read_text_exact(self.path)

    def is_registered(self, entry: str) -> bool:
        text = self.read()
        return text is not None and self.is_registered_in(text, entry)

    def inject(self, entry: str, role: ListRole, *, dry_run: bool = False) -> EditResult:
        text = self.read()
        if text is None:
            return EditResult.skip("", SkipReason.CONSTRUCT_NOT_FOUND)
        result = self.inject_text(text, entry, role)
        self._persist(result, "Injected", entry, dry_run)
        return result

    def remove(self, entry: str, role: Optional[ListRole] = None, *, dry_run: bool = False) -> EditResult:
        text = self.read()
        if text is None:
            return EditResult.skip("", SkipReason.CONSTRUCT_NOT_FOUND)
        result = self.remove_text(text, entry, role)
        self._persist(result, "Removed", entry, dry_run)
        return result

    def _persist(self, result: EditResult, verb: str, entry: str, dry_run: bool) -> None:
        if not result.changed:
            logger.debug("%s: nothing to do for '%s' (%s)", self.config_file, entry, result.skipped.value)
            return
        if dry_run:
            logger.info("%s '%s' in %s (dry run, not written)", verb, entry, self.config_file)
            return
        write_text_atomic(self.path, result.text)
        logger.info("%s '%s' in %s", verb, entry, self.config_file)
