"""
JSON shapes produced by the CLI (pydantic models, dumped with model_dump).
"""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from .types import EditResult

Action = Literal["inject", "remove"]
Outcome = Literal["written", "dry-run", "skipped"]


class ActionRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    action: Action
    entry: str
    role: Optional[str] = None
    file: Optional[str] = None
    injector: str
    outcome: Outcome
    # SkipReason value when outcome == "skipped"
    reason: Optional[str] = None

    @classmethod
    def from_result(
        cls,
        action: Action,
        entry: str,
        role: Optional[str],
        file: Optional[str],
        injector: str,
        result: EditResult,
        *,
        dry_run: bool = False,
    ) -> ActionRecord:
        if result.skipped is not None:
            return cls(action=action, entry=entry, role=role, file=file, injector=injector,
                       outcome="skipped", reason=result.skipped.value)
        return cls(action=action, entry=entry, role=role, file=file, injector=injector,
                   outcome="dry-run" if dry_run else "written")


class InstallReport(BaseModel):
    package: Optional[str] = None
    actions: List[ActionRecord] = Field(default_factory=list)
    messages: List[str] = Field(default_factory=list)

    @property
    def changed(self) -> bool:
        return any(a.outcome == "written" for a in self.actions)


class OptionInfo(BaseModel):
    index: int
    prompt: str
    injector: str
    file: Optional[str] = None
    types: List[str] = Field(default_factory=list)


class CheckResult(BaseModel):
    entry: str
    registered_in: List[str] = Field(default_factory=list)


__all__ = ["Action", "Outcome", "ActionRecord", "InstallReport", "OptionInfo", "CheckResult"]
