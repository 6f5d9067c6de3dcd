"""Comparison result models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class FileIssue:
    """A file that failed its tolerance or threshold rule."""

    file_name: str
    message: str
    is_new: bool = False  # new or renamed file (absent from the base snapshot)


@dataclass(frozen=True)
class AggregateDelta:
    """Signed candidate-minus-base deltas of the snapshot totals (negative = regression)."""

    statements_pct: float
    branches_pct: float


@dataclass
class ComparisonResult:
    """Complete result of comparing a candidate snapshot against its base."""

    delta: AggregateDelta
    aggregate_exceeded: bool = False
    issues: List[FileIssue] = field(default_factory=list)
    excluded_files: List[str] = field(default_factory=list)
    compared_files: int = 0

    @property
    def has_issues(self) -> bool:
        return bool(self.issues) or self.aggregate_exceeded

    @property
    def new_file_issues(self) -> List[FileIssue]:
        return [i for i in self.issues if i.is_new]

    @property
    def regression_issues(self) -> List[FileIssue]:
        return [i for i in self.issues if not i.is_new]
