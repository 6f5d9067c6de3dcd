"""Coverage snapshot data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator, Mapping, Optional, Tuple

TOTAL_KEY = "total"

# Stand-in for an "Unknown" pct wherever a number is needed (new-file check, totals).
UNKNOWN_PCT = 100.0


@dataclass(frozen=True)
class CoverageMetric:
    """One coverage dimension (lines, functions, statements, branches) for one scope.

    ``pct`` comes straight from the coverage tool and may not be recomputable
    from ``total``/``covered`` because of tool-side rounding. ``None`` means
    the tool reported it as unknown (a file with nothing to cover).
    """

    total: int = 0
    covered: int = 0
    skipped: int = 0
    pct: Optional[float] = 0.0


@dataclass(frozen=True)
class FileCoverageRecord:
    """Per-metric coverage of a single file, or of the whole snapshot."""

    lines: Optional[CoverageMetric] = None
    functions: Optional[CoverageMetric] = None
    statements: Optional[CoverageMetric] = None
    branches: Optional[CoverageMetric] = None

    @property
    def statements_pct(self) -> float:
        return _numeric(self.statements)

    @property
    def branches_pct(self) -> float:
        return _numeric(self.branches)

    def known_pct(self, metric: str) -> Optional[float]:
        """The metric's pct, ``0`` when the metric is absent, ``None`` when unknown."""
        value = getattr(self, metric)
        return 0.0 if value is None else value.pct


def _numeric(metric: Optional[CoverageMetric]) -> float:
    if metric is None:
        return 0.0
    return UNKNOWN_PCT if metric.pct is None else metric.pct


@dataclass(frozen=True)
class CoverageSnapshot:
    """A decoded coverage summary: the aggregate record plus per-file records.

    ``files`` keeps the key order of the source document and never contains
    the reserved ``total`` entry.
    """

    total: Optional[FileCoverageRecord] = None
    files: Mapping[str, FileCoverageRecord] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "files", MappingProxyType(dict(self.files)))

    def get(self, file_path: str) -> Optional[FileCoverageRecord]:
        return self.files.get(file_path)

    def items(self) -> Iterator[Tuple[str, FileCoverageRecord]]:
        return iter(self.files.items())

    def __contains__(self, file_path: object) -> bool:
        return file_path in self.files

    def __len__(self) -> int:
        return len(self.files)
