"""Coverage snapshot models and loading."""

from covgate.coverage.loader import SnapshotError, load_snapshot, load_snapshots
from covgate.coverage.models import CoverageMetric, CoverageSnapshot, FileCoverageRecord

__all__ = [
    "CoverageMetric",
    "CoverageSnapshot",
    "FileCoverageRecord",
    "SnapshotError",
    "load_snapshot",
    "load_snapshots",
]
