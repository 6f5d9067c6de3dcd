"""Read istanbul ``coverage-summary.json`` files into CoverageSnapshot objects."""

from __future__ import annotations

import json
import logging
import math
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

from covgate.coverage.models import (
    TOTAL_KEY,
    CoverageMetric,
    CoverageSnapshot,
    FileCoverageRecord,
)

logger = logging.getLogger(__name__)

DEFAULT_BASE_PATH = "./coverage-base/coverage-summary.json"
DEFAULT_CANDIDATE_PATH = "./coverage-pr/coverage-summary.json"

_METRICS = ("lines", "functions", "statements", "branches")


class SnapshotError(Exception):
    """Raised when a coverage snapshot is missing or malformed."""


def _as_int(value: Any) -> int:
    if isinstance(value, (int, float)) and math.isfinite(value):
        return int(value)
    return 0


def _as_pct(value: Any) -> Optional[float]:
    """Missing or null pct counts as 0; a string (istanbul's "Unknown") as unknown."""
    if isinstance(value, str):
        return None
    if isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value):
        return float(value)
    return 0.0


def _build_metric(data: Any) -> Optional[CoverageMetric]:
    if not isinstance(data, dict):
        return None
    return CoverageMetric(
        total=_as_int(data.get("total")),
        covered=_as_int(data.get("covered")),
        skipped=_as_int(data.get("skipped")),
        pct=_as_pct(data.get("pct")),
    )


def _build_record(key: str, data: Any, source: Path) -> FileCoverageRecord:
    if not isinstance(data, dict):
        raise SnapshotError(f"Invalid coverage entry for {key!r} in {source}")
    return FileCoverageRecord(**{m: _build_metric(data.get(m)) for m in _METRICS})


def parse_snapshot(raw: Dict[str, Any], source: Path) -> CoverageSnapshot:
    """Build a CoverageSnapshot from a decoded JSON document."""
    total_data = raw.get(TOTAL_KEY)
    total = None
    if isinstance(total_data, dict) or total_data:
        total = _build_record(TOTAL_KEY, total_data, source)
    files = {
        key: _build_record(key, value, source)
        for key, value in raw.items()
        if key != TOTAL_KEY
    }
    return CoverageSnapshot(total=total, files=files)


def _read_json(path: Path) -> Dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as f:
            raw = json.load(f)
    except (OSError, ValueError) as exc:
        raise SnapshotError(f"Failed to parse {path}: {exc}") from exc
    if not isinstance(raw, dict):
        raise SnapshotError(f"Failed to parse {path}: expected a JSON object")
    return raw


def load_snapshot(path: Union[str, Path], *, label: str = "Coverage") -> CoverageSnapshot:
    """Load a single coverage summary. *label* prefixes the not-found message."""
    p = Path(path)
    if not p.is_file():
        raise SnapshotError(f"{label} coverage file not found: {path}")
    snapshot = parse_snapshot(_read_json(p), p)
    logger.debug("Loaded %d file records from %s", len(snapshot), p)
    return snapshot


def load_snapshots(
    base_path: Union[str, Path] = DEFAULT_BASE_PATH,
    candidate_path: Union[str, Path] = DEFAULT_CANDIDATE_PATH,
) -> Tuple[CoverageSnapshot, CoverageSnapshot]:
    """Load the base and candidate snapshots. Returns ``(base, candidate)``.

    Both files are checked for existence before either is parsed, base first.
    """
    if not Path(base_path).is_file():
        raise SnapshotError(f"Base coverage file not found: {base_path}")
    if not Path(candidate_path).is_file():
        raise SnapshotError(f"PR coverage file not found: {candidate_path}")
    base = load_snapshot(base_path, label="Base")
    candidate = load_snapshot(candidate_path, label="PR")
    return base, candidate
