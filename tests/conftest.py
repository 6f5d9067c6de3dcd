"""Shared test fixtures — coverage summaries, snapshot files, clean environment."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

import pytest

from covgate.coverage.models import CoverageMetric, FileCoverageRecord


def metric(pct: float, total: int = 100) -> Dict[str, Any]:
    """An istanbul metric dict with *pct* coverage."""
    return {"total": total, "covered": round(total * pct / 100), "skipped": 0, "pct": pct}


def summary_entry(statements: float, branches: float, lines: Optional[float] = None) -> Dict[str, Any]:
    """An istanbul file entry."""
    lines = statements if lines is None else lines
    return {
        "lines": metric(lines),
        "functions": metric(lines),
        "statements": metric(statements),
        "branches": metric(branches),
    }


def record(statements: Optional[float] = None, branches: Optional[float] = None) -> FileCoverageRecord:
    """A FileCoverageRecord; a metric passed as ``None`` is left out."""
    return FileCoverageRecord(
        statements=CoverageMetric(total=100, pct=statements) if statements is not None else None,
        branches=CoverageMetric(total=100, pct=branches) if branches is not None else None,
    )


def write_summary(path: Path, data: Dict[str, Any]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the runner's own CI variables out of the tests."""
    import os

    for name in list(os.environ):
        if name.startswith(("INPUT_", "CI_COVGATE_", "GITHUB_")) or name == "CI":
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def base_summary() -> Dict[str, Any]:
    return {
        "total": summary_entry(80, 70),
        "src/a.ts": summary_entry(90, 80),
        "src/b.ts": summary_entry(75, 60),
        "src/deleted.ts": summary_entry(100, 100),
    }


@pytest.fixture
def candidate_summary() -> Dict[str, Any]:
    return {
        "total": summary_entry(80, 70),
        "src/a.ts": summary_entry(90, 80),
        "src/b.ts": summary_entry(75, 60),
    }


@pytest.fixture
def coverage_dirs(tmp_path: Path, base_summary, candidate_summary) -> Path:
    """A workspace laid out the way the action expects its inputs."""
    write_summary(tmp_path / "coverage-base" / "coverage-summary.json", base_summary)
    write_summary(tmp_path / "coverage-pr" / "coverage-summary.json", candidate_summary)
    return tmp_path
