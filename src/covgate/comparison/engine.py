"""Core comparison engine — classifies files and applies tolerance rules.

Everything here is a pure function of the two snapshots and the config:
no I/O, no state carried between files.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional, Tuple

from covgate.comparison.exclusion import ExclusionRules
from covgate.comparison.formatting import fixed, plain
from covgate.comparison.models import AggregateDelta, ComparisonResult, FileIssue
from covgate.coverage.models import CoverageSnapshot, FileCoverageRecord
from covgate.output.markdown import build_report

if TYPE_CHECKING:
    from covgate.config.schema import CovGateConfig, ToleranceConfig

logger = logging.getLogger(__name__)


class ComparisonError(Exception):
    """Raised when the snapshots cannot be compared at all."""


def _dropped(candidate_pct: Optional[float], base_pct: Optional[float]) -> bool:
    # An unknown pct on either side never counts as a drop.
    if candidate_pct is None or base_pct is None:
        return False
    return candidate_pct < base_pct


def _fails_tolerance(
    candidate_pct: Optional[float], base_pct: Optional[float], tolerance: float
) -> bool:
    """True when the drop strictly exceeds *tolerance*; an equal drop passes."""
    return _dropped(candidate_pct, base_pct) and candidate_pct + tolerance < base_pct


def _check_new_file(
    candidate: FileCoverageRecord, file_path: str, threshold: float
) -> Optional[FileIssue]:
    statements_pct = candidate.statements_pct
    branches_pct = candidate.branches_pct
    if statements_pct >= threshold and branches_pct >= threshold:
        return None
    return FileIssue(
        file_name=file_path,
        message=(
            "new or renamed file that does not meet the test coverage threshold "
            f"of {plain(threshold)}%! >>> Statements: {fixed(statements_pct)}%, "
            f"Branches: {fixed(branches_pct)}%"
        ),
        is_new=True,
    )


def _check_existing_file(
    candidate: FileCoverageRecord,
    base: FileCoverageRecord,
    file_path: str,
    tolerance: float,
) -> Optional[FileIssue]:
    pairs = (
        ("Statements", candidate.known_pct("statements"), base.known_pct("statements")),
        ("Branches", candidate.known_pct("branches"), base.known_pct("branches")),
    )
    if not any(_fails_tolerance(cand, prev, tolerance) for _, cand, prev in pairs):
        return None

    # Every metric that dropped is reported, even one still inside the band.
    parts = [
        f"{label} Diff: {fixed(cand - prev)}%"
        for label, cand, prev in pairs
        if _dropped(cand, prev)
    ]
    return FileIssue(file_name=file_path, message=" | ".join(parts))


def compare_file(
    candidate: FileCoverageRecord,
    base: Optional[FileCoverageRecord],
    file_path: str,
    tolerance: ToleranceConfig,
    rules: Optional[ExclusionRules] = None,
) -> Optional[FileIssue]:
    """Compare one candidate file against its base record (``None`` for new files)."""
    if rules is not None and rules.is_excluded(file_path):
        return None
    if base is None:
        return _check_new_file(candidate, file_path, tolerance.new_file_coverage_threshold)
    return _check_existing_file(
        candidate, base, file_path, tolerance.single_line_coverage_tolerance
    )


def compare_aggregate(
    candidate_total: Optional[FileCoverageRecord],
    base_total: Optional[FileCoverageRecord],
    general_tolerance: float,
) -> Tuple[AggregateDelta, bool]:
    """Return the aggregate delta and whether it drops beyond *general_tolerance*.

    The tolerance is a magnitude of allowed drop; its configured sign is ignored.
    """
    if not candidate_total or not base_total:
        raise ComparisonError("Coverage files are missing 'total' property")

    delta = AggregateDelta(
        statements_pct=candidate_total.statements_pct - base_total.statements_pct,
        branches_pct=candidate_total.branches_pct - base_total.branches_pct,
    )
    floor = -abs(general_tolerance)
    exceeded = delta.statements_pct < floor or delta.branches_pct < floor
    return delta, exceeded


def evaluate(
    candidate: CoverageSnapshot,
    base: CoverageSnapshot,
    config: CovGateConfig,
    rules: Optional[ExclusionRules] = None,
) -> ComparisonResult:
    """Compare every candidate file against *base* and check the totals.

    Files only present in *base* (deletions) are never evaluated. Issues keep
    the candidate snapshot's file order.
    """
    if rules is None:
        rules = config.exclusion_rules()
    tolerance = config.tolerance

    delta, exceeded = compare_aggregate(
        candidate.total, base.total, tolerance.general_coverage_tolerance
    )

    issues: List[FileIssue] = []
    excluded: List[str] = []
    compared = 0
    for file_path, record in candidate.items():
        if rules.is_excluded(file_path):
            excluded.append(file_path)
            continue
        compared += 1
        issue = compare_file(record, base.get(file_path), file_path, tolerance)
        if issue is not None:
            logger.debug("%s >>> %s", issue.file_name, issue.message)
            issues.append(issue)

    logger.debug(
        "Compared %d files, excluded %d, found %d issues",
        compared, len(excluded), len(issues),
    )
    return ComparisonResult(
        delta=delta,
        aggregate_exceeded=exceeded,
        issues=issues,
        excluded_files=excluded,
        compared_files=compared,
    )


def run(
    candidate: CoverageSnapshot,
    base: CoverageSnapshot,
    config: CovGateConfig,
) -> Tuple[bool, str]:
    """Evaluate both snapshots and render the report. Returns ``(has_issues, report)``."""
    result = evaluate(candidate, base, config)
    report = build_report(result.delta, result.aggregate_exceeded, result.issues)
    return result.has_issues, report
