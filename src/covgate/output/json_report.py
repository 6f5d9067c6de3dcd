"""JSON reporter for CI pipelines."""

from __future__ import annotations

import json
from typing import Any, Dict, List

from covgate.comparison.models import ComparisonResult
from covgate.config.schema import ToleranceConfig


def to_dict(
    result: ComparisonResult,
    tolerance: ToleranceConfig,
    *,
    report: str = "",
) -> Dict[str, Any]:
    """Convert a ComparisonResult to a JSON-serialisable dict."""
    issues_list: List[Dict[str, Any]] = []
    for issue in result.issues:
        issues_list.append({
            "file": issue.file_name,
            "kind": "new_file" if issue.is_new else "regression",
            "message": issue.message,
        })

    return {
        "version": "1.0",
        "has_issues": result.has_issues,
        "difference": {
            "statements": round(result.delta.statements_pct, 2),
            "branches": round(result.delta.branches_pct, 2),
        },
        "general_tolerance_exceeded": result.aggregate_exceeded,
        "tolerances": {
            "general": tolerance.general_coverage_tolerance,
            "single_file": tolerance.single_line_coverage_tolerance,
            "new_file_threshold": tolerance.new_file_coverage_threshold,
        },
        "compared_files": result.compared_files,
        "issues": issues_list,
        "excluded_files": result.excluded_files,
        "report": report,
    }


def render(result: ComparisonResult, tolerance: ToleranceConfig, *, report: str = "") -> str:
    """Return formatted JSON string."""
    return json.dumps(to_dict(result, tolerance, report=report), indent=2, ensure_ascii=False)
