"""Markdown report for the pull-request comment.

The comment step posts this text verbatim, so every literal below is part of
the output contract.
"""

from __future__ import annotations

from typing import List, Sequence

from covgate.comparison.formatting import signed
from covgate.comparison.models import AggregateDelta, FileIssue

TITLE = "## ⚠️ Coverage Report"
GENERAL_WARNING = (
    "⚠️ The general coverage is worse than before and above the tolerance. "
    "You need to write more tests!"
)


def build_report(
    delta: AggregateDelta,
    aggregate_exceeded: bool,
    issues: Sequence[FileIssue],
) -> str:
    """Render the report, or ``""`` when there is nothing to report."""
    if not issues and not aggregate_exceeded:
        return ""

    parts: List[str] = [
        f"{TITLE}\n\n",
        "### Coverage Difference\n",
        "| Metric | Diff |\n|--------|------|\n",
        f"| Statements | {signed(delta.statements_pct)}% |\n",
        f"| Branches | {signed(delta.branches_pct)}% |\n\n",
    ]

    if aggregate_exceeded:
        parts.append(f"{GENERAL_WARNING}\n\n")

    if issues:
        parts.append("### Files with Coverage Issues\n\n")
        for issue in issues:
            parts.append(f"- `{issue.file_name}` - {issue.message}\n")

    return "".join(parts)
