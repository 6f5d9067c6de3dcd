"""Comparison — exclusion rules, result models, number formatting.

The engine itself lives in :mod:`covgate.comparison.engine`.
"""

from covgate.comparison.exclusion import ExclusionRules, is_excluded, parse_exclude_patterns
from covgate.comparison.models import AggregateDelta, ComparisonResult, FileIssue

__all__ = [
    "AggregateDelta",
    "ComparisonResult",
    "ExclusionRules",
    "FileIssue",
    "is_excluded",
    "parse_exclude_patterns",
]
