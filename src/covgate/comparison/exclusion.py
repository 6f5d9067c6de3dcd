"""File exclusion — ignored path substrings and base-name regex patterns.

The two mechanisms are deliberately separate: ``ignored_paths`` is plain
substring containment against the full path (not path-segment aware), while
``patterns`` are searched against the base name only.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

logger = logging.getLogger(__name__)


def split_list(raw: Optional[str]) -> List[str]:
    """Split a comma-separated input into trimmed, non-empty entries."""
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


def compile_patterns(sources: Iterable[str]) -> List[re.Pattern[str]]:
    """Compile regex sources, skipping (and logging) any that fail to compile."""
    patterns: List[re.Pattern[str]] = []
    for source in sources:
        try:
            patterns.append(re.compile(source))
        except re.error as exc:
            logger.warning('Invalid regex pattern "%s", skipping: %s', source, exc)
    return patterns


def parse_ignored_paths(raw: Optional[str]) -> List[str]:
    return split_list(raw)


def parse_exclude_patterns(raw: Optional[str]) -> List[re.Pattern[str]]:
    return compile_patterns(split_list(raw))


def base_name(file_path: str) -> str:
    """Return the last path segment, or the whole path if it has no separator."""
    return file_path.rsplit("/", 1)[-1]


def is_excluded(
    file_path: str,
    ignored_paths: Sequence[str],
    exclude_patterns: Sequence[re.Pattern[str]],
) -> bool:
    if any(ignored in file_path for ignored in ignored_paths):
        return True
    name = base_name(file_path)
    return any(p.search(name) for p in exclude_patterns)


@dataclass(frozen=True)
class ExclusionRules:
    """Compiled exclusion rules. A file matching any rule of either kind is excluded."""

    ignored_paths: Sequence[str] = ()
    patterns: Sequence[re.Pattern[str]] = ()

    def is_excluded(self, file_path: str) -> bool:
        return is_excluded(file_path, self.ignored_paths, self.patterns)

    @classmethod
    def from_inputs(
        cls, ignored_paths: Optional[str], exclude_file_patterns: Optional[str]
    ) -> "ExclusionRules":
        """Build rules from the raw comma-separated inputs."""
        return cls(
            ignored_paths=tuple(parse_ignored_paths(ignored_paths)),
            patterns=tuple(parse_exclude_patterns(exclude_file_patterns)),
        )
