"""Configuration schema — dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal

from covgate.comparison.exclusion import ExclusionRules, compile_patterns
from covgate.coverage.loader import DEFAULT_BASE_PATH, DEFAULT_CANDIDATE_PATH

OutputFormat = Literal["terminal", "json", "markdown"]

OUTPUT_FORMATS = ("terminal", "json", "markdown")

DEFAULT_GENERAL_TOLERANCE = 0.03
DEFAULT_SINGLE_FILE_TOLERANCE = 5.0
DEFAULT_NEW_FILE_THRESHOLD = 40.0


@dataclass
class ToleranceConfig:
    general_coverage_tolerance: float = DEFAULT_GENERAL_TOLERANCE  # max aggregate drop, pct points
    single_line_coverage_tolerance: float = DEFAULT_SINGLE_FILE_TOLERANCE  # max per-file drop
    new_file_coverage_threshold: float = DEFAULT_NEW_FILE_THRESHOLD  # min pct for new files


@dataclass
class ExcludeConfig:
    ignored_paths: List[str] = field(default_factory=list)  # substrings of the full path
    file_patterns: List[str] = field(default_factory=list)  # regexes against the base name


@dataclass
class InputConfig:
    base_path: str = DEFAULT_BASE_PATH
    candidate_path: str = DEFAULT_CANDIDATE_PATH


@dataclass
class OutputConfig:
    format: OutputFormat = "terminal"
    show_summary: bool = True


@dataclass
class CIConfig:
    annotation_format: Literal["github", "none"] = "github"
    fail_on_issues: bool = False  # exit 1 when issues are found


@dataclass
class CovGateConfig:
    version: str = "1.0"
    tolerance: ToleranceConfig = field(default_factory=ToleranceConfig)
    exclude: ExcludeConfig = field(default_factory=ExcludeConfig)
    input: InputConfig = field(default_factory=InputConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    ci: CIConfig = field(default_factory=CIConfig)

    def exclusion_rules(self) -> ExclusionRules:
        """Compile the exclude section. Invalid patterns are dropped with a warning."""
        return ExclusionRules(
            ignored_paths=tuple(self.exclude.ignored_paths),
            patterns=tuple(compile_patterns(self.exclude.file_patterns)),
        )
