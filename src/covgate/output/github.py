"""GitHub Actions workflow commands — step outputs, failures, annotations."""

from __future__ import annotations

import logging
import os
import uuid
from typing import Mapping, Optional, TextIO

from covgate.comparison.models import ComparisonResult

logger = logging.getLogger(__name__)


def _escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def _escape_property(value: str) -> str:
    return _escape_data(value).replace(":", "%3A").replace(",", "%2C")


def _print(line: str, stream: Optional[TextIO]) -> None:
    print(line, file=stream)


def set_output(name: str, value: str, *, env: Optional[Mapping[str, str]] = None) -> None:
    """Set a step output.

    Appends to the ``GITHUB_OUTPUT`` file using the heredoc syntax so that
    multi-line values survive. Without the file there is nowhere to write
    outputs, so the value is dropped with a warning.
    """
    env = os.environ if env is None else env
    output_file = env.get("GITHUB_OUTPUT")
    if not output_file:
        logger.warning("GITHUB_OUTPUT is not set, output %r was not written", name)
        return

    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    while delimiter in value or delimiter in name:
        delimiter = f"ghadelimiter_{uuid.uuid4()}"
    with open(output_file, "a", encoding="utf-8") as f:
        f.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")


def set_failed(message: str, *, stream: Optional[TextIO] = None) -> None:
    """Emit an ``::error::`` command marking the step as failed."""
    _print(f"::error::{_escape_data(message)}", stream)


def emit_annotations(result: ComparisonResult, *, stream: Optional[TextIO] = None) -> None:
    """Emit one warning annotation per file issue, plus one for the totals."""
    if result.aggregate_exceeded:
        _print(
            "::warning title=Coverage::The general coverage is worse than before "
            "and above the tolerance.",
            stream,
        )
    for issue in result.issues:
        _print(
            f"::warning file={_escape_property(issue.file_name)},"
            f"title=Coverage::{_escape_data(issue.message)}",
            stream,
        )


def publish(
    has_issues: bool,
    report: str,
    *,
    env: Optional[Mapping[str, str]] = None,
) -> None:
    """Set the ``hasIssues`` and ``coverageReport`` outputs."""
    set_output("hasIssues", "true" if has_issues else "false", env=env)
    set_output("coverageReport", report, env=env)
