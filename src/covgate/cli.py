"""covgate CLI — Typer application with check and init commands."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from covgate import __version__

app = typer.Typer(
    name="covgate",
    help="Flag pull requests that make test coverage worse.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)


def _detect_ci() -> bool:
    """Auto-detect CI environment."""
    if os.environ.get("GITHUB_ACTIONS", "").lower() == "true":
        return True
    return os.environ.get("CI", "").lower() in ("true", "1", "yes")


def _setup_logging(verbose: bool, debug: bool) -> None:
    level = logging.DEBUG if debug else logging.INFO if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=debug, markup=False)],
        force=True,
    )


def _fail(label: str, exc: Exception, *, ci_mode: bool) -> NoReturn:
    """Report a fatal error and exit 2. No step outputs are set."""
    from covgate.output.github import set_failed

    console.print(f"[bold red]{label}:[/bold red] {escape(str(exc))}")
    if ci_mode:
        set_failed(str(exc))
    raise typer.Exit(code=2) from exc


# ── check ─────────────────────────────────────────────────────────────────────


@app.command()
def check(
    base: Optional[str] = typer.Option(None, "--base", "-b", help="Base branch coverage-summary.json"),
    candidate: Optional[str] = typer.Option(None, "--candidate", "-p", help="PR coverage-summary.json"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .covgate.toml"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: terminal | json | markdown"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write the markdown report to file"),
    fail_on_issues: bool = typer.Option(False, "--fail-on-issues", help="Exit 1 when issues are found"),
    ci: bool = typer.Option(False, "--ci", help="Enable CI mode"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    debug: bool = typer.Option(False, "--debug", help="Debug output"),
) -> None:
    """Compare PR coverage against the base branch."""
    from covgate.comparison.engine import ComparisonError, evaluate
    from covgate.config.loader import ConfigError, load_config, log_config
    from covgate.coverage.loader import SnapshotError, load_snapshots
    from covgate.output import github, json_report, terminal
    from covgate.output.markdown import build_report

    _setup_logging(verbose, debug)
    ci_mode = ci or _detect_ci()

    # --- Load config ---
    try:
        cfg = load_config(Path.cwd(), config)
    except ConfigError as exc:
        _fail("Config error", exc, ci_mode=ci_mode)

    # --- CLI overrides ---
    if format:
        if format not in ("terminal", "json", "markdown"):
            console.print(f"[bold red]Invalid format:[/bold red] {escape(format)}")
            raise typer.Exit(code=2)
        cfg.output.format = format  # type: ignore[assignment]
    if base:
        cfg.input.base_path = base
    if candidate:
        cfg.input.candidate_path = candidate
    if fail_on_issues:
        cfg.ci.fail_on_issues = True

    log_config(cfg)
    rules = cfg.exclusion_rules()

    # --- Load snapshots and compare ---
    try:
        base_snapshot, candidate_snapshot = load_snapshots(
            cfg.input.base_path, cfg.input.candidate_path
        )
    except SnapshotError as exc:
        _fail("Error", exc, ci_mode=ci_mode)

    try:
        result = evaluate(candidate_snapshot, base_snapshot, cfg, rules)
    except ComparisonError as exc:
        _fail("Error", exc, ci_mode=ci_mode)

    report = build_report(result.delta, result.aggregate_exceeded, result.issues)

    # --- Output ---
    if cfg.output.format == "terminal":
        terminal.render(result, show_summary=cfg.output.show_summary, console=console)
    elif cfg.output.format == "json":
        print(json_report.render(result, cfg.tolerance, report=report))
    elif cfg.output.format == "markdown":
        print(report, end="")

    if output:
        Path(output).write_text(report, encoding="utf-8")
        if verbose:
            console.print(f"[dim]Report written to {escape(str(output))}[/dim]")

    # --- CI outputs and annotations ---
    if ci_mode and cfg.ci.annotation_format == "github":
        github.publish(result.has_issues, report)
        github.emit_annotations(result)

    if result.has_issues and cfg.ci.fail_on_issues:
        raise typer.Exit(code=1)
    raise typer.Exit(code=0)


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init() -> None:
    """Generate a starter .covgate.toml in the current directory."""
    from covgate.config.defaults import DEFAULT_TOML
    from covgate.config.loader import CONFIG_FILENAME

    config_path = Path.cwd() / CONFIG_FILENAME

    if config_path.exists():
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {escape(str(config_path))}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {escape(str(config_path))}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"covgate {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """covgate — Flag pull requests that make test coverage worse."""
