"""Rich terminal reporter — coverage difference, worse files, verdict."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from covgate.comparison.formatting import signed
from covgate.comparison.models import ComparisonResult

_KIND_STYLE = {
    "new": "bold black on yellow",
    "regression": "bold white on dark_orange",
}


def _delta_text(value: float) -> Text:
    style = "red" if value < 0 else "green"
    return Text(f"{signed(value)}%", style=style)


def _kind_pill(is_new: bool) -> Text:
    kind = "new" if is_new else "regression"
    return Text(f" {kind.upper()} ", style=_KIND_STYLE[kind])


def render(
    result: ComparisonResult,
    *,
    show_summary: bool = True,
    console: Optional[Console] = None,
) -> None:
    """Print comparison results to the terminal using Rich."""
    console = console or Console(stderr=True)

    console.print()
    diff_table = Table(title="Coverage difference", title_style="bold", border_style="dim")
    diff_table.add_column("Metric", style="cyan")
    diff_table.add_column("Diff", justify="right")
    diff_table.add_row("Statements", _delta_text(result.delta.statements_pct))
    diff_table.add_row("Branches", _delta_text(result.delta.branches_pct))
    console.print(diff_table)

    if result.issues:
        console.print()
        table = Table(
            title="Files with worse coverage",
            show_lines=True,
            title_style="bold",
            border_style="dim",
        )
        table.add_column("Kind", justify="center", width=14)
        table.add_column("File", style="magenta")
        table.add_column("Details")
        for issue in result.issues:
            table.add_row(_kind_pill(issue.is_new), Text(issue.file_name), Text(issue.message))
        console.print(table)

    if show_summary:
        _print_summary(console, result)

    console.print()
    if result.aggregate_exceeded:
        console.print(
            "[bold red]❌ The general coverage is worse than before "
            "and above the tolerance.[/bold red]"
        )
    if result.has_issues:
        console.print(
            "[bold yellow]⚠️  Coverage issues detected - "
            "will be posted as PR comment[/bold yellow]"
        )
    else:
        console.print("[bold green]✅ Coverage is OK.[/bold green]")


def _print_summary(console: Console, result: ComparisonResult) -> None:
    console.print()
    console.print(f"[dim]Files compared:[/dim]  {result.compared_files}")
    console.print(f"[dim]Excluded:[/dim]        {len(result.excluded_files)}")
    console.print(f"[dim]Regressions:[/dim]     {len(result.regression_issues)}")
    console.print(f"[dim]New files:[/dim]       {len(result.new_file_issues)}")
