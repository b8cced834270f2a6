from __future__ import annotations

from typing import Any, Optional

from rich import box
from rich.console import Console
from rich.table import Table

from flood_reports.domain.reports import SummaryReport
from flood_reports.orchestrator import ReportBundle, ReportRun

NOT_APPLICABLE = "N/A"

# Numeric columns shown right-aligned; everything else is text.
_NUMERIC_STYLES = {
    "TotalApprovedBudget": "magenta",
    "MedianCostSavings": "green",
    "AverageCompletionDelayDays": "yellow",
    "PercentProjectsDelayedOver30Days": "red",
    "EfficiencyScore": "bold green",
    "NumProjects": "blue",
    "TotalCostSavings": "green",
    "ReliabilityIndex": "bold green",
    "TotalProjects": "blue",
    "AverageCostSavings": "green",
    "OverrunRate": "red",
    "YoY % Change (vs 2021)": "yellow",
}

# Integer columns that are labels, not quantities.
_PLAIN_INT_COLUMNS = frozenset({"FundingYear"})


def format_cell(value: Any, column: Optional[str] = None) -> str:
    """Render one report cell for the console."""
    if value is None:
        return NOT_APPLICABLE
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, int):
        return str(value) if column in _PLAIN_INT_COLUMNS else f"{value:,}"
    if isinstance(value, float):
        return f"{value:,.2f}"
    return str(value)


def build_preview_table(run: ReportRun, limit: int = 2) -> Table:
    """
    Build a rich table with the first `limit` rows of a report.
    """
    rows = [row.model_dump(by_alias=True) for row in run.rows[:limit]]
    table = Table(
        title=run.title,
        box=box.ROUNDED,
        caption=f"Showing {len(rows)} of {len(run.rows)} rows",
    )
    if not rows:
        return table

    for column in rows[0]:
        style = _NUMERIC_STYLES.get(column)
        if style:
            table.add_column(column, justify="right", style=style)
        else:
            table.add_column(column, style="cyan", no_wrap=True)
    for row in rows:
        table.add_row(*(format_cell(value, column) for column, value in row.items()))
    return table


def print_report(run: ReportRun, limit: int = 2, console: Optional[Console] = None) -> None:
    """Render the preview of one report."""
    console = console or Console()
    if run.error:
        console.print(f"[red]{run.title}: {run.error}[/red]")
        return
    if not run.rows:
        console.print(f"[yellow]{run.title}: no rows to display.[/yellow]")
        return
    console.print(build_preview_table(run, limit=limit))
    if run.output_path is not None:
        console.print(f"[dim]Full table exported to {run.output_path}[/dim]")


def print_summary(summary: SummaryReport, console: Optional[Console] = None) -> None:
    """Render the summary statistics as a two-column table."""
    console = console or Console()
    table = Table(title="Summary", box=box.ROUNDED, show_header=False)
    table.add_column("Metric", style="cyan", no_wrap=True)
    table.add_column("Value", justify="right", style="bold green")
    for key, value in summary.model_dump().items():
        table.add_row(key, format_cell(value))
    console.print(table)


def print_bundle(bundle: ReportBundle, limit: int = 2, console: Optional[Console] = None) -> None:
    """
    Render previews of every report in a bundle, then the summary.
    """
    console = console or Console()
    if bundle.error:
        console.print(f"[red]Error: {bundle.error}. Nothing to report.[/red]")
        return
    for run in bundle.runs:
        print_report(run, limit=limit, console=console)
    if bundle.summary is not None:
        print_summary(bundle.summary, console=console)
        if bundle.summary_path is not None:
            console.print(f"[dim]Summary exported to {bundle.summary_path}[/dim]")


__all__ = ["build_preview_table", "format_cell", "print_bundle", "print_report", "print_summary"]
