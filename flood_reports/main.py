from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console

from flood_reports.config import Settings, get_settings
from flood_reports.domain.models import CleanedRecord
from flood_reports.errors import DatasetNotLoadedError, UnknownReportError
from flood_reports.orchestrator import (
    ReportBundle,
    available_reports,
    load_dataset,
    run_reports,
)
from flood_reports.reporter import print_bundle
from flood_reports.utils.logging import configure_logging

app = typer.Typer(help="Flood-control project reports CLI.")


class MenuSession:
    """
    State behind the interactive menu: the dataset loaded so far.
    """

    def __init__(self, settings: Settings, console: Console) -> None:
        self.settings = settings
        self.console = console
        self.records: List[CleanedRecord] = []
        self.loaded = False

    def load(self, path: Path) -> int:
        dataset = load_dataset(path)
        self.records = dataset.records
        self.loaded = True
        self.console.print(
            f"Loaded {dataset.validation.total:,} records: {len(self.records):,} kept, "
            f"{dataset.dropped:,} invalid, {dataset.filtered_out:,} outside "
            f"{self.settings.start_year}-{self.settings.end_year}."
        )
        return len(self.records)

    def generate(self, output_dir: Path) -> ReportBundle:
        if not self.loaded:
            raise DatasetNotLoadedError("No dataset loaded. Choose [1] to load a file first.")
        bundle = run_reports(self.records, output_dir=output_dir)
        print_bundle(bundle, limit=self.settings.preview_rows, console=self.console)
        return bundle


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"input={settings.input_path} | output_dir={settings.output_dir} | "
        f"years={settings.start_year}-{settings.end_year} | "
        f"reports={', '.join(available_reports())}"
    )


@app.command()
def run(
    input_path: Optional[Path] = typer.Option(
        None,
        "--input",
        "-i",
        help="CSV file to load (default from settings).",
    ),
    output_dir: Optional[Path] = typer.Option(
        None,
        "--output-dir",
        "-o",
        help="Directory for report files (default from settings).",
    ),
    start_year: Optional[int] = typer.Option(None, "--start-year", help="First FundingYear kept."),
    end_year: Optional[int] = typer.Option(None, "--end-year", help="Last FundingYear kept."),
    report: List[str] = typer.Option(
        ["all"],
        "--report",
        "-r",
        help="Report to generate (regional_efficiency, contractor_ranking, annual_trends, all, list).",
    ),
    no_persist: bool = typer.Option(False, "--no-persist", help="Preview only; write no files."),
) -> None:
    """
    Load a dataset, generate reports, and print previews.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.json_logs)

    if report == ["list"]:
        typer.echo("Available reports: " + ", ".join(available_reports()))
        return

    source = input_path or Path(settings.input_path)
    try:
        dataset = load_dataset(source, start_year=start_year, end_year=end_year)
    except OSError as exc:
        typer.echo(f"Could not read {source}: {exc}", err=True)
        raise typer.Exit(code=1)

    typer.echo(
        f"Loaded {dataset.validation.total:,} records ({dataset.dropped:,} invalid, "
        f"{len(dataset.records):,} kept)."
    )
    try:
        bundle = run_reports(
            dataset.records,
            report_names=report,
            output_dir=output_dir,
            persist=not no_persist,
        )
    except UnknownReportError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=2)
    except OSError as exc:
        typer.echo(f"Could not write reports: {exc}", err=True)
        raise typer.Exit(code=1)

    print_bundle(bundle, limit=settings.preview_rows)
    if not bundle.ok:
        raise typer.Exit(code=1)


@app.command()
def menu() -> None:
    """
    Interactive menu: load a file, generate reports, exit.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.json_logs)
    console = Console()
    session = MenuSession(settings, console)

    while True:
        console.print("\n[bold]Flood Control Reports[/bold]")
        console.print("[1] Load the file")
        console.print("[2] Generate reports")
        console.print("[3] Exit")
        choice = typer.prompt("Please choose from options [1] -> [3]").strip()

        if choice == "1":
            path = typer.prompt("CSV file", default=settings.input_path)
            try:
                session.load(Path(path))
            except OSError as exc:
                console.print(f"[red]Could not read {path}: {exc}[/red]")
        elif choice == "2":
            try:
                session.generate(Path(settings.output_dir))
            except DatasetNotLoadedError as exc:
                console.print(f"[red]Error: {exc}[/red]")
            except OSError as exc:
                console.print(f"[red]Could not write reports: {exc}[/red]")
        elif choice == "3":
            console.print("Process terminated.")
            return
        else:
            console.print("Invalid choice. Please choose a number from 1 to 3.")


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
