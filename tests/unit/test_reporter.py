from __future__ import annotations

from rich.console import Console

from flood_reports.orchestrator import ReportBundle, ReportRun, run_reports
from flood_reports.reporter import build_preview_table, format_cell, print_bundle
from flood_reports.reports.trends import generate_annual_overrun_trends


def test_format_cell():
    assert format_cell(None) == "N/A"
    assert format_cell(1234) == "1,234"
    assert format_cell(12.3456) == "12.35"
    assert format_cell("High Risk") == "High Risk"


def test_preview_shows_first_two_rows(make_record):
    records = [make_record(funding_year=year) for year in (2021, 2022, 2023)]
    run = ReportRun(name="annual_trends", title="Trends", rows=generate_annual_overrun_trends(records))

    table = build_preview_table(run, limit=2)

    assert table.row_count == 2
    assert [column.header for column in table.columns][-1] == "YoY % Change (vs 2021)"


def test_print_bundle_renders_reports_and_summary(make_record):
    bundle = run_reports([make_record(funding_year=2022)], persist=False)
    console = Console(record=True, width=200)

    print_bundle(bundle, console=console)

    text = console.export_text()
    assert "Report 1: Regional Flood Mitigation Efficiency Summary" in text
    assert "Report 3: Annual Project Type Cost Overrun Trends" in text
    assert "N/A" in text
    assert "total_projects" in text


def test_print_bundle_reports_empty_input():
    console = Console(record=True, width=120)
    print_bundle(ReportBundle(error="empty_input"), console=console)
    assert "empty_input" in console.export_text()


def test_funding_year_is_not_grouped_by_thousands(make_record):
    run = ReportRun(
        name="annual_trends",
        title="Trends",
        rows=generate_annual_overrun_trends([make_record(funding_year=2021)]),
    )
    console = Console(record=True, width=200)

    console.print(build_preview_table(run))

    text = console.export_text()
    assert "2021" in text
    assert "2,021" not in text
    assert format_cell(2021, "FundingYear") == "2021"
    assert format_cell(2021, "TotalProjects") == "2,021"
