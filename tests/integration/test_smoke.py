"""
End-to-end tests for the flood-control reports CLI.

These tests generate a synthetic dataset, run the CLI against it, and check
the written reports against the documented output contracts.
"""

from __future__ import annotations

import csv
import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from flood_reports.main import app
from scripts.generate_data import _generate_rows_csv

DEFAULT_ROWS = 600
DEFAULT_SEED = 7
INVALID_RATIO = 0.05
MAX_CONTRACTORS = 15
MIN_PROJECTS = 5

runner = CliRunner()


@pytest.fixture
def dataset(tmp_path: Path) -> Path:
    path = tmp_path / "projects.csv"
    _generate_rows_csv(path, rows=DEFAULT_ROWS, seed=DEFAULT_SEED, invalid_ratio=INVALID_RATIO)
    return path


def _read(path: Path):
    with path.open(newline="", encoding="utf-8") as f:
        return list(csv.DictReader(f))


class TestRunCommand:
    def test_run_writes_all_reports(self, dataset: Path, tmp_path: Path):
        out_dir = tmp_path / "reports"

        result = runner.invoke(app, ["run", "--input", str(dataset), "--output-dir", str(out_dir)])

        assert result.exit_code == 0, result.output
        efficiency = _read(out_dir / "report1_regional_efficiency.csv")
        ranking = _read(out_dir / "report2_contractor_ranking.csv")
        trends = _read(out_dir / "report3_annual_trends.csv")
        summary = json.loads((out_dir / "summary.json").read_text(encoding="utf-8"))

        scores = [float(row["EfficiencyScore"]) for row in efficiency]
        assert scores == sorted(scores, reverse=True)
        assert all(0 <= score <= 100 for score in scores)

        assert 0 < len(ranking) <= MAX_CONTRACTORS
        assert all(int(row["NumProjects"]) >= MIN_PROJECTS for row in ranking)
        assert all(float(row["ReliabilityIndex"]) <= 100 for row in ranking)

        years = {int(row["FundingYear"]) for row in trends}
        assert years <= {2021, 2022, 2023}
        for row in trends:
            if row["FundingYear"] == "2021":
                assert float(row["YoY % Change (vs 2021)"]) == 0

        assert summary["total_projects"] > 0

    def test_run_without_persist_only_previews(self, dataset: Path, tmp_path: Path):
        out_dir = tmp_path / "reports"
        result = runner.invoke(
            app, ["run", "-i", str(dataset), "-o", str(out_dir), "--no-persist"]
        )
        assert result.exit_code == 0, result.output
        assert "Report 2: Top Contractors Performance Ranking" in result.output
        assert not out_dir.exists()

    def test_year_window_with_no_records_reports_empty_input(self, dataset: Path, tmp_path: Path):
        result = runner.invoke(
            app,
            ["run", "-i", str(dataset), "-o", str(tmp_path), "--start-year", "1990", "--end-year", "1991"],
        )
        assert result.exit_code == 1
        assert "empty_input" in result.output

    def test_missing_input_file_fails_cleanly(self, tmp_path: Path):
        result = runner.invoke(app, ["run", "-i", str(tmp_path / "missing.csv")])
        assert result.exit_code == 1

    def test_list_reports(self):
        result = runner.invoke(app, ["run", "--report", "list"])
        assert result.exit_code == 0
        assert "regional_efficiency" in result.output


class TestMenuCommand:
    def test_generate_before_load_is_an_error(self):
        result = runner.invoke(app, ["menu"], input="2\n3\n")
        assert result.exit_code == 0, result.output
        assert "No dataset loaded" in result.output

    def test_load_then_generate(self, dataset: Path, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("FLOOD_OUTPUT_DIR", str(tmp_path / "menu-reports"))

        result = runner.invoke(app, ["menu"], input=f"9\n1\n{dataset}\n2\n3\n")

        assert result.exit_code == 0, result.output
        assert "Invalid choice" in result.output
        assert (tmp_path / "menu-reports" / "report3_annual_trends.csv").exists()
