"""
Synthetic dataset generator for the flood-control reports pipeline.

Writes a deterministic pseudo-random CSV shaped like the DPWH flood-control
project export, optionally salted with malformed rows to exercise validation.
"""

from __future__ import annotations

import csv
import random
import sys
import time
from datetime import date, timedelta
from pathlib import Path

import typer

app = typer.Typer(help="Generate a synthetic flood-control projects CSV.")

HEADER = [
    "ProjectId",
    "MainIsland",
    "Region",
    "Province",
    "Contractor",
    "TypeOfWork",
    "FundingYear",
    "ApprovedBudgetForContract",
    "ContractCost",
    "StartDate",
    "ActualCompletionDate",
]

REGIONS = {
    "Luzon": ["Region I", "Region II", "Region III", "NCR"],
    "Visayas": ["Region VI", "Region VII", "Region VIII"],
    "Mindanao": ["Region X", "Region XI", "BARMM"],
}
PROVINCES = ["Pampanga", "Bulacan", "Cebu", "Leyte", "Iloilo", "Davao del Sur", "Maguindanao"]
CONTRACTORS = [f"Contractor {letter} Construction" for letter in "ABCDEFGHIJKLMNOPQRST"]
WORK_TYPES = [
    "Construction of Flood Mitigation Structure",
    "Construction of Revetment",
    "Rehabilitation of Dike",
    "Construction of Drainage Structure",
]
YEARS = [2020, 2021, 2022, 2023, 2024]


def _malformed_row(rng: random.Random, row: list[str]) -> list[str]:
    defect = rng.choice(["blank_region", "bad_cost", "bad_date", "reversed"])
    if defect == "blank_region":
        row[HEADER.index("Region")] = "  "
    elif defect == "bad_cost":
        row[HEADER.index("ContractCost")] = "n/a"
    elif defect == "bad_date":
        row[HEADER.index("StartDate")] = "2022-13-40"
    else:
        start = HEADER.index("StartDate")
        end = HEADER.index("ActualCompletionDate")
        row[start], row[end] = row[end], row[start]
        if row[start] == row[end]:
            row[start] = (date.fromisoformat(row[end]) + timedelta(days=1)).isoformat()
    return row


def _generate_rows_csv(
    csv_path: Path,
    rows: int,
    seed: int,
    invalid_ratio: float = 0.0,
) -> None:
    rng = random.Random(seed)

    with csv_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(HEADER)
        for i in range(rows):
            main_island = rng.choice(sorted(REGIONS))
            year = rng.choice(YEARS)
            budget = round(rng.uniform(1_000_000, 100_000_000), 2)
            cost = round(budget * rng.uniform(0.85, 1.10), 2)
            start = date(year, 1, 1) + timedelta(days=rng.randint(0, 364))
            end = start + timedelta(days=rng.randint(0, 400))
            row = [
                f"P-{i:07d}",
                main_island,
                rng.choice(REGIONS[main_island]),
                rng.choice(PROVINCES),
                rng.choice(CONTRACTORS),
                rng.choice(WORK_TYPES),
                str(year),
                f"{budget:.2f}",
                f"{cost:.2f}",
                start.isoformat(),
                end.isoformat(),
            ]
            if invalid_ratio and rng.random() < invalid_ratio:
                row = _malformed_row(rng, row)
            writer.writerow(row)


@app.command()
def main(
    rows: int = typer.Option(
        10_000,
        "--rows",
        "-r",
        help="Number of rows to generate.",
    ),
    seed: int = typer.Option(
        42,
        "--seed",
        help="Deterministic RNG seed.",
    ),
    invalid_ratio: float = typer.Option(
        0.0,
        "--invalid-ratio",
        min=0.0,
        max=1.0,
        help="Share of rows to corrupt so they fail validation.",
    ),
    output: Path = typer.Option(
        Path("dpwh_flood_control_projects.csv"),
        "--output",
        "-o",
        help="CSV output path.",
    ),
) -> None:
    """
    Generate a synthetic flood-control projects CSV.
    """
    start = time.perf_counter()
    output.parent.mkdir(parents=True, exist_ok=True)

    typer.echo(f"Generating {rows:,} rows -> {output} (seed={seed}, invalid_ratio={invalid_ratio})")
    _generate_rows_csv(output, rows=rows, seed=seed, invalid_ratio=invalid_ratio)
    duration = time.perf_counter() - start
    typer.echo(f"CSV generation completed in {duration:.2f}s")


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)
