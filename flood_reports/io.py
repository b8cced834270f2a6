"""
File loading and report persistence.

The pipeline and generators never touch the filesystem; this module is the
only place that reads the input CSV or writes report files. OSErrors are left
to propagate to the caller.
"""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from pydantic import BaseModel

from flood_reports.domain.reports import SummaryReport
from flood_reports.utils.logging import get_logger

log = get_logger(__name__)


def load_records(path: Path | str) -> List[Dict[str, str]]:
    """
    Read a CSV file into header-keyed rows.

    Header names are kept verbatim and empty lines are skipped. Rows of blank
    cells are kept so validation counts them. Cells missing from short rows
    read as empty strings; cells beyond the header are ignored.
    """
    csv_path = Path(path)
    records: List[Dict[str, str]] = []
    with csv_path.open("r", newline="", encoding="utf-8-sig") as f:
        reader = csv.DictReader(f, restval="")
        for row in reader:
            row.pop(None, None)
            records.append(row)

    log.info(f"Loaded {len(records)} records", extra={"path": str(csv_path), "records": len(records)})
    return records


def write_report(rows: Sequence[BaseModel], path: Path | str) -> Optional[Path]:
    """
    Write report rows as CSV, one column per output alias.

    Returns the written path, or None (after logging) when `rows` is empty.
    """
    if not rows:
        log.error("Nothing to write: report has no rows", extra={"path": str(path)})
        return None

    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    payload = [row.model_dump(by_alias=True) for row in rows]
    with out_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=list(payload[0]))
        writer.writeheader()
        # csv writes None (an undefined YoY change) as an empty cell.
        writer.writerows(payload)

    log.info("CSV write successful", extra={"path": str(out_path), "rows": len(payload)})
    return out_path


def write_summary(summary: Optional[SummaryReport], path: Path | str) -> Optional[Path]:
    """
    Write the summary object as JSON.

    Returns the written path, or None (after logging) when there is no summary.
    """
    if summary is None:
        log.error("Nothing to write: no summary", extra={"path": str(path)})
        return None

    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with out_path.open("w", encoding="utf-8") as f:
        json.dump(summary.model_dump(), f, indent=2)

    log.info("Summary written", extra={"path": str(out_path)})
    return out_path


__all__ = ["load_records", "write_report", "write_summary"]
