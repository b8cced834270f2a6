"""
Orchestrator for loading a dataset, running report generators, profiling
them, and persisting their output.

Usage (example from CLI):
    from flood_reports.orchestrator import load_dataset, run_reports

    dataset = load_dataset("dpwh_flood_control_projects.csv")
    bundle = run_reports(dataset.records, report_names=["all"], output_dir="reports")

Outputs are saved to `reports/` by default:
- `report1_regional_efficiency.csv`
- `report2_contractor_ranking.csv`
- `report3_annual_trends.csv`
- `summary.json`
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from pydantic import BaseModel

from flood_reports.config import Settings, get_settings
from flood_reports.domain.models import CleanedRecord
from flood_reports.domain.reports import SummaryReport
from flood_reports.errors import UnknownReportError
from flood_reports.io import load_records, write_report, write_summary
from flood_reports.pipeline import PipelineResult, process_records
from flood_reports.reports.abstract import ReportGenerator
from flood_reports.reports.contractors import ContractorRankingReport
from flood_reports.reports.efficiency import RegionalEfficiencyReport
from flood_reports.reports.summary import generate_summary
from flood_reports.reports.trends import AnnualOverrunTrendReport
from flood_reports.utils.logging import get_logger
from flood_reports.utils.profiler import ProfileStats, profile_block

log = get_logger(__name__)

EMPTY_INPUT = "empty_input"
SUMMARY_FILENAME = "summary.json"


@dataclass
class ReportRun:
    """Rows and bookkeeping for one generated report."""

    name: str
    title: str
    rows: List[BaseModel] = field(default_factory=list)
    profile: Optional[ProfileStats] = None
    output_path: Optional[Path] = None
    error: Optional[str] = None


@dataclass
class ReportBundle:
    """Everything produced by one `run_reports` call."""

    runs: List[ReportRun] = field(default_factory=list)
    summary: Optional[SummaryReport] = None
    summary_path: Optional[Path] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and all(run.error is None for run in self.runs)


def _report_factories(settings: Settings) -> Dict[str, Callable[[], ReportGenerator]]:
    """Registry of available reports, in output order."""
    return {
        "regional_efficiency": lambda: RegionalEfficiencyReport(
            delay_threshold_days=settings.delay_threshold_days,
        ),
        "contractor_ranking": lambda: ContractorRankingReport(
            min_projects=settings.min_contractor_projects,
            top_n=settings.top_contractors,
            delay_normalizer_days=settings.reliability_delay_days,
        ),
        "annual_trends": lambda: AnnualOverrunTrendReport(),
    }


def available_reports() -> List[str]:
    """List available report names in output order."""
    return list(_report_factories(get_settings()))


def _resolve_report(name: str, settings: Settings) -> ReportGenerator:
    factories = _report_factories(settings)
    if name not in factories:
        raise UnknownReportError(f"Unknown report '{name}'. Available: {', '.join(factories)}")
    return factories[name]()


def load_dataset(
    path: Path | str,
    start_year: Optional[int] = None,
    end_year: Optional[int] = None,
) -> PipelineResult:
    """
    Read a CSV file and run it through the validation pipeline.

    Year bounds default to the configured window.
    """
    settings = get_settings()
    raw = load_records(path)
    return process_records(
        raw,
        start_year=settings.start_year if start_year is None else start_year,
        end_year=settings.end_year if end_year is None else end_year,
    )


def _profiled_generate(generator: ReportGenerator, records: Sequence[CleanedRecord]) -> ReportRun:
    log.info(f"[REPORT START] {generator.name}", extra={"report": generator.name})
    run = ReportRun(name=generator.name, title=generator.title)
    with profile_block(generator.name) as stats:
        try:
            run.rows = generator.generate(records)
        except Exception as exc:  # noqa: BLE001 - one failing report must not block the others
            log.exception(f"[REPORT FAILED] {generator.name}", extra={"report": generator.name})
            run.error = str(exc)
    run.profile = stats
    if run.error is None:
        log.info(
            f"[REPORT SUCCESS] {generator.name}",
            extra={"report": generator.name, "rows": len(run.rows), **stats.as_dict()},
        )
    return run


def run_reports(
    records: Sequence[CleanedRecord],
    report_names: Optional[Iterable[str]] = None,
    output_dir: Path | str | None = None,
    persist: bool = True,
    include_summary: bool = True,
) -> ReportBundle:
    """
    Generate one or more reports and optionally write them to disk.

    Parameters
    ----------
    records : Sequence[CleanedRecord]
        Output of the validation pipeline.
    report_names : iterable[str] | None
        Reports to generate. If None or ["all"], generates every report.
    output_dir : Path | str | None
        Directory for report files. Defaults to settings.output_dir.
    persist : bool
        Whether to write reports to disk.
    include_summary : bool
        Whether to compute (and write) the summary statistics.

    Returns
    -------
    ReportBundle
        Per-report runs plus the summary. When `records` is empty nothing is
        generated and `error` is set to "empty_input".
    """
    settings = get_settings()
    names = list(report_names) if report_names is not None else ["all"]
    if len(names) == 1 and names[0] == "all":
        names = list(_report_factories(settings))
    generators = [_resolve_report(name, settings) for name in names]

    if not records:
        log.error("No data to process: load a dataset with at least one valid record first")
        return ReportBundle(error=EMPTY_INPUT)

    target_dir = Path(output_dir if output_dir is not None else settings.output_dir)
    bundle = ReportBundle()
    for generator in generators:
        run = _profiled_generate(generator, records)
        if persist and run.error is None:
            run.output_path = write_report(run.rows, target_dir / generator.filename)
            if run.output_path is None:
                run.error = EMPTY_INPUT
        bundle.runs.append(run)

    if include_summary:
        bundle.summary = generate_summary(records)
        if persist:
            bundle.summary_path = write_summary(bundle.summary, target_dir / SUMMARY_FILENAME)

    log.info(
        f"[ORCHESTRATOR COMPLETE] {len(bundle.runs)} report(s) generated",
        extra={"reports": names, "persisted": persist, "output_dir": str(target_dir)},
    )
    return bundle


__all__ = [
    "EMPTY_INPUT",
    "ReportBundle",
    "ReportRun",
    "available_reports",
    "load_dataset",
    "run_reports",
]
