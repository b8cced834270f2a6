"""
Report generator interfaces.

Concrete generators wrap a pure `generate_*` function and add the metadata the
orchestrator and reporter need (registry name, display title, output file).
Generators must not mutate their input or keep state between calls.
"""

from __future__ import annotations

import abc
from typing import List, Protocol, Sequence, runtime_checkable

from pydantic import BaseModel

from flood_reports.domain.models import CleanedRecord


@runtime_checkable
class ReportGenerator(Protocol):
    """
    Common interface all tabular report generators implement.

    Attributes
    ----------
    name : str
        A short machine-friendly identifier used by the registry and CLI.
    title : str
        Human-friendly heading for console previews.
    filename : str
        Name of the CSV file the report is written to.
    """

    name: str
    title: str
    filename: str

    def generate(self, records: Sequence[CleanedRecord]) -> List[BaseModel]:
        """
        Build the report rows for `records`.

        Parameters
        ----------
        records : Sequence[CleanedRecord]
            Cleaned, year-filtered project records. Read only.

        Returns
        -------
        List[BaseModel]
            One row per group, in report order.
        """
        ...


class AbstractReportGenerator(abc.ABC):
    """
    Optional ABC helper for class-based generators.
    """

    name: str
    title: str
    filename: str

    @abc.abstractmethod
    def generate(self, records: Sequence[CleanedRecord]) -> List[BaseModel]:  # pragma: no cover
        """Build the report rows."""
        raise NotImplementedError


__all__ = ["AbstractReportGenerator", "ReportGenerator"]
