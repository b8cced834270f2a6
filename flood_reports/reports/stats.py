"""Small numeric helpers shared by the report generators."""

from __future__ import annotations

import statistics
from typing import Sequence


def median(values: Sequence[float]) -> float:
    """
    Median of `values`; the mean of the two middle values for even lengths.

    Returns 0 for an empty sequence.
    """
    if not values:
        return 0.0
    return float(statistics.median(values))


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean of `values`, 0 for an empty sequence."""
    if not values:
        return 0.0
    return statistics.fmean(values)


def percent(part: int, whole: int) -> float:
    """`part` as a percentage of `whole`, 0 when `whole` is 0."""
    return 100.0 * part / whole if whole else 0.0


__all__ = ["mean", "median", "percent"]
