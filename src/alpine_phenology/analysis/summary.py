"""Descriptive statistics for a one-dimensional sample of per-year values.

Quartiles use linear interpolation between order statistics (numpy's
default, equivalent to R's type 7). Samples with fewer than two present
values raise ``InsufficientDataError``: the IQR fences and the standard
error are meaningless for a single value.
"""

from __future__ import annotations

import math
from collections.abc import Hashable, Iterable, Mapping
from dataclasses import asdict, dataclass
from typing import Any, TypeVar

import numpy as np

from alpine_phenology.errors import InsufficientDataError

K = TypeVar("K", bound=Hashable)

FENCE_FACTOR = 1.5
MIN_SAMPLE_SIZE = 2


@dataclass(frozen=True)
class SummaryStats:
    """Quartiles, IQR fences and dispersion of a sample."""

    n: int
    min: float
    q1: float
    median: float
    mean: float
    q3: float
    max: float
    iqr: float
    upper_fence: float
    lower_fence: float
    sd: float
    se: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _present_values(values: Iterable[float | None]) -> np.ndarray:
    present = [float(v) for v in values if v is not None and not math.isnan(float(v))]
    return np.asarray(present, dtype=float)


def summarize(values: Iterable[float | None]) -> SummaryStats:
    """Compute ``SummaryStats`` over the present values of a sample.

    Args:
        values: Sample; ``None`` and NaN entries are ignored.

    Returns:
        Summary statistics. ``sd`` is the sample standard deviation (n - 1).

    Raises:
        InsufficientDataError: If fewer than two values are present.
    """
    sample = _present_values(values)
    n = int(sample.size)
    if n < MIN_SAMPLE_SIZE:
        msg = f"Summary statistics need at least {MIN_SAMPLE_SIZE} values, got {n}"
        raise InsufficientDataError(msg)

    q1, median, q3 = (float(q) for q in np.percentile(sample, [25, 50, 75]))
    iqr = q3 - q1
    sd = float(np.std(sample, ddof=1))
    return SummaryStats(
        n=n,
        min=float(sample.min()),
        q1=q1,
        median=median,
        mean=float(sample.mean()),
        q3=q3,
        max=float(sample.max()),
        iqr=iqr,
        upper_fence=q3 + FENCE_FACTOR * iqr,
        lower_fence=q1 - FENCE_FACTOR * iqr,
        sd=sd,
        se=sd / math.sqrt(n),
    )


def outliers(values_by_key: Mapping[K, float], stats: SummaryStats) -> dict[K, float]:
    """Entries strictly outside the IQR fences (used to label points in figures)."""
    return {
        key: value
        for key, value in values_by_key.items()
        if value > stats.upper_fence or value < stats.lower_fence
    }
