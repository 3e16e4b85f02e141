"""Paired 2020/2021 comparison of seed-set and flower counts per plot.

Only plots observed in both years take part. For each variable the paired
differences (first year minus second year) get a Shapiro-Wilk normality
check, reported as a diagnostic only, and a two-sided paired t-test.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING, Any

from scipy import stats

from alpine_phenology.errors import DataValidationError, InsufficientDataError

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from alpine_phenology.datasources.phenology.models import FlowerPlotObservation

PAIRED_VARIABLES = ("rel_seedset", "flowers")
MIN_PAIRS = 3  # Shapiro-Wilk needs at least three values


@dataclass(frozen=True)
class PlotPair:
    """The two observations of one plot."""

    plot: str
    first: FlowerPlotObservation
    second: FlowerPlotObservation

    def difference(self, variable: str) -> float:
        """First-year value minus second-year value."""
        return float(getattr(self.first, variable)) - float(getattr(self.second, variable))


@dataclass(frozen=True)
class PairedTestResult:
    """Normality diagnostic and paired t-test for one variable."""

    variable: str
    n: int
    mean_first: float
    mean_second: float
    mean_difference: float
    shapiro_w: float
    shapiro_p: float
    t_statistic: float
    df: int
    p_value: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _index(
    observations: Iterable[FlowerPlotObservation],
) -> dict[tuple[str, int], FlowerPlotObservation]:
    return {(obs.plot, obs.year): obs for obs in observations}


def paired_plots(
    observations: Iterable[FlowerPlotObservation],
    years: tuple[int, int],
) -> list[str]:
    """Plot ids with an observation in both ``years``, sorted."""
    index = _index(observations)
    first, second = years
    plots = {plot for plot, _year in index}
    return sorted(p for p in plots if (p, first) in index and (p, second) in index)


def pair_observations(
    observations: Iterable[FlowerPlotObservation],
    plot_ids: Sequence[str],
    years: tuple[int, int],
) -> list[PlotPair]:
    """Pair the observations of each listed plot.

    Records of plots outside ``plot_ids`` are ignored entirely.

    Raises:
        DataValidationError: If a listed plot lacks an observation in either year.
    """
    index = _index(observations)
    first, second = years
    pairs: list[PlotPair] = []
    for plot in plot_ids:
        a = index.get((plot, first))
        b = index.get((plot, second))
        if a is None or b is None:
            missing = first if a is None else second
            msg = f"Plot {plot} is listed for the paired comparison but has no {missing} record"
            raise DataValidationError(msg)
        pairs.append(PlotPair(plot=plot, first=a, second=b))
    return pairs


def paired_differences(pairs: Sequence[PlotPair], variable: str) -> list[float]:
    """Per-plot differences of ``variable`` in pair order."""
    return [pair.difference(variable) for pair in pairs]


def paired_test(pairs: Sequence[PlotPair], variable: str) -> PairedTestResult:
    """Shapiro-Wilk on the differences plus a two-sided paired t-test.

    Raises:
        InsufficientDataError: With fewer than three pairs.
    """
    n = len(pairs)
    if n < MIN_PAIRS:
        msg = f"Paired comparison of {variable} needs at least {MIN_PAIRS} plots, got {n}"
        raise InsufficientDataError(msg)

    first = [float(getattr(p.first, variable)) for p in pairs]
    second = [float(getattr(p.second, variable)) for p in pairs]
    diffs = paired_differences(pairs, variable)

    shapiro = stats.shapiro(diffs)
    ttest = stats.ttest_rel(first, second, alternative="two-sided")
    return PairedTestResult(
        variable=variable,
        n=n,
        mean_first=sum(first) / n,
        mean_second=sum(second) / n,
        mean_difference=sum(diffs) / n,
        shapiro_w=float(shapiro.statistic),
        shapiro_p=float(shapiro.pvalue),
        t_statistic=float(ttest.statistic),
        df=n - 1,
        p_value=float(ttest.pvalue),
    )


def paired_comparison(
    observations: Iterable[FlowerPlotObservation],
    plot_ids: Sequence[str],
    years: tuple[int, int],
) -> list[PairedTestResult]:
    """Run ``paired_test`` for relative seed-set and flower count."""
    pairs = pair_observations(observations, plot_ids, years)
    return [paired_test(pairs, variable) for variable in PAIRED_VARIABLES]
