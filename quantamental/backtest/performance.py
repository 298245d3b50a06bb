"""Summary statistics for NAV curves"""

import math
from dataclasses import asdict, dataclass
from typing import Any

import pandas as pd

from ..errors import InsufficientDataError


@dataclass(frozen=True)
class PerformanceSummary:
    """Headline statistics of a NAV curve"""
    total_return: float
    cagr: float
    annualized_volatility: float
    max_drawdown: float           # <= 0, e.g. -0.25 for a 25% peak-to-trough fall
    sharpe_ratio: float           # zero risk-free rate
    periods: int                  # number of returns in the curve

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def max_drawdown(nav: pd.Series) -> float:
    """Largest peak-to-trough decline as a negative fraction (0.0 if none)"""
    nav = nav.dropna()
    if nav.empty:
        return 0.0
    drawdowns = nav / nav.cummax() - 1.0
    return float(drawdowns.min())


def summarize(nav: pd.Series, periods_per_year: int = 252) -> PerformanceSummary:
    """
    Calculate summary statistics for a NAV curve

    Args:
        nav: Portfolio value per trading date
        periods_per_year: Trading days per year used for annualization

    Returns:
        PerformanceSummary; ratios that need two or more returns are NaN
        when the curve is too short

    Raises:
        InsufficientDataError: If the curve has no values
    """
    nav = nav.dropna()
    if nav.empty:
        raise InsufficientDataError("NAV curve is empty", required_count=1, available_count=0)

    periods = len(nav) - 1
    total_return = float(nav.iloc[-1] / nav.iloc[0] - 1.0)

    years = periods / periods_per_year
    if years > 0 and total_return > -1.0:
        cagr = (1.0 + total_return) ** (1.0 / years) - 1.0
    else:
        cagr = math.nan

    returns = (nav / nav.shift(1) - 1.0).dropna()
    std = float(returns.std(ddof=1)) if len(returns) > 1 else math.nan
    annualized_volatility = std * math.sqrt(periods_per_year) if not math.isnan(std) else math.nan
    if not math.isnan(std) and std > 0:
        sharpe = float(returns.mean()) / std * math.sqrt(periods_per_year)
    else:
        sharpe = math.nan

    return PerformanceSummary(
        total_return=total_return,
        cagr=cagr,
        annualized_volatility=annualized_volatility,
        max_drawdown=max_drawdown(nav),
        sharpe_ratio=sharpe,
        periods=periods,
    )


def normalize_benchmark(
    benchmark: pd.Series,
    dates: pd.DatetimeIndex,
    initial_capital: float = 1.0,
) -> pd.Series:
    """
    Rebase a benchmark index onto the analysis calendar

    The series is aligned to dates (gaps forward-filled) and scaled so its
    first available value equals initial_capital. Dates before the
    benchmark starts stay NaN.
    """
    aligned = benchmark.sort_index().reindex(dates.union(benchmark.index)).ffill().reindex(dates)
    available = aligned.dropna()
    if available.empty:
        raise InsufficientDataError(
            "Benchmark has no values inside the analysis window",
            required_count=1,
            available_count=0,
        )
    rebased = aligned / available.iloc[0] * initial_capital
    rebased.name = "benchmark"
    return rebased
