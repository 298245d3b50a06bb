"""Top-K selection, equal weighting and NAV accumulation."""

import math
from typing import Iterable, Mapping, Optional

import pandas as pd


def select_top_k(scores: pd.Series, members: Iterable[str], k: int) -> list[str]:
    """
    Rank current constituents by momentum score and keep the best k.

    Args:
        scores: Momentum score per ticker for one date
        members: Constituents on that date; other tickers are ignored
        k: Number of names to hold

    Returns:
        Up to k tickers, best first. Members without a finite score are
        not eligible; ties are broken alphabetically.
    """
    if isinstance(k, bool) or not isinstance(k, int) or k <= 0:
        raise ValueError(f"k must be a positive integer, got {k!r}")

    eligible = []
    for ticker in members:
        score = scores.get(ticker)
        if score is None:
            continue
        score = float(score)
        if math.isfinite(score):
            eligible.append((ticker, score))

    eligible.sort(key=lambda item: (-item[1], item[0]))
    return [ticker for ticker, _ in eligible[:k]]


def equal_weights(tickers: Iterable[str]) -> dict[str, float]:
    """Equal portfolio weight for each ticker; an empty book is all cash."""
    tickers = list(tickers)
    if not tickers:
        return {}
    weight = 1.0 / len(tickers)
    return {ticker: weight for ticker in tickers}


def portfolio_returns(
    weights_by_date: Mapping[pd.Timestamp, Mapping[str, float]],
    asset_returns: pd.DataFrame,
    dates: Optional[Iterable[pd.Timestamp]] = None,
) -> pd.Series:
    """
    Daily portfolio returns over an analysis calendar.

    Weights decided at the close of dates[i-1] earn the asset returns of
    dates[i]. The first date has no prior decision and returns 0. A held
    ticker with no return on a date contributes 0; dates without a
    decision are held in cash.

    Args:
        weights_by_date: Decision date -> {ticker: weight}
        asset_returns: Close-to-close returns, date index x ticker columns
        dates: Analysis calendar, ascending; defaults to asset_returns.index

    Returns:
        Portfolio return per analysis date
    """
    if dates is None:
        dates = asset_returns.index
    index = pd.DatetimeIndex(list(dates), name="date")
    values = []

    for i, when in enumerate(index):
        if i == 0:
            values.append(0.0)
            continue
        weights = weights_by_date.get(index[i - 1], {})
        total = 0.0
        if weights and when in asset_returns.index:
            row = asset_returns.loc[when]
            for ticker, weight in weights.items():
                value = row.get(ticker)
                if value is not None and pd.notna(value):
                    total += weight * float(value)
        values.append(total)

    return pd.Series(values, index=index, name="return", dtype=float)


def accumulate_nav(returns: pd.Series, initial_capital: float = 1.0) -> pd.Series:
    """
    Compound returns into a net-asset-value curve

    NAV_0 = initial_capital
    NAV_t = NAV_{t-1} * (1 + r_t)

    The first date's return is not applied, so the curve starts exactly
    at initial_capital on the first analysis date.
    """
    if returns.empty:
        return pd.Series([], index=returns.index, name="nav", dtype=float)

    growth = (1.0 + returns.astype(float)).copy()
    growth.iloc[0] = 1.0
    nav = growth.cumprod() * initial_capital
    nav.name = "nav"
    return nav
