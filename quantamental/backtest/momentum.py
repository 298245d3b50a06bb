"""Rate-of-change momentum on a wide price table."""

import pandas as pd


def _check_lookback(lookback: int) -> None:
    if isinstance(lookback, bool) or not isinstance(lookback, int) or lookback <= 0:
        raise ValueError(f"lookback must be a positive integer, got {lookback!r}")


def momentum_ratio(prices: pd.DataFrame, lookback: int) -> pd.DataFrame:
    """
    Calculate the lookback momentum ratio per security

    ratio_t = price_t / price_{t - lookback}

    The lag is counted in rows of the trading calendar, not calendar days.

    Args:
        prices: Closing prices, date index x ticker columns
        lookback: Number of trading days between the two prices

    Returns:
        Ratios with the same shape as prices; NaN where either price is
        missing or fewer than lookback rows precede the date
    """
    _check_lookback(lookback)
    return prices / prices.shift(lookback)


def rate_of_change(prices: pd.DataFrame, lookback: int) -> pd.DataFrame:
    """
    Calculate ROC as a fractional change

    ROC = price_t / price_{t - lookback} - 1
    """
    return momentum_ratio(prices, lookback) - 1.0


def daily_returns(prices: pd.DataFrame) -> pd.DataFrame:
    """
    Close-to-close simple returns

    Closes are forward-filled first, so a move across a missing close
    lands on the next valid close. Dates whose own close is missing stay
    NaN, as does each ticker's first close.
    """
    returns = prices.ffill().pct_change(fill_method=None)
    return returns.where(prices.notna())
