"""
Date parsing and calendar window helpers.

Front matter dates arrive as YAML/TOML date objects or as ISO-8601
strings; backtest windows are cut from a pandas DatetimeIndex. Both go
through this module so the rules stay in one place.
"""

from datetime import date, datetime
from typing import Any, Optional

import pandas as pd


def parse_date(value: Any) -> date:
    """
    Coerce a front matter or CLI value into a calendar date.

    Args:
        value: date, datetime, pandas Timestamp or ISO-8601 string
            (with or without a time part, "Z" suffix allowed)

    Returns:
        The calendar date

    Raises:
        ValueError: If the value cannot be interpreted as a date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError("Empty date string")
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text).date()
        except ValueError:
            pass
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            raise ValueError(f"Unrecognised date: {value!r}") from None
    raise ValueError(f"Unsupported date type: {type(value).__name__}")


def parse_optional_date(value: Any) -> Optional[date]:
    """Like parse_date, but None and empty strings pass through as None."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return parse_date(value)


def trading_window(
    index: pd.DatetimeIndex,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> pd.DatetimeIndex:
    """
    Restrict a trading calendar to an inclusive date range.

    Args:
        index: Sorted trading dates
        start: First date to keep (None keeps from the beginning)
        end: Last date to keep (None keeps to the end)

    Returns:
        The dates of index falling inside [start, end]
    """
    window = index
    if start is not None:
        window = window[window >= pd.Timestamp(start)]
    if end is not None:
        window = window[window <= pd.Timestamp(end)]
    return window
