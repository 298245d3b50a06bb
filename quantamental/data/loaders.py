"""
CSV loaders for the backtest input files.

Expected layouts:

    membership_events.csv   date,ticker,action        (action: add | remove)
    snapshot.csv            ticker                    (one constituent per row)
    prices.csv              date,ticker,close         (long) or
                            date,AAA,BBB,...          (wide)
    benchmark.csv           date,close

Prices come back as a wide table: a DatetimeIndex of trading dates by
ticker columns, with missing or non-positive closes as NaN.
"""

from pathlib import Path
from typing import Union

import pandas as pd

from ..errors import MalformedDataError, MissingDataError
from ..logging.config import get_logger
from .models import MembershipAction, MembershipEvent

logger = get_logger(__name__)

TICKER_HEADERS = ("ticker", "symbol")

PathLike = Union[str, Path]


def _read_csv(path: PathLike, data_type: str, **kwargs) -> pd.DataFrame:
    path = Path(path)
    if not path.is_file():
        raise MissingDataError(f"{data_type} file not found: {path}", data_type=data_type,
                               context={"path": str(path)})
    try:
        return pd.read_csv(path, **kwargs)
    except pd.errors.EmptyDataError as e:
        raise MissingDataError(f"{data_type} file is empty: {path}", data_type=data_type,
                               context={"path": str(path)}) from e
    except pd.errors.ParserError as e:
        raise MalformedDataError(f"Cannot parse {data_type} file {path}: {e}", source=str(path),
                                 expected_format="csv") from e


def _column_lookup(frame: pd.DataFrame) -> dict[str, str]:
    """Map normalized (stripped, lower-case) header names to the originals."""
    return {str(column).strip().lower(): column for column in frame.columns}


def _require_columns(frame: pd.DataFrame, required: tuple[str, ...], source: str) -> dict[str, str]:
    lookup = _column_lookup(frame)
    missing = [name for name in required if name not in lookup]
    if missing:
        raise MalformedDataError(
            f"{source} is missing columns {missing}",
            source=source,
            expected_format=",".join(required),
            context={"columns": list(frame.columns)},
        )
    return lookup


def _parse_dates(values: pd.Series, source: str) -> pd.Series:
    parsed = pd.to_datetime(values, errors="coerce")
    bad = values[parsed.isna()]
    if not bad.empty:
        raise MalformedDataError(
            f"{source} has {len(bad)} unparseable date(s), first: {bad.iloc[0]!r}",
            source=source,
            expected_format="ISO-8601 date",
        )
    return parsed.dt.normalize()


def load_membership_events(path: PathLike) -> list[MembershipEvent]:
    """
    Load index membership changes, oldest first.

    Events sharing a date keep their file order.

    Raises:
        MissingDataError: If the file does not exist or is empty
        MalformedDataError: If columns, dates or actions cannot be parsed
    """
    source = str(path)
    frame = _read_csv(path, "membership events", dtype=str, keep_default_na=False)
    lookup = _require_columns(frame, ("date", "ticker", "action"), source)

    dates = _parse_dates(frame[lookup["date"]], source)
    tickers = frame[lookup["ticker"]].str.strip()
    if (tickers == "").any():
        raise MalformedDataError(f"{source} has rows without a ticker", source=source)

    events = []
    for when, ticker, raw_action in zip(dates, tickers, frame[lookup["action"]]):
        try:
            action = MembershipAction.parse(raw_action)
        except ValueError as e:
            raise MalformedDataError(str(e), source=source, expected_format="add|remove") from e
        events.append(MembershipEvent(date=when.date(), ticker=ticker, action=action))

    events.sort(key=lambda event: event.date)
    logger.debug("Loaded membership events", path=source, count=len(events))
    return events


def load_snapshot(path: PathLike) -> set[str]:
    """
    Load a constituent list.

    Accepts a file with a "ticker" (or "symbol") column, or a single
    column of tickers with or without a header.
    """
    source = str(path)
    frame = _read_csv(path, "snapshot", header=None, dtype=str, keep_default_na=False)

    header = [str(value).strip().lower() for value in frame.iloc[0]]
    named = [i for i, name in enumerate(header) if name in TICKER_HEADERS]
    if named:
        column = frame.iloc[1:, named[0]]
    elif frame.shape[1] == 1:
        column = frame.iloc[:, 0]
    else:
        raise MalformedDataError(
            f"{source} has several columns but none named 'ticker' or 'symbol'",
            source=source,
            expected_format="ticker",
        )

    tickers = {value.strip() for value in column if value.strip()}
    logger.debug("Loaded constituent snapshot", path=source, count=len(tickers))
    return tickers


def load_prices(path: PathLike) -> pd.DataFrame:
    """
    Load closing prices as a date x ticker table.

    Long files (date,ticker,close) are pivoted; wide files are used as-is
    with the first column (or the one named "date") as the date.

    Raises:
        MalformedDataError: On duplicated (date, ticker) observations,
            unparseable dates, or a file with no price columns
    """
    source = str(path)
    frame = _read_csv(path, "prices")
    lookup = _column_lookup(frame)
    date_column = lookup.get("date", frame.columns[0])

    frame[date_column] = _parse_dates(frame[date_column].astype(str), source)

    if "ticker" in lookup and "close" in lookup:
        long = frame.rename(columns={date_column: "date", lookup["ticker"]: "ticker", lookup["close"]: "close"})
        long["ticker"] = long["ticker"].astype(str).str.strip()
        duplicated = long.duplicated(["date", "ticker"])
        if duplicated.any():
            first = long[duplicated].iloc[0]
            raise MalformedDataError(
                f"{source} has {int(duplicated.sum())} duplicated (date, ticker) rows, "
                f"first: {first['date'].date()} {first['ticker']}",
                source=source,
            )
        prices = long.pivot(index="date", columns="ticker", values="close")
    else:
        if frame[date_column].duplicated().any():
            raise MalformedDataError(f"{source} has duplicated dates", source=source)
        prices = frame.set_index(date_column)
        prices.columns = [str(column).strip() for column in prices.columns]

    if prices.shape[1] == 0:
        raise MalformedDataError(f"{source} has no price columns", source=source)

    prices = prices.apply(pd.to_numeric, errors="coerce")
    prices = prices.where(prices > 0).sort_index()
    prices.index = pd.DatetimeIndex(prices.index, name="date")
    prices.columns.name = "ticker"

    logger.debug(
        "Loaded prices",
        path=source,
        dates=len(prices.index),
        tickers=prices.shape[1],
    )
    return prices


def load_benchmark(path: PathLike) -> pd.Series:
    """Load a benchmark index closing series indexed by date."""
    source = str(path)
    frame = _read_csv(path, "benchmark")
    lookup = _column_lookup(frame)
    date_column = lookup.get("date", frame.columns[0])
    if "close" in lookup:
        value_column = lookup["close"]
    elif frame.shape[1] >= 2:
        value_column = [c for c in frame.columns if c != date_column][0]
    else:
        raise MalformedDataError(f"{source} has no value column", source=source, expected_format="date,close")

    dates = _parse_dates(frame[date_column].astype(str), source)
    if dates.duplicated().any():
        raise MalformedDataError(f"{source} has duplicated dates", source=source)

    series = pd.Series(
        pd.to_numeric(frame[value_column], errors="coerce").to_numpy(),
        index=pd.DatetimeIndex(dates, name="date"),
        name="benchmark",
    )
    return series.where(series > 0).sort_index()
