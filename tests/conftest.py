"""Pytest configuration and shared fixtures."""

from datetime import date
from pathlib import Path
from typing import Callable

import pandas as pd
import pytest

from quantamental.data.models import MembershipAction, MembershipEvent

PROJECT_ROOT = Path(__file__).resolve().parent.parent


@pytest.fixture
def shipped_site_root() -> Path:
    """The blog's own Hugo site directory."""
    return PROJECT_ROOT / "site"


@pytest.fixture
def trading_dates() -> pd.DatetimeIndex:
    """Ten business days, 2021-01-04 through 2021-01-15."""
    return pd.bdate_range("2021-01-04", "2021-01-15", name="date")


@pytest.fixture
def sample_prices(trading_dates: pd.DatetimeIndex) -> pd.DataFrame:
    """
    Closing prices with a fixed daily drift per ticker.

    AAA +1%/day, BBB +2%/day, CCC -1%/day, DDD flat.
    """
    steps = range(len(trading_dates))
    frame = pd.DataFrame(
        {
            "AAA": [100.0 * 1.01 ** i for i in steps],
            "BBB": [100.0 * 1.02 ** i for i in steps],
            "CCC": [100.0 * 0.99 ** i for i in steps],
            "DDD": [100.0 for _ in steps],
        },
        index=trading_dates,
    )
    frame.columns.name = "ticker"
    return frame


@pytest.fixture
def sample_events() -> list[MembershipEvent]:
    """DDD joins on 2021-01-08, CCC leaves on 2021-01-12."""
    return [
        MembershipEvent(date=date(2021, 1, 8), ticker="DDD", action=MembershipAction.ADD),
        MembershipEvent(date=date(2021, 1, 12), ticker="CCC", action=MembershipAction.REMOVE),
    ]


@pytest.fixture
def sample_snapshot() -> set[str]:
    """Constituents as of 2021-01-15, the last trading date."""
    return {"AAA", "BBB", "DDD"}


@pytest.fixture
def write_file(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write text to a file under tmp_path, creating parent directories."""

    def _write(relative: str, text: str) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def data_dir(tmp_path: Path, sample_prices: pd.DataFrame) -> Path:
    """A backtest data directory holding the sample universe as CSV files."""
    directory = tmp_path / "data"
    directory.mkdir()

    long = sample_prices.stack().rename("close").reset_index()
    long.to_csv(directory / "prices.csv", index=False)

    (directory / "membership_events.csv").write_text(
        "date,ticker,action\n"
        "2021-01-12,CCC,removed\n"
        "2021-01-08,DDD,added\n",
        encoding="utf-8",
    )
    (directory / "snapshot.csv").write_text("ticker\nAAA\nBBB\nDDD\n", encoding="utf-8")
    (directory / "snapshot_2021-01-05.csv").write_text("ticker\nAAA\nBBB\nCCC\n", encoding="utf-8")

    benchmark = pd.DataFrame({
        "date": sample_prices.index.strftime("%Y-%m-%d"),
        "close": [3000.0 + 15.0 * i for i in range(len(sample_prices))],
    })
    benchmark.to_csv(directory / "benchmark.csv", index=False)
    return directory
