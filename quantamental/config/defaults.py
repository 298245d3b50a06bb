"""Default configuration parameters for the site checker and the backtest."""

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class BacktestParams:
    """Momentum backtest parameters."""
    lookback: int = 126                       # Trading days between ROC prices
    top_k: int = 10                           # Names held after each rebalance
    initial_capital: float = 100_000.0        # NAV on the first analysis date
    rebalance_every: int = 1                  # Trading days between rebalances
    periods_per_year: int = 252               # Annualization factor
    start_date: Optional[date] = None         # First analysis date (inclusive)
    end_date: Optional[date] = None           # Last analysis date (inclusive)


@dataclass(frozen=True)
class DataFiles:
    """Input file names, relative to the data directory."""
    events: str = "membership_events.csv"
    snapshot: str = "snapshot.csv"
    snapshot_date: Optional[date] = None      # Defaults to the last price date
    prices: str = "prices.csv"
    benchmark: str = "benchmark.csv"


@dataclass(frozen=True)
class SiteParams:
    """Site checker parameters."""
    config_name: str = "config.toml"
    content_dir: str = "content"
    required_fields: tuple[str, ...] = ("title", "date")


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    backtest: BacktestParams
    data: DataFiles
    site: SiteParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        backtest=BacktestParams(),
        data=DataFiles(),
        site=SiteParams(),
    )
