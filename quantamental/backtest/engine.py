"""
Momentum backtest coordinator.

Runs the index-momentum recipe over a trading calendar:

    membership replay -> momentum ratio -> top-K selection
        -> equal weights -> daily returns -> compounded NAV

Everything is recomputed on each run; nothing is written to disk.
"""

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Optional, Union

import pandas as pd

from ..config.defaults import BacktestParams, DefaultConfig, get_default_config
from ..config.validation import ConfigValidator
from ..data.loaders import load_benchmark, load_membership_events, load_prices, load_snapshot
from ..errors import InsufficientDataError
from ..logging.config import get_backtest_logger, log_rebalance
from ..utils.dates import trading_window
from .constituents import MembershipLedger, snapshot_date_default
from .momentum import daily_returns, momentum_ratio
from .performance import PerformanceSummary, normalize_benchmark, summarize
from .portfolio import accumulate_nav, equal_weights, portfolio_returns, select_top_k

logger = get_backtest_logger(__name__)


@dataclass
class BacktestResult:
    """Outputs of one backtest run."""
    nav: pd.Series
    returns: pd.Series
    holdings: dict[pd.Timestamp, list[str]]
    summary: PerformanceSummary
    benchmark_nav: Optional[pd.Series] = None
    benchmark_summary: Optional[PerformanceSummary] = None
    params: BacktestParams = field(default_factory=BacktestParams)

    @property
    def multiplier(self) -> float:
        """Final NAV over starting NAV."""
        return float(self.nav.iloc[-1] / self.nav.iloc[0])

    def to_frame(self) -> pd.DataFrame:
        """Wide table for charting: one row per date."""
        frame = pd.DataFrame({
            "nav": self.nav,
            "return": self.returns,
            "positions": pd.Series({when: len(names) for when, names in self.holdings.items()}),
        })
        if self.benchmark_nav is not None:
            frame["benchmark"] = self.benchmark_nav
        frame.index.name = "date"
        return frame

    def holdings_frame(self) -> pd.DataFrame:
        """Long table of (date, ticker, weight) for every held position."""
        rows = [
            {"date": when, "ticker": ticker, "weight": weight}
            for when, names in self.holdings.items()
            for ticker, weight in equal_weights(names).items()
        ]
        return pd.DataFrame(rows, columns=["date", "ticker", "weight"])


class MomentumBacktest:
    """
    Top-K equal-weight momentum strategy over point-in-time index members.

    At the close of each rebalance date the constituents are ranked by
    their lookback momentum ratio and the best top_k are bought at equal
    weight; the book is held until the next rebalance. Returns accrue
    from the following trading date.
    """

    def __init__(
        self,
        prices: pd.DataFrame,
        ledger: MembershipLedger,
        params: Optional[BacktestParams] = None,
        benchmark: Optional[pd.Series] = None,
    ) -> None:
        self.prices = prices.sort_index()
        self.ledger = ledger
        self.params = params or BacktestParams()
        self.benchmark = benchmark
        self.logger = logger

    @classmethod
    def from_directory(
        cls,
        data_dir: Union[str, Path],
        config: Optional[DefaultConfig] = None,
        strict: bool = False,
    ) -> "MomentumBacktest":
        """
        Build a backtest from the CSV files in a data directory.

        The benchmark file is optional; the other inputs are required.
        """
        config = config or get_default_config()
        data_dir = Path(data_dir)
        files = config.data

        prices = load_prices(data_dir / files.prices)
        events = load_membership_events(data_dir / files.events)
        snapshot = load_snapshot(data_dir / files.snapshot)
        snapshot_date = files.snapshot_date or snapshot_date_default(prices.index)

        benchmark = None
        if (data_dir / files.benchmark).is_file():
            benchmark = load_benchmark(data_dir / files.benchmark)
        else:
            logger.info("No benchmark file, skipping comparison", path=str(data_dir / files.benchmark))

        ledger = MembershipLedger(events, snapshot, snapshot_date, strict=strict)
        return cls(prices, ledger, config.backtest, benchmark)

    def run(self) -> BacktestResult:
        """
        Run the backtest over the configured window.

        Raises:
            ValueError: If the parameters are out of range
            InsufficientDataError: If fewer than two trading dates fall
                inside the window
        """
        params = self.params
        errors = ConfigValidator.validate_backtest_params(asdict(params))
        if errors:
            raise ValueError("; ".join(f"{e.field}: {e.message} (got: {e.value})" for e in errors))

        dates = trading_window(self.prices.index, params.start_date, params.end_date)
        if len(dates) < 2:
            raise InsufficientDataError(
                "Backtest window needs at least two trading dates",
                required_count=2,
                available_count=len(dates),
            )

        self.logger.info(
            "Backtest started",
            start=str(dates[0].date()),
            end=str(dates[-1].date()),
            trading_days=len(dates),
            lookback=params.lookback,
            top_k=params.top_k,
        )

        scores = momentum_ratio(self.prices, params.lookback)
        asset_returns = daily_returns(self.prices)
        membership = self.ledger.membership_frame(dates)

        holdings: dict[pd.Timestamp, list[str]] = {}
        current: list[str] = []
        cash_days = 0

        for i, when in enumerate(dates):
            if i % params.rebalance_every == 0:
                row = membership.loc[when]
                members = [ticker for ticker, present in row.items() if present]
                day_scores = scores.loc[when]
                current = select_top_k(day_scores, members, params.top_k)
                eligible = sum(1 for t in members if pd.notna(day_scores.get(t)))
                log_rebalance(self.logger, when.date(), current, eligible)
            if not current:
                cash_days += 1
            holdings[when] = list(current)

        weights = {when: equal_weights(names) for when, names in holdings.items()}
        returns = portfolio_returns(weights, asset_returns, dates)
        nav = accumulate_nav(returns, params.initial_capital)
        summary = summarize(nav, params.periods_per_year)

        benchmark_nav = None
        benchmark_summary = None
        if self.benchmark is not None:
            try:
                benchmark_nav = normalize_benchmark(self.benchmark, dates, params.initial_capital)
                benchmark_summary = summarize(benchmark_nav, params.periods_per_year)
            except InsufficientDataError as e:
                self.logger.warning("Benchmark comparison skipped", reason=str(e))
                benchmark_nav = None

        result = BacktestResult(
            nav=nav,
            returns=returns,
            holdings=holdings,
            summary=summary,
            benchmark_nav=benchmark_nav,
            benchmark_summary=benchmark_summary,
            params=params,
        )

        self.logger.info(
            "Backtest finished",
            multiplier=round(result.multiplier, 6),
            total_return=round(summary.total_return, 6),
            max_drawdown=round(summary.max_drawdown, 6),
            cash_days=cash_days,
        )
        return result
