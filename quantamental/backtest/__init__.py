"""Index momentum backtest: membership replay, ROC ranking and NAV accumulation"""

from .constituents import MembershipDiff, MembershipLedger, reconcile
from .engine import BacktestResult, MomentumBacktest
from .momentum import daily_returns, momentum_ratio, rate_of_change
from .performance import PerformanceSummary, max_drawdown, normalize_benchmark, summarize
from .portfolio import accumulate_nav, equal_weights, portfolio_returns, select_top_k

__all__ = [
    "BacktestResult",
    "MembershipDiff",
    "MembershipLedger",
    "MomentumBacktest",
    "PerformanceSummary",
    "accumulate_nav",
    "daily_returns",
    "equal_weights",
    "max_drawdown",
    "momentum_ratio",
    "normalize_benchmark",
    "portfolio_returns",
    "rate_of_change",
    "reconcile",
    "select_top_k",
    "summarize",
]
