"""Command line entry point: site checks and backtest runs."""

import argparse
import json
import math
import sys
from pathlib import Path
from typing import Any, Optional, Sequence

from .backtest.engine import MomentumBacktest
from .backtest.performance import PerformanceSummary
from .config.loader import ConfigLoader
from .config.validation import ConfigValidator
from .errors import DataQualityError
from .logging.config import configure_logging, get_logger
from .site.checker import SiteChecker

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_CONFIG = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quantamental",
        description="Check the blog's Hugo site and run the index momentum backtest.",
    )
    parser.add_argument("--log-level", default="WARNING", help="DEBUG, INFO, WARNING or ERROR")
    parser.add_argument("--log-json", action="store_true", help="Emit logs as JSON lines")
    sub = parser.add_subparsers(dest="command", required=True)

    site = sub.add_parser("check-site", help="Validate config.toml and content front matter")
    site.add_argument("root", type=Path, help="Site root containing the config file and content/")
    site.add_argument("--config", default=None, help="Config file name (default: config.toml)")
    site.add_argument("--json", action="store_true", help="Print issues as JSON")

    backtest = sub.add_parser("backtest", help="Run the top-K momentum backtest")
    backtest.add_argument("--data-dir", type=Path, required=True, help="Directory with the input CSV files")
    backtest.add_argument("--config-dir", type=Path, default=None, help="Directory holding backtest.yaml")
    backtest.add_argument("--lookback", type=int, help="Trading days in the momentum ratio")
    backtest.add_argument("--top-k", type=int, help="Number of names held")
    backtest.add_argument("--capital", type=float, help="Initial capital")
    backtest.add_argument("--rebalance-every", type=int, help="Trading days between rebalances")
    backtest.add_argument("--start", help="First analysis date (YYYY-MM-DD)")
    backtest.add_argument("--end", help="Last analysis date (YYYY-MM-DD)")
    backtest.add_argument("--snapshot-date", help="Date the snapshot file describes")
    backtest.add_argument("--strict", action="store_true", help="Fail on inconsistent membership events")
    backtest.add_argument("--json", action="store_true", help="Print the summary as JSON")

    return parser


def _check_site(args: argparse.Namespace) -> int:
    loader = ConfigLoader.create()
    site_params = loader.load().site
    checker = SiteChecker(
        args.root,
        config_name=args.config or site_params.config_name,
        content_dir=site_params.content_dir,
        required_fields=site_params.required_fields,
    )
    report = checker.check()

    if args.json:
        print(json.dumps({
            "ok": report.ok,
            "pages_checked": report.pages_checked,
            "issues": [
                {
                    "location": issue.location,
                    "message": issue.message,
                    "severity": issue.severity,
                    "value": repr(issue.value) if issue.value is not None else None,
                }
                for issue in report.issues
            ],
        }, indent=2))
    else:
        for issue in report.issues:
            print(issue)
        print(f"{report.pages_checked} page(s) checked: "
              f"{len(report.errors)} error(s), {len(report.warnings)} warning(s)")

    return EXIT_OK if report.ok else EXIT_FAILED


def _backtest_overrides(args: argparse.Namespace) -> dict[str, Any]:
    backtest = {
        "lookback": args.lookback,
        "top_k": args.top_k,
        "initial_capital": args.capital,
        "rebalance_every": args.rebalance_every,
        "start_date": args.start,
        "end_date": args.end,
    }
    overrides: dict[str, Any] = {"backtest": {k: v for k, v in backtest.items() if v is not None}}
    if args.snapshot_date is not None:
        overrides["data"] = {"snapshot_date": args.snapshot_date}
    return overrides


def _format_summary(label: str, summary: PerformanceSummary) -> list[str]:
    def pct(value: float) -> str:
        return "n/a" if math.isnan(value) else f"{value:8.2%}"

    ratio = "n/a" if math.isnan(summary.sharpe_ratio) else f"{summary.sharpe_ratio:8.2f}"
    return [
        f"{label}",
        f"  total return       {pct(summary.total_return)}",
        f"  CAGR               {pct(summary.cagr)}",
        f"  volatility (ann.)  {pct(summary.annualized_volatility)}",
        f"  max drawdown       {pct(summary.max_drawdown)}",
        f"  Sharpe ratio       {ratio}",
    ]


def _run_backtest(args: argparse.Namespace) -> int:
    loader = ConfigLoader.create(args.config_dir)
    merged = loader.merge_config(_backtest_overrides(args))
    errors = ConfigValidator.validate_config(merged)
    if errors:
        for error in errors:
            print(f"config error: {error.field}: {error.message} (got: {error.value!r})", file=sys.stderr)
        return EXIT_CONFIG

    config = loader.load(_backtest_overrides(args))

    try:
        result = MomentumBacktest.from_directory(args.data_dir, config, strict=args.strict).run()
    except DataQualityError as e:
        logger.error("Backtest aborted", error=str(e), error_type=type(e).__name__, context=e.context)
        print(f"data error: {e}", file=sys.stderr)
        return EXIT_FAILED

    if args.json:
        payload = {
            "start": str(result.nav.index[0].date()),
            "end": str(result.nav.index[-1].date()),
            "final_nav": float(result.nav.iloc[-1]),
            "multiplier": result.multiplier,
            "strategy": result.summary.to_dict(),
        }
        if result.benchmark_summary is not None:
            payload["benchmark"] = result.benchmark_summary.to_dict()
        print(json.dumps(payload, indent=2, default=str))
        return EXIT_OK

    lines = [
        f"{result.nav.index[0].date()} -> {result.nav.index[-1].date()}",
        f"final NAV {result.nav.iloc[-1]:,.2f} (x{result.multiplier:.4f})",
    ]
    lines.extend(_format_summary("strategy", result.summary))
    if result.benchmark_summary is not None:
        lines.extend(_format_summary("benchmark", result.benchmark_summary))
    print("\n".join(lines))
    return EXIT_OK


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Parse arguments, configure logging and dispatch to a subcommand."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging(level=args.log_level, format_json=args.log_json)

    if args.command == "check-site":
        return _check_site(args)
    return _run_backtest(args)


if __name__ == "__main__":
    sys.exit(main())
