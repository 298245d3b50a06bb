"""
Centralized logging configuration for the Quantamental tooling.

This module provides standardized logging configuration using structlog
for the site checker, the data loaders and the backtest engine. All
logging throughout the package should go through it so that console and
JSON output stay consistent.
"""
import logging
import sys
from datetime import date
from typing import Any, Optional

import structlog
from structlog.types import FilteringBoundLogger


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
    extra_processors: Optional[list] = None
) -> None:
    """
    Configure structlog for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON format; otherwise human-readable
        include_timestamp: Include timestamp in log output
        include_caller: Include caller information (filename, line number)
        extra_processors: Additional structlog processors to include
    """
    log_level = getattr(logging, level.upper())

    logging.basicConfig(
        level=log_level,
        stream=sys.stderr,
        format="%(message)s"  # structlog will handle formatting
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.FILENAME,
                       structlog.processors.CallsiteParameter.LINENO]
        ))

    if extra_processors:
        processors.extend(extra_processors)

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def get_site_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound to the site checking subsystem.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger for site checks
    """
    return structlog.get_logger(name, subsystem="site")


def get_backtest_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound to the backtest subsystem.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger for backtest runs
    """
    return structlog.get_logger(name, subsystem="backtest")


def log_validation_issue(
    logger: FilteringBoundLogger,
    location: str,
    message: str,
    severity: str,
    value: Any = None,
) -> None:
    """
    Log a site validation issue with standardized format.

    Args:
        logger: Structlog logger instance
        location: Config key path or content file the issue belongs to
        message: Human-readable description
        severity: "error" or "warning"
        value: Offending value, if any
    """
    bound_logger = logger.bind(
        location=location,
        severity=severity,
        value=repr(value) if value is not None else None,
        event_type="validation_issue",
    )

    # issues are part of the report; the log line is an audit trail only
    if severity == "error":
        bound_logger.info(message)
    else:
        bound_logger.debug(message)


def log_rebalance(
    logger: FilteringBoundLogger,
    as_of: date,
    selected: list[str],
    eligible_count: int,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a portfolio rebalance with standardized format.

    Args:
        logger: Structlog logger instance
        as_of: Date whose close the selection was made at
        selected: Tickers chosen for the next holding period
        eligible_count: Constituents that had a usable momentum score
        context: Additional context data
    """
    bound_logger = logger.bind(
        as_of=str(as_of),
        selected=selected,
        eligible_count=eligible_count,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    if selected:
        bound_logger.debug("Rebalanced portfolio")
    else:
        bound_logger.info("No eligible constituents, holding cash")
