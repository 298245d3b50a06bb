"""Configuration validation utilities."""

from dataclasses import dataclass
from typing import Any

from ..utils.dates import parse_optional_date


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_backtest_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate backtest parameters."""
        errors = []

        for name in ("lookback", "top_k", "rebalance_every", "periods_per_year"):
            if name in params and not _is_positive_int(params[name]):
                errors.append(ValidationError(
                    field=name,
                    message="Must be a positive integer",
                    value=params[name]
                ))

        if "initial_capital" in params:
            value = params["initial_capital"]
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
                errors.append(ValidationError(
                    field="initial_capital",
                    message="Must be a positive number",
                    value=value
                ))

        dates = {}
        for name in ("start_date", "end_date"):
            if name not in params:
                continue
            try:
                dates[name] = parse_optional_date(params[name])
            except ValueError:
                errors.append(ValidationError(
                    field=name,
                    message="Must be an ISO-8601 date",
                    value=params[name]
                ))

        start, end = dates.get("start_date"), dates.get("end_date")
        if start is not None and end is not None and start > end:
            errors.append(ValidationError(
                field="start_date",
                message="Must not be after end_date",
                value=params["start_date"]
            ))

        return errors

    @staticmethod
    def validate_data_files(params: dict[str, Any]) -> list[ValidationError]:
        """Validate input file settings."""
        errors = []

        for name in ("events", "snapshot", "prices", "benchmark"):
            if name in params:
                value = params[name]
                if not isinstance(value, str) or not value.strip():
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a non-empty file name",
                        value=value
                    ))

        if "snapshot_date" in params:
            try:
                parse_optional_date(params["snapshot_date"])
            except ValueError:
                errors.append(ValidationError(
                    field="snapshot_date",
                    message="Must be an ISO-8601 date",
                    value=params["snapshot_date"]
                ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        if "backtest" in config:
            errors.extend(ConfigValidator.validate_backtest_params(config["backtest"]))

        if "data" in config:
            errors.extend(ConfigValidator.validate_data_files(config["data"]))

        return errors
