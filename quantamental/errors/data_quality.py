"""
Data quality error classifications for backtest input processing.

These exceptions help categorize the problems that can show up in the
membership events, snapshots and price files a backtest reads.
"""

from datetime import date
from typing import Optional, Dict, Any


class DataQualityError(Exception):
    """Base class for data quality issues that can be handled gracefully."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = True


class MissingDataError(DataQualityError):
    """Required data is completely missing."""

    def __init__(self, message: str, data_type: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.data_type = data_type


class MalformedDataError(DataQualityError):
    """Data exists but is in incorrect format."""

    def __init__(self, message: str, source: Optional[str] = None,
                 expected_format: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.source = source
        self.expected_format = expected_format


class InsufficientDataError(DataQualityError):
    """Not enough historical data for calculations."""

    def __init__(self, message: str, required_count: Optional[int] = None,
                 available_count: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.required_count = required_count
        self.available_count = available_count


class MembershipReplayError(DataQualityError):
    """A membership event contradicts the constituent set it is replayed against."""

    def __init__(self, message: str, ticker: Optional[str] = None,
                 event_date: Optional[date] = None, action: Optional[str] = None,
                 **kwargs):
        super().__init__(message, **kwargs)
        self.ticker = ticker
        self.event_date = event_date
        self.action = action
