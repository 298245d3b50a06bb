"""
Error classification for the Quantamental tooling.

This module provides a structured exception hierarchy for problems found
in the backtest input files and in the site configuration and content.
"""

from .data_quality import (
    DataQualityError,
    MissingDataError,
    MalformedDataError,
    InsufficientDataError,
    MembershipReplayError,
)
from .site import (
    SiteError,
    SiteConfigError,
    FrontMatterError,
)

__all__ = [
    # Data Quality Errors
    "DataQualityError",
    "MissingDataError",
    "MalformedDataError",
    "InsufficientDataError",
    "MembershipReplayError",
    # Site Errors
    "SiteError",
    "SiteConfigError",
    "FrontMatterError",
]
