"""
Site error classifications for configuration and content documents.

These errors are raised when a document cannot be read at all; schema
problems inside a readable document are reported as validation issues
instead.
"""

from typing import Optional, Dict, Any


class SiteError(Exception):
    """Base class for unreadable site documents."""

    def __init__(self, message: str, path: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.path = path
        self.context = context or {}


class SiteConfigError(SiteError):
    """The site configuration file is missing or is not valid TOML."""


class FrontMatterError(SiteError):
    """A content file's metadata header is unterminated or unparseable."""

    def __init__(self, message: str, delimiter: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.delimiter = delimiter
