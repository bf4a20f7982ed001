"""Dashboard error types.

FetchError is the only failure that reaches the UI; MalformedRecordError is
raised per record during ingestion and handled there by skipping the record.
"""

from __future__ import annotations

from typing import Any, Optional


class DashboardError(Exception):
    """Base class for dashboard errors."""


class FetchError(DashboardError):
    """The data source could not be read (network, HTTP status or payload)."""

    def __init__(self, url: str, details: str = "", status_code: Optional[int] = None):
        self.url = url
        self.details = details
        self.status_code = status_code
        message = f"Failed to fetch {url}"
        if status_code is not None:
            message += f" (HTTP {status_code})"
        if details:
            message += f": {details}"
        super().__init__(message)


class MalformedRecordError(DashboardError):
    """A raw record is missing an expected field or carries a value of the wrong type."""

    def __init__(self, position: int, raw: Any, details: str = ""):
        self.position = position
        self.raw = raw
        self.details = details
        super().__init__(f"Malformed record at position {position}: {details}" if details else f"Malformed record at position {position}")
