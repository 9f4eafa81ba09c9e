from typing import List, Tuple

import httpx
from pydantic import ValidationError

FALLBACK_ERROR_MESSAGE = "Failed to fetch analytics"
INVALID_RESPONSE_MESSAGE = "Unexpected analytics response"


class AnalyticsError(Exception):
    """Base class for dashboard fetch failures."""


class AnalyticsFetchError(AnalyticsError):
    """One or more of the analytics endpoints answered with a non-success status."""

    def __init__(self, failures: List[Tuple[str, int]]):
        super().__init__("One or more analytics requests failed")
        # (endpoint, status_code) pairs, for logs only
        self.failures = failures


class InvalidTimeRangeError(AnalyticsError, ValueError):
    def __init__(self, days):
        super().__init__(f"Unsupported time range: {days!r} (expected 7, 30 or 90 days)")
        self.days = days


def describe_failure(exc: BaseException) -> str:
    """User-facing message for a failed fetch cycle. The text is never classified further."""
    # Validation dumps are long and list every field; keep them in the logs
    if isinstance(exc, ValidationError):
        return INVALID_RESPONSE_MESSAGE
    if isinstance(exc, (AnalyticsError, httpx.HTTPError, ValueError)):
        message = str(exc).strip()
        if message:
            return message
    return FALLBACK_ERROR_MESSAGE
