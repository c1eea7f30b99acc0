"""
Time-related utilities for the application.

Landing timestamps are generated in UTC and stored as ISO-8601 strings
with timezone information.
"""

from datetime import datetime, timezone


def utc_now_iso() -> str:
    """Return the current UTC time as an ISO-8601 string.

    Example:
        2024-01-15T10:42:31.123456+00:00
    """
    return datetime.now(timezone.utc).isoformat()
