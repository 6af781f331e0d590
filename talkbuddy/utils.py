"""Utility functions for the backend."""

from collections.abc import Callable
from datetime import UTC, date, datetime, tzinfo

# Returns the current instant; injected so tests can pin "today"
Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


def calendar_day(moment: datetime, tz: tzinfo) -> date:
    """
    Calendar date of an instant as observed in the given timezone.

    Naive datetimes are treated as UTC, which is how SQLite hands back
    timezone-aware columns.
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return moment.astimezone(tz).date()
