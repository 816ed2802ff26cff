"""Due-date classification.

Due dates are calendar dates. A date is *due soon* when the start of that
day falls between now and the horizon (two days by default), and *overdue*
once the whole day has passed. A task due today is neither until the day
ends.
"""

from datetime import date, datetime, time, timedelta
from enum import Enum

DEFAULT_DUE_SOON_DAYS = 2


class DueStatus(str, Enum):
    """Badge classification of a due date."""

    NONE = "none"
    OVERDUE = "overdue"
    DUE_SOON = "due_soon"
    SCHEDULED = "scheduled"


def _start_of_day(due: date, now: datetime) -> datetime:
    # Bounds share the clock's tzinfo
    return datetime.combine(due, time.min, tzinfo=now.tzinfo)


def _end_of_day(due: date, now: datetime) -> datetime:
    return datetime.combine(due, time.max, tzinfo=now.tzinfo)


def is_due_soon(
    due: date | None,
    now: datetime,
    days: int = DEFAULT_DUE_SOON_DAYS,
) -> bool:
    """Return True if ``due`` lies within ``[now, now + days]`` inclusive."""
    if due is None:
        return False
    start = _start_of_day(due, now)
    return now <= start <= now + timedelta(days=days)


def is_overdue(due: date | None, now: datetime) -> bool:
    """Return True if the end of the ``due`` day is strictly before ``now``."""
    if due is None:
        return False
    return _end_of_day(due, now) < now


def due_status(
    due: date | None,
    now: datetime,
    days: int = DEFAULT_DUE_SOON_DAYS,
) -> DueStatus:
    """Classify a due date; overdue wins over due soon."""
    if due is None:
        return DueStatus.NONE
    if is_overdue(due, now):
        return DueStatus.OVERDUE
    if is_due_soon(due, now, days):
        return DueStatus.DUE_SOON
    return DueStatus.SCHEDULED


def format_due_date(due: date | None) -> str | None:
    """Format a due date for display, e.g. ``Jan 10``."""
    if due is None:
        return None
    return f"{due.strftime('%b')} {due.day}"
