"""Calendar-day helpers shared by the view-model and stores."""

from collections.abc import Callable
from datetime import date, datetime

Clock = Callable[[], datetime]


def local_now() -> datetime:
    """Current time as a timezone-aware datetime in the local zone."""
    return datetime.now().astimezone()


def local_date(ts: datetime, now: datetime) -> date:
    """Calendar date of ``ts`` as seen from the timezone of ``now``.

    Naive timestamps are taken at face value.
    """
    if ts.tzinfo is not None and now.tzinfo is not None:
        return ts.astimezone(now.tzinfo).date()
    return ts.date()


def is_same_local_day(ts: datetime, now: datetime) -> bool:
    return local_date(ts, now) == now.date()
