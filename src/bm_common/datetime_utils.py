"""Nanosecond timestamp utilities.

The ledger stamps records with integer nanoseconds since epoch. Calendar
questions (which day, which month) are answered in settings.TIMEZONE.
"""

import time
from datetime import datetime, tzinfo
from zoneinfo import ZoneInfo

from config.settings import settings

NANOS_PER_SECOND = 1_000_000_000


def now_ns() -> int:
    return time.time_ns()


def local_tz() -> tzinfo:
    return ZoneInfo(settings.TIMEZONE)


def from_nanos(ns: int, tz: tzinfo | None = None) -> datetime:
    """Convert ledger nanoseconds to an aware datetime in tz (default: settings.TIMEZONE)."""
    seconds, remainder = divmod(ns, NANOS_PER_SECOND)
    dt = datetime.fromtimestamp(seconds, tz=tz or local_tz())
    return dt.replace(microsecond=remainder // 1000)


def to_nanos(dt: datetime) -> int:
    return int(dt.timestamp()) * NANOS_PER_SECOND + dt.microsecond * 1000


def month_key(ns: int, tz: tzinfo | None = None) -> str:
    """'YYYY-MM' for a ledger timestamp."""
    dt = from_nanos(ns, tz)
    return f"{dt.year:04d}-{dt.month:02d}"


def month_label(month: int, year: int) -> str:
    """month_label(3, 2025) -> 'March 2025'."""
    return datetime(year, month, 1).strftime("%B %Y")
