"""
Date helpers shared by the booking, locking and schedule services.

All wall-clock reads go through :class:`Clock` so an operation can take a
single ``now`` at entry and reuse it for every comparison.
"""

import logging
import re
from datetime import date, datetime, timedelta
from typing import Iterator, Tuple, Union

import pytz

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d"
PASS_RANGE_PATTERN = re.compile(r"^(\d{2})-(\d{2})$")


class DateUtilsError(ValueError):
    """Raised for malformed dates and pass ranges"""


class Clock:
    """
    Source of the current local time.

    Returns naive datetimes in the configured time zone, matching the naive
    ``date``/``timestamp`` columns of the store.
    """

    def __init__(self, tz_name: str = "UTC"):
        try:
            self.tz = pytz.timezone(tz_name)
        except pytz.UnknownTimeZoneError as e:
            raise DateUtilsError(f"Unknown time zone: {tz_name}") from e

    def now(self) -> datetime:
        return datetime.now(self.tz).replace(tzinfo=None)


def parse_date(value: Union[str, date], fmt: str = DATE_FORMAT) -> date:
    """Parse a date string with the given format (default 'YYYY-MM-DD')."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise DateUtilsError("Date string cannot be empty")

    try:
        return datetime.strptime(value.strip(), fmt).date()
    except ValueError as e:
        raise DateUtilsError(f"Invalid date format. Expected format: {fmt}") from e


def format_date(d: date, fmt: str = DATE_FORMAT) -> str:
    """Format a date as string with the given format."""
    if not isinstance(d, date):
        raise DateUtilsError("Input must be a date object")
    return d.strftime(fmt)


def month_range(year: int, month: int) -> Tuple[date, date]:
    """Return (first_day, last_day) of a given month."""
    if not (1 <= month <= 12):
        raise DateUtilsError("Month must be between 1 and 12")

    from calendar import monthrange as _monthrange
    first = date(year, month, 1)
    last = date(year, month, _monthrange(year, month)[1])
    return first, last


def week_start(d: date) -> date:
    """Monday of the ISO week containing ``d``."""
    return d - timedelta(days=d.weekday())


def relative_week_start(today: date, relative_week: int) -> date:
    """Monday of the week ``relative_week`` weeks away from today's week."""
    return week_start(today) + timedelta(weeks=relative_week)


def week_days(monday: date) -> Iterator[date]:
    """Yield the seven days of the week starting at ``monday``."""
    for offset in range(7):
        yield monday + timedelta(days=offset)


def in_booking_window(d: date, today: date) -> bool:
    """
    A pass date is bookable when it is not in the past and lies in the
    current or the next ISO week.
    """
    if d < today:
        return False
    current = week_start(today)
    return week_start(d) in (current, current + timedelta(weeks=1))


def parse_pass_range(pass_range: str) -> Tuple[int, int]:
    """Split an 'HH-HH' range into (start_hour, end_hour)."""
    match = PASS_RANGE_PATTERN.match(pass_range or "")
    if not match:
        raise DateUtilsError(f"Invalid pass range: {pass_range!r}")
    start, end = int(match.group(1)), int(match.group(2))
    if not (0 <= start < end <= 24):
        raise DateUtilsError(f"Invalid pass range: {pass_range!r}")
    return start, end


def range_end_hour(pass_range: str) -> int:
    return parse_pass_range(pass_range)[1]


def range_elapsed(d: date, pass_range: str, now: datetime) -> bool:
    """True when ``d`` is today and the range ended before the current hour."""
    return d == now.date() and range_end_hour(pass_range) < now.hour


def is_active_booking(d: date, pass_range: str, now: datetime) -> bool:
    """
    A booking is active when its date is after today, or it is today and
    the range end hour has not been passed.
    """
    today = now.date()
    if d > today:
        return True
    return d == today and range_end_hour(pass_range) >= now.hour
