"""
Timezone-aware date helpers and business-day calendar math.

Saturday and Sunday are the only non-business days. Ranges are inclusive on
both ends and an inverted range (start > end) yields nothing; callers that
need to reject inverted ranges validate before calling.
"""

from calendar import monthrange
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

from flask import current_app

DATE_FORMAT = '%Y-%m-%d'


def get_timezone() -> ZoneInfo:
    """Get the configured timezone."""
    tz_name = current_app.config.get('TIMEZONE', 'Europe/Sofia')
    return ZoneInfo(tz_name)


def get_today() -> date:
    """Get today's date in the configured timezone."""
    return datetime.now(get_timezone()).date()


def get_now() -> datetime:
    """Get current datetime in the configured timezone."""
    return datetime.now(get_timezone())


def to_date(value) -> date:
    """
    Coerce a date, datetime or 'YYYY-MM-DD' string to a date.

    Raises:
        ValueError: If a string is not in YYYY-MM-DD format
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(value, DATE_FORMAT).date()


def to_iso(value) -> str:
    """Format a date (or ISO string) as 'YYYY-MM-DD'."""
    return to_date(value).strftime(DATE_FORMAT)


def is_business_day(value) -> bool:
    """True for Monday through Friday."""
    return to_date(value).weekday() < 5


def all_days_between(start, end) -> list:
    """
    Every calendar day in [start, end], weekends included.

    Returns:
        list: ISO date strings in ascending order
    """
    current = to_date(start)
    last = to_date(end)
    days = []
    while current <= last:
        days.append(current.strftime(DATE_FORMAT))
        current += timedelta(days=1)
    return days


def business_day_list(start, end) -> list:
    """
    Business days in [start, end].

    Returns:
        list: ISO date strings in ascending order, weekends skipped
    """
    return [day for day in all_days_between(start, end) if is_business_day(day)]


def business_days_between(start, end) -> int:
    """Inclusive count of business days in [start, end]."""
    return len(business_day_list(start, end))


def add_days(value, days: int) -> str:
    """Shift a date by a number of calendar days, returning an ISO string."""
    return (to_date(value) + timedelta(days=days)).strftime(DATE_FORMAT)


def get_month_boundaries(year: int, month: int) -> tuple:
    """
    First and last day of a calendar month.

    Args:
        year: Four digit year
        month: Month number (1-12)

    Returns:
        tuple: (first_day, last_day) as ISO strings
    """
    last = monthrange(year, month)[1]
    return (
        date(year, month, 1).strftime(DATE_FORMAT),
        date(year, month, last).strftime(DATE_FORMAT)
    )


def format_day_label(value) -> str:
    """Short human label for a day, e.g. 'Wed, Jan 8'."""
    day = to_date(value)
    return f"{day.strftime('%a, %b')} {day.day}"
