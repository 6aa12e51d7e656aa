"""Date parsing and calendar utilities."""

import calendar
from datetime import date, datetime, timedelta, UTC
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta


def utc_now() -> datetime:
    """Return the current UTC time as a naive datetime.

    Stored timestamps come back from the database without tzinfo, so all
    domain comparisons use naive UTC values.
    """
    return datetime.now(UTC).replace(tzinfo=None)


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports absolute dates ("2024-01-15", "January 15, 2024") and the
    relative words "today", "yesterday", "tomorrow", "this month" and
    "last month".

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
        "this month": today.replace(day=1),
        "last month": (today - relativedelta(months=1)).replace(day=1),
    }
    if date_str in relative_dates:
        return relative_dates[date_str]

    try:
        return date_parser.parse(date_str).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def parse_month(month_str: str) -> tuple[int, int]:
    """Parse a "YYYY-MM" string into a (year, month) tuple.

    Raises:
        ValueError: If the string is not a valid month
    """
    try:
        parsed = datetime.strptime(month_str.strip(), "%Y-%m")
    except ValueError:
        raise ValueError(f"Could not parse month '{month_str}', expected YYYY-MM")
    return parsed.year, parsed.month


def month_range(year: int, month: int) -> tuple[date, date]:
    """Return the first and last day of a calendar month."""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def current_month_range(now: datetime | date) -> tuple[date, date]:
    """Return the first and last day of the month containing ``now``."""
    return month_range(now.year, now.month)


def previous_month(now: datetime | date) -> tuple[int, int]:
    """Return (year, month) of the calendar month before ``now``."""
    first = date(now.year, now.month, 1) - relativedelta(months=1)
    return first.year, first.month


def month_label(year: int, month: int) -> str:
    """Return a display label such as "March 2024"."""
    return f"{calendar.month_name[month]} {year}"


def is_new_month(last: datetime, now: datetime) -> bool:
    """Return True if ``now`` falls in a later calendar month than ``last``."""
    return (last.year, last.month) < (now.year, now.month)


def get_date_range(period: str) -> tuple[date, date]:
    """Get start and end dates for a named period.

    Args:
        period: One of this-month, last-month, this-year, last-year

    Returns:
        Tuple of (start_date, end_date)

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    today = date.today()

    if period == "this-month":
        return today.replace(day=1), today
    elif period == "last-month":
        return month_range(*previous_month(today))
    elif period == "this-year":
        return today.replace(month=1, day=1), today
    elif period == "last-year":
        return date(today.year - 1, 1, 1), date(today.year - 1, 12, 31)
    else:
        raise ValueError(
            f"Unknown period: '{period}'. Supported periods: this-month, last-month, this-year, last-year"
        )
