import re
from datetime import date, datetime, timezone as dt_timezone

from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime

LEADING_INT_RE = re.compile(r'^\s*([+-]?\d+)')
DIGITS_RE = re.compile(r'[0-9]+')


def parse_strict_int(value):
    """
    Read an id from a request body without coercion

    Args:
        value: an int or a string of ASCII digits. Booleans, floats and
            anything else are refused, so 101.9 or true never become an id.

    Returns:
        int or None if the value is not an integer as sent
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and DIGITS_RE.fullmatch(value):
        return int(value)
    return None


def snake_to_camel(name):
    """company_email -> companyEmail"""
    first, *rest = name.split('_')
    return first + ''.join(part.capitalize() for part in rest)


def parse_leading_int(value):
    """
    Parse the leading integer of a value the way a query/path parser would

    Args:
        value: str, int or None. "12abc" gives 12, "abc" gives None.

    Returns:
        int or None if no integer could be read
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    match = LEADING_INT_RE.match(str(value))
    if not match:
        return None
    return int(match.group(1))


def parse_page(value, default=1):
    """Page number from a query value; absent, non-numeric or < 1 gives ``default``."""
    page = parse_leading_int(value)
    if not page or page < 1:
        return default
    return page


def normalize_timestamp(value):
    """
    Convert a date input into an aware UTC datetime

    Args:
        value: ISO 8601 date or datetime string, epoch milliseconds,
            or a date/datetime object. Naive values are taken as UTC.

    Returns:
        datetime in UTC, or None when value is None

    Raises:
        ValueError: if the value cannot be read as a date
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime(value.year, value.month, value.day)
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        dt = datetime.fromtimestamp(value / 1000, tz=dt_timezone.utc)
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith('Z'):
            text = text[:-1] + '+00:00'
        dt = parse_datetime(text)
        if dt is None:
            d = parse_date(text)
            if d is None:
                raise ValueError(f"Invalid date: {value!r}")
            dt = datetime(d.year, d.month, d.day)
    else:
        raise ValueError(f"Invalid date: {value!r}")

    if timezone.is_naive(dt):
        dt = timezone.make_aware(dt, dt_timezone.utc)
    return dt.astimezone(dt_timezone.utc)
