"""
Date input normalization.

Every entry point that accepts a date from outside the calendar routes it
through parse_date() once; everything past that boundary works only with
datetime.date.

Accepted inputs:
  - datetime.date (datetime.datetime is reduced to its date)
  - "M/D/YY"      e.g. "4/20/25"  (two-digit years pivot at 50)
  - "M/D/YYYY"    e.g. "4/20/2025"
  - "YYYY-MM-DD"  e.g. "2025-04-20"
"""

import re
from datetime import date, datetime
from typing import Union

from liturgy.config import DATE_YEAR_RANGE, SCHEDULE_YEAR_RANGE, TWO_DIGIT_YEAR_PIVOT
from liturgy.errors import InvalidDateFormat, YearOutOfRange


DateInput = Union[date, datetime, str]

_SLASH_DATE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{2}|\d{4})$")
_ISO_DATE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")

_DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday",
              "Friday", "Saturday", "Sunday")


def expand_two_digit_year(yy: int) -> int:
    """Expand a two-digit year: 0-49 -> 2000s, 50-99 -> 1900s."""
    if yy < TWO_DIGIT_YEAR_PIVOT:
        return 2000 + yy
    return 1900 + yy


def _build_date(year: int, month: int, day: int, raw: str) -> date:
    try:
        return date(year, month, day)
    except ValueError as e:
        raise InvalidDateFormat(f"Invalid date {raw!r}: {e}") from e


def parse_date(value: DateInput) -> date:
    """Resolve any supported date input to a datetime.date.

    Raises InvalidDateFormat for unsupported types, unrecognized strings,
    and strings naming an impossible date (e.g. "2/30/25").
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise InvalidDateFormat(
            f"Unsupported date value of type {type(value).__name__}: {value!r}")

    raw = value.strip()

    match = _SLASH_DATE.match(raw)
    if match:
        month, day, year_part = match.groups()
        year = int(year_part)
        if len(year_part) == 2:
            year = expand_two_digit_year(year)
        return _build_date(year, int(month), int(day), raw)

    match = _ISO_DATE.match(raw)
    if match:
        year, month, day = (int(g) for g in match.groups())
        return _build_date(year, month, day, raw)

    raise InvalidDateFormat(
        f"Date must be in M/D/YY, M/D/YYYY or YYYY-MM-DD format. Got: {value!r}")


def parse_service_date(value: DateInput) -> date:
    """Parse a service date as written by format_service_date().

    Unlike parse_date(), a two-digit year is read inside the schedule
    window: "24"-"99" are 2024-2099 and "00" is 2100, so "01"-"23" land
    past 2100 and fail the year check later. Other inputs are handled by
    parse_date().
    """
    if isinstance(value, str):
        match = _SLASH_DATE.match(value.strip())
        if match and len(match.group(3)) == 2:
            month, day, yy = (int(g) for g in match.groups())
            year = 2000 + yy
            if year < SCHEDULE_YEAR_RANGE[0]:
                year += 100
            return _build_date(year, month, day, value.strip())
    return parse_date(value)


def validate_year(year, year_range: tuple[int, int] = DATE_YEAR_RANGE) -> int:
    """Check that year is an integer inside the inclusive year_range."""
    if isinstance(year, bool) or not isinstance(year, int):
        raise InvalidDateFormat(f"Year must be an integer. Got: {year!r}")
    low, high = year_range
    if year < low or year > high:
        raise YearOutOfRange(year, year_range)
    return year


def normalize_date(value: DateInput) -> date:
    """parse_date() plus the historical year window."""
    parsed = parse_date(value)
    validate_year(parsed.year, DATE_YEAR_RANGE)
    return parsed


def format_service_date(d: date) -> str:
    """Format as M/D/YY without zero padding, e.g. "4/20/25"."""
    return f"{d.month}/{d.day}/{d.year % 100:02d}"


def day_of_week_name(d: date) -> str:
    return _DAY_NAMES[d.weekday()]


def sunday_based_weekday(d: date) -> int:
    """Weekday number with Sunday=0 ... Saturday=6."""
    return d.isoweekday() % 7
