"""
Movable and rule-based feast dates.

Easter is computed with the anonymous Gregorian (Meeus/Jones/Butcher)
algorithm using integer arithmetic only. It is exact for every Gregorian
year, including the m = 1 correction years (1981, 2049) and non-leap
century years (2100 -> March 28), so no per-year correction table is kept.
tests/test_feasts.py checks it against the published dates in
data/reference_dates.yaml.

Every other date here is either a fixed offset from Easter or a rule over
the civil calendar (Advent, Reformation, All Saints, Christ the King,
Thanksgiving).
"""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

from liturgy.config import (
    ASCENSION_OFFSET,
    ASH_WEDNESDAY_OFFSET,
    GOOD_FRIDAY_OFFSET,
    MAUNDY_THURSDAY_OFFSET,
    PALM_SUNDAY_OFFSET,
    PENTECOST_OFFSET,
    TRINITY_AFTER_PENTECOST,
)
from liturgy.logic.cache import CalculationCache, resolve_cache
from liturgy.logic.dates import sunday_based_weekday, validate_year


SUNDAY = 6      # date.weekday()
WEDNESDAY = 2
THURSDAY = 3


def computus(year: int) -> tuple[int, int]:
    """Return (month, day) of Gregorian Easter Sunday for year."""
    a = year % 19
    b = year // 100
    c = year % 100
    d = b // 4
    e = b % 4
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i = c // 4
    k = c % 4
    l = (32 + 2 * e + 2 * i - h - k) % 7  # noqa: E741
    m = (a + 11 * h + 22 * l) // 451
    month = (h + l - 7 * m + 114) // 31
    day = ((h + l - 7 * m + 114) % 31) + 1
    return month, day


def calculate_easter(year: int, cache: Optional[CalculationCache] = None) -> date:
    """Easter Sunday for year (1970-2100), cached as an ISO string."""
    validate_year(year)

    def compute() -> str:
        month, day = computus(year)
        return date(year, month, day).isoformat()

    return date.fromisoformat(resolve_cache(cache).get_or_compute(("easter", year), compute))


# ---------------------------------------------------------------------------
# Easter-relative dates
# ---------------------------------------------------------------------------

def _from_easter(year: int, offset: int, cache) -> date:
    return calculate_easter(year, cache) + timedelta(days=offset)


def calculate_ash_wednesday(year: int, cache=None) -> date:
    """Start of Lent: 40 days plus the six Sundays before Easter."""
    return _from_easter(year, ASH_WEDNESDAY_OFFSET, cache)


def calculate_palm_sunday(year: int, cache=None) -> date:
    return _from_easter(year, PALM_SUNDAY_OFFSET, cache)


def calculate_maundy_thursday(year: int, cache=None) -> date:
    return _from_easter(year, MAUNDY_THURSDAY_OFFSET, cache)


def calculate_good_friday(year: int, cache=None) -> date:
    return _from_easter(year, GOOD_FRIDAY_OFFSET, cache)


def calculate_ascension(year: int, cache=None) -> date:
    """Always a Thursday, 39 days after Easter."""
    return _from_easter(year, ASCENSION_OFFSET, cache)


def calculate_pentecost(year: int, cache=None) -> date:
    return _from_easter(year, PENTECOST_OFFSET, cache)


def calculate_trinity_sunday(year: int, cache=None) -> date:
    return calculate_pentecost(year, cache) + timedelta(days=TRINITY_AFTER_PENTECOST)


def calculate_transfiguration(year: int, cache=None) -> date:
    """The last Sunday before Ash Wednesday."""
    ash_wednesday = calculate_ash_wednesday(year, cache)
    return ash_wednesday - timedelta(days=sunday_based_weekday(ash_wednesday))


# ---------------------------------------------------------------------------
# Rule-based dates
# ---------------------------------------------------------------------------

def calculate_advent_start(year: int) -> date:
    """First Sunday of Advent: the fourth Sunday before Christmas Day.

    When Christmas is itself a Sunday, Advent 4 is Dec 18 and Advent 1
    falls on Nov 27. The plain "weekday(Dec 25) + 21" subtraction would give
    Dec 4 in that case, so a Sunday Christmas counts as weekday 7 here.
    """
    christmas = date(year, 12, 25)
    return christmas - timedelta(days=(sunday_based_weekday(christmas) or 7) + 21)


def calculate_christ_the_king(year: int) -> date:
    """The Sunday before Advent begins."""
    return calculate_advent_start(year) - timedelta(days=7)


def calculate_reformation_sunday(year: int) -> date:
    """The last Sunday in October."""
    october_31 = date(year, 10, 31)
    return october_31 - timedelta(days=sunday_based_weekday(october_31))


def calculate_all_saints_sunday(year: int) -> date:
    """All Saints observance: the first Sunday of November.

    This is Nov 1 itself when that is a Sunday, Nov 2 when Nov 1 is a
    Saturday, and otherwise the first Sunday after Nov 1; all three cases
    are the first Sunday on or after Nov 1.
    """
    november_1 = date(year, 11, 1)
    return november_1 + timedelta(days=(SUNDAY - november_1.weekday()) % 7)


def calculate_thanksgiving(year: int) -> date:
    """US Thanksgiving: the fourth Thursday of November."""
    november_1 = date(year, 11, 1)
    first_thursday = november_1 + timedelta(days=(THURSDAY - november_1.weekday()) % 7)
    return first_thursday + timedelta(days=21)


def calculate_thanksgiving_eve(year: int) -> date:
    return calculate_thanksgiving(year) - timedelta(days=1)


def calculate_baptism_of_our_lord(year: int) -> date:
    """The first Sunday after Epiphany (Jan 13 when Jan 6 is a Sunday)."""
    epiphany = date(year, 1, 6)
    days_ahead = (SUNDAY - epiphany.weekday()) % 7 or 7
    return epiphany + timedelta(days=days_ahead)


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------

def is_reformation_sunday(d: date) -> bool:
    """Last Sunday in October: a Sunday in October whose next week is in November."""
    if d.month != 10 or d.weekday() != SUNDAY:
        return False
    return (d + timedelta(days=7)).month != 10


def is_all_saints_day(d: date) -> bool:
    return d.month == 11 and d == calculate_all_saints_sunday(d.year)


def is_christ_the_king_sunday(d: date) -> bool:
    return d.weekday() == SUNDAY and d == calculate_christ_the_king(d.year)


def is_thanksgiving_day(d: date) -> bool:
    if d.month != 11 or d.weekday() != THURSDAY:
        return False
    return (d.day + 6) // 7 == 4


def is_thanksgiving_eve(d: date) -> bool:
    if d.month != 11 or d.weekday() != WEDNESDAY:
        return False
    return is_thanksgiving_day(d + timedelta(days=1))


def is_lenten_midweek(d: date, ash_wednesday: date, palm_sunday: date) -> bool:
    """A Wednesday strictly between Ash Wednesday and Palm Sunday."""
    return d.weekday() == WEDNESDAY and ash_wednesday < d < palm_sunday


# ---------------------------------------------------------------------------
# One year's key dates
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class MovableDates:
    """Every computed observance for one civil year."""
    year: int
    easter: date
    ash_wednesday: date
    transfiguration: date
    palm_sunday: date
    maundy_thursday: date
    good_friday: date
    ascension: date
    pentecost: date
    trinity_sunday: date
    baptism_of_our_lord: date
    reformation_sunday: date
    all_saints_sunday: date
    christ_the_king: date
    advent_start: date
    thanksgiving: date
    thanksgiving_eve: date


def movable_dates(year: int, cache: Optional[CalculationCache] = None) -> MovableDates:
    easter = calculate_easter(year, cache)
    ash_wednesday = easter + timedelta(days=ASH_WEDNESDAY_OFFSET)
    pentecost = easter + timedelta(days=PENTECOST_OFFSET)
    return MovableDates(
        year=year,
        easter=easter,
        ash_wednesday=ash_wednesday,
        transfiguration=ash_wednesday - timedelta(days=sunday_based_weekday(ash_wednesday)),
        palm_sunday=easter + timedelta(days=PALM_SUNDAY_OFFSET),
        maundy_thursday=easter + timedelta(days=MAUNDY_THURSDAY_OFFSET),
        good_friday=easter + timedelta(days=GOOD_FRIDAY_OFFSET),
        ascension=easter + timedelta(days=ASCENSION_OFFSET),
        pentecost=pentecost,
        trinity_sunday=pentecost + timedelta(days=TRINITY_AFTER_PENTECOST),
        baptism_of_our_lord=calculate_baptism_of_our_lord(year),
        reformation_sunday=calculate_reformation_sunday(year),
        all_saints_sunday=calculate_all_saints_sunday(year),
        christ_the_king=calculate_christ_the_king(year),
        advent_start=calculate_advent_start(year),
        thanksgiving=calculate_thanksgiving(year),
        thanksgiving_eve=calculate_thanksgiving_eve(year),
    )
