"""
Season and special-day resolution for any calendar date.

Resolution order for a date:
  1. Special days, checked in a fixed order; the first match wins. A special
     day determines the season through the feast day table.
  2. Otherwise, half-open season ranges (start inclusive, end exclusive):
       Christmas   Dec 24 .. Jan 5
       Epiphany    Jan 6 .. Ash Wednesday
       Lent        Ash Wednesday .. Palm Sunday
       Holy Week   Palm Sunday .. Easter
       Easter      Easter .. Pentecost
       Advent      Advent 1 .. Dec 24
     and Ordinary Time for everything else.

Results are memoized per ISO date in a CalculationCache; pass one
explicitly to keep state isolated, or omit it to share DEFAULT_CACHE.
"""

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

from liturgy.data.loader import FeastDay, Season, get_feast_day, get_season
from liturgy.errors import LiturgicalCalendarError
from liturgy.logic.cache import CalculationCache, resolve_cache
from liturgy.logic.dates import DateInput, normalize_date, parse_service_date
from liturgy.logic.feasts import (
    is_all_saints_day,
    is_christ_the_king_sunday,
    is_lenten_midweek,
    is_reformation_sunday,
    is_thanksgiving_day,
    is_thanksgiving_eve,
    movable_dates,
)

logger = logging.getLogger(__name__)

# Cyclic order used for "what comes next"
SEASON_ORDER = [
    "ADVENT",
    "CHRISTMAS",
    "EPIPHANY",
    "LENT",
    "HOLY_WEEK",
    "EASTER",
    "PENTECOST_DAY",
    "TRINITY",
    "ORDINARY_TIME",
]


@dataclass(frozen=True)
class LiturgicalInfo:
    """Everything the calendar knows about one date."""
    date: date
    season_id: str
    season: Season
    special_day_id: Optional[str]
    special_day: Optional[FeastDay]
    color: str


@dataclass(frozen=True)
class ServiceInfo:
    """Display-ready liturgical facts for a service date string."""
    date: date
    season: str
    season_name: str
    season_color: str
    special_day: Optional[str]
    special_day_name: Optional[str]


@dataclass(frozen=True)
class SeasonRange:
    """Inclusive first and last day of a season; None when unknown."""
    start_date: Optional[date]
    end_date: Optional[date]


# ---------------------------------------------------------------------------
# Special days
# ---------------------------------------------------------------------------

def _match_special_day(d: date, cache) -> Optional[str]:
    key = movable_dates(d.year, cache)

    # Order matters: Transfiguration is derived from Ash Wednesday and is
    # checked before every fixed date.
    checks = (
        ("TRANSFIGURATION", lambda: d == key.transfiguration),
        ("CHRISTMAS_EVE", lambda: d.month == 12 and d.day == 24),
        ("CHRISTMAS_DAY", lambda: d.month == 12 and d.day == 25),
        ("EPIPHANY_DAY", lambda: d.month == 1 and d.day == 6),
        ("BAPTISM_OF_OUR_LORD", lambda: d == key.baptism_of_our_lord),
        ("ADVENT_1", lambda: d == key.advent_start),
        ("ASH_WEDNESDAY", lambda: d == key.ash_wednesday),
        ("PALM_SUNDAY", lambda: d == key.palm_sunday),
        ("MAUNDY_THURSDAY", lambda: d == key.maundy_thursday),
        ("GOOD_FRIDAY", lambda: d == key.good_friday),
        ("EASTER_SUNDAY", lambda: d == key.easter),
        ("ASCENSION", lambda: d == key.ascension),
        ("PENTECOST_SUNDAY", lambda: d == key.pentecost),
        ("TRINITY_SUNDAY", lambda: d == key.trinity_sunday),
        ("REFORMATION_SUNDAY", lambda: is_reformation_sunday(d)),
        ("ALL_SAINTS_DAY", lambda: is_all_saints_day(d)),
        ("CHRIST_THE_KING", lambda: is_christ_the_king_sunday(d)),
        ("THANKSGIVING", lambda: is_thanksgiving_day(d)),
        ("THANKSGIVING_EVE", lambda: is_thanksgiving_eve(d)),
        ("LENT_MIDWEEK", lambda: is_lenten_midweek(d, key.ash_wednesday, key.palm_sunday)),
    )
    for special_day_id, check in checks:
        if check():
            return special_day_id
    return None


def get_special_day(value: DateInput, cache: Optional[CalculationCache] = None) -> Optional[str]:
    """Return the special day id for a date, or None."""
    d = normalize_date(value)
    cache = resolve_cache(cache)
    return cache.get_or_compute(("special_day", d.isoformat()),
                                lambda: _match_special_day(d, cache))


# ---------------------------------------------------------------------------
# Seasons
# ---------------------------------------------------------------------------

def _season_from_ranges(d: date, cache) -> str:
    key = movable_dates(d.year, cache)

    if (d.month == 12 and d.day >= 24) or (d.month == 1 and d.day <= 5):
        return "CHRISTMAS"
    if date(d.year, 1, 6) <= d < key.ash_wednesday:
        return "EPIPHANY"
    if key.ash_wednesday <= d < key.palm_sunday:
        return "LENT"
    if key.palm_sunday <= d < key.easter:
        return "HOLY_WEEK"
    if key.easter <= d < key.pentecost:
        return "EASTER"
    if key.advent_start <= d < date(d.year, 12, 24):
        return "ADVENT"
    return "ORDINARY_TIME"


def _resolve_season(d: date, cache) -> str:
    special_day_id = get_special_day(d, cache)
    if special_day_id is not None:
        return get_feast_day(special_day_id).season
    return _season_from_ranges(d, cache)


def get_current_season(value: DateInput, cache: Optional[CalculationCache] = None) -> str:
    """Return the id of the liturgical season governing a date."""
    d = normalize_date(value)
    cache = resolve_cache(cache)
    return cache.get_or_compute(("season", d.isoformat()),
                                lambda: _resolve_season(d, cache))


def get_season_for_date(value: DateInput, cache: Optional[CalculationCache] = None) -> str:
    """Like get_current_season(), but returns "UNKNOWN" instead of raising."""
    try:
        return get_current_season(value, cache)
    except LiturgicalCalendarError as e:
        logger.warning("Could not determine season for %r: %s", value, e)
        return "UNKNOWN"


def get_season_color(value: DateInput, cache: Optional[CalculationCache] = None) -> str:
    """Special-day color if the date has one, otherwise the season color."""
    special_day_id = get_special_day(value, cache)
    if special_day_id is not None:
        return get_feast_day(special_day_id).color
    return get_season(get_current_season(value, cache)).color


def get_liturgical_info(value: DateInput, cache: Optional[CalculationCache] = None) -> LiturgicalInfo:
    d = normalize_date(value)
    season_id = get_current_season(d, cache)
    special_day_id = get_special_day(d, cache)
    return LiturgicalInfo(
        date=d,
        season_id=season_id,
        season=get_season(season_id),
        special_day_id=special_day_id,
        special_day=get_feast_day(special_day_id) if special_day_id else None,
        color=get_season_color(d, cache),
    )


def get_liturgical_info_for_service(date_string: str,
                                    cache: Optional[CalculationCache] = None) -> Optional[ServiceInfo]:
    """Liturgical info for an "M/D/YY" service date, or None if it cannot be resolved.

    A special day's name and color take precedence over the season's.
    """
    try:
        info = get_liturgical_info(parse_service_date(date_string), cache)
    except LiturgicalCalendarError as e:
        logger.error("Error getting liturgical info for service %r: %s", date_string, e)
        return None

    if info.special_day is not None:
        season_name = info.special_day.name
        season_color = info.special_day.color
    else:
        season_name = info.season.name
        season_color = info.season.color

    return ServiceInfo(
        date=info.date,
        season=info.season_id,
        season_name=season_name,
        season_color=season_color,
        special_day=info.special_day_id,
        special_day_name=info.special_day.name if info.special_day else None,
    )


def clear_cache(cache: Optional[CalculationCache] = None):
    """Drop every memoized Easter, season, and special-day result."""
    resolve_cache(cache).clear()


# ---------------------------------------------------------------------------
# Season navigation
# ---------------------------------------------------------------------------

def get_next_liturgical_season(season_id: str) -> str:
    """The season that follows season_id; ADVENT for anything unrecognized."""
    if season_id not in SEASON_ORDER:
        return "ADVENT"
    return SEASON_ORDER[(SEASON_ORDER.index(season_id) + 1) % len(SEASON_ORDER)]


def get_season_date_range(season_id: str, reference: DateInput,
                          cache: Optional[CalculationCache] = None) -> SeasonRange:
    """Inclusive date range of a season within the reference date's year.

    Christmas runs into January of the following year. Single-day seasons
    (Day of Pentecost, Trinity) start and end on the same date.
    """
    year = normalize_date(reference).year
    key = movable_dates(year, cache)
    one_day = timedelta(days=1)

    if season_id == "ADVENT":
        return SeasonRange(key.advent_start, date(year, 12, 24))
    if season_id == "CHRISTMAS":
        return SeasonRange(date(year, 12, 25), date(year + 1, 1, 5))
    if season_id == "EPIPHANY":
        return SeasonRange(date(year, 1, 6), key.ash_wednesday - one_day)
    if season_id == "LENT":
        return SeasonRange(key.ash_wednesday, key.palm_sunday - one_day)
    if season_id == "HOLY_WEEK":
        return SeasonRange(key.palm_sunday, key.easter - one_day)
    if season_id == "EASTER":
        return SeasonRange(key.easter, key.pentecost - one_day)
    if season_id == "PENTECOST_DAY":
        return SeasonRange(key.pentecost, key.pentecost)
    if season_id == "TRINITY":
        return SeasonRange(key.trinity_sunday, key.trinity_sunday)
    if season_id == "ORDINARY_TIME":
        return SeasonRange(key.trinity_sunday + one_day, key.advent_start - one_day)
    return SeasonRange(None, None)


def get_days_remaining_in_season(season_id: str, reference: DateInput,
                                 cache: Optional[CalculationCache] = None) -> Optional[int]:
    """Days from reference to the season's last day; None for unknown seasons."""
    season_range = get_season_date_range(season_id, reference, cache)
    if season_range.end_date is None:
        return None
    return (season_range.end_date - normalize_date(reference)).days


def get_season_progress_percentage(season_id: str, reference: DateInput,
                                   cache: Optional[CalculationCache] = None) -> int:
    """How far through the season reference is, clamped to 0-100."""
    season_range = get_season_date_range(season_id, reference, cache)
    if season_range.start_date is None or season_range.end_date is None:
        return 0

    total = (season_range.end_date - season_range.start_date).days
    elapsed = (normalize_date(reference) - season_range.start_date).days
    if elapsed < 0:
        return 0
    if elapsed >= total:
        return 100
    return round(elapsed / total * 100)
