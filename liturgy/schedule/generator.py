"""
Generates the service schedule for a calendar year.

A year's schedule is every Sunday plus the special weekday services
(Christmas Eve, Ash Wednesday, Maundy Thursday, Good Friday, Ascension,
the midweek Lenten Wednesdays, and Thanksgiving Eve), each tagged with
its season, special day, and display color.

Generation runs in one synchronous pass:
    Sundays -> special weekdays merged and sorted -> validated -> YearCalendar

An out-of-range year or an implausible Easter raises immediately. Any other
inconsistency is collected into validation_errors / validation_warnings and
returned with validated=False, leaving the caller to decide whether to use
the schedule.
"""

import logging
from dataclasses import asdict, dataclass, replace
from datetime import UTC, date, datetime, timedelta
from types import MappingProxyType
from typing import Mapping, Optional, Union

from liturgy.config import (
    ALGORITHM_VERSION,
    LENTEN_MIDWEEK_LIMIT,
    MIN_SERVICES_PER_YEAR,
    SCHEDULE_YEAR_RANGE,
)
from liturgy.data.loader import get_feast_day
from liturgy.errors import CalculationError, LiturgicalCalendarError
from liturgy.logic.cache import CalculationCache
from liturgy.logic.dates import day_of_week_name, format_service_date, validate_year
from liturgy.logic.feasts import SUNDAY, movable_dates
from liturgy.logic.seasons import get_liturgical_info
from liturgy.logic.validation import (
    ValidationIssue,
    validate_easter_date,
    validate_service_date_range,
)

logger = logging.getLogger(__name__)

# Special day id -> key_dates name
KEY_DATE_NAMES = {
    "ADVENT_1": "advent_start",
    "CHRISTMAS_EVE": "christmas_eve",
    "CHRISTMAS_DAY": "christmas_day",
    "EPIPHANY_DAY": "epiphany",
    "BAPTISM_OF_OUR_LORD": "baptism_of_our_lord",
    "TRANSFIGURATION": "transfiguration",
    "ASH_WEDNESDAY": "ash_wednesday",
    "PALM_SUNDAY": "palm_sunday",
    "MAUNDY_THURSDAY": "maundy_thursday",
    "GOOD_FRIDAY": "good_friday",
    "EASTER_SUNDAY": "easter",
    "ASCENSION": "ascension",
    "PENTECOST_SUNDAY": "pentecost",
    "TRINITY_SUNDAY": "trinity",
    "REFORMATION_SUNDAY": "reformation_sunday",
    "ALL_SAINTS_DAY": "all_saints_day",
    "CHRIST_THE_KING": "christ_the_king",
    "THANKSGIVING": "thanksgiving",
    "THANKSGIVING_EVE": "thanksgiving_eve",
}


@dataclass(frozen=True)
class Service:
    """One scheduled service.

    The override fields are never set by the generator; with_override()
    is the hook for whoever later edits a generated service.
    """
    date: date
    date_string: str            # "M/D/YY"
    day_of_week: str            # "Sunday", "Wednesday", ...
    season_id: str
    season_name: str
    season_color: str
    special_day_id: Optional[str]
    special_day_name: Optional[str]
    is_regular_sunday: bool
    is_special_weekday: bool
    is_overridden: bool = False
    override_reason: Optional[str] = None
    overridden_by: Optional[str] = None
    overridden_at: Optional[datetime] = None

    def with_override(self, reason: str, overridden_by: str,
                      overridden_at: Optional[datetime] = None) -> "Service":
        """Return a copy marked as manually overridden; computed fields are kept."""
        return replace(
            self,
            is_overridden=True,
            override_reason=reason,
            overridden_by=overridden_by,
            overridden_at=overridden_at or datetime.now(UTC),
        )

    def to_dict(self) -> dict:
        data = asdict(self)
        data["date"] = self.date.isoformat()
        data["overridden_at"] = self.overridden_at.isoformat() if self.overridden_at else None
        return data


@dataclass(frozen=True)
class CalendarMetadata:
    total_services: int
    regular_sundays: int
    special_weekdays: int
    overridden_count: int


@dataclass(frozen=True)
class YearCalendar:
    """A generated schedule for one year, sorted by date with no repeated dates."""
    year: int
    services: tuple[Service, ...]
    key_dates: Mapping[str, date]       # read-only view
    metadata: CalendarMetadata
    validated: bool
    validation_errors: tuple[str, ...]
    validation_warnings: tuple[str, ...]
    algorithm_version: str
    generated_at: datetime

    def to_dict(self) -> dict:
        return {
            "year": self.year,
            "services": [s.to_dict() for s in self.services],
            "key_dates": {name: d.isoformat() for name, d in self.key_dates.items()},
            "metadata": asdict(self.metadata),
            "validated": self.validated,
            "validation_errors": list(self.validation_errors),
            "validation_warnings": list(self.validation_warnings),
            "algorithm_version": self.algorithm_version,
            "generated_at": self.generated_at.isoformat(),
        }


@dataclass(frozen=True)
class YearGenerationFailure:
    """Placeholder for a year that could not be generated in a batch."""
    year: int
    error: str
    validated: bool = False

    def to_dict(self) -> dict:
        return asdict(self)


# ---------------------------------------------------------------------------
# Building services
# ---------------------------------------------------------------------------

def _make_service(d: date, cache, is_sunday: bool,
                  special_day_id: Optional[str] = None) -> Service:
    info = get_liturgical_info(d, cache)
    special_day_id = special_day_id or info.special_day_id
    return Service(
        date=d,
        date_string=format_service_date(d),
        day_of_week=day_of_week_name(d),
        season_id=info.season_id,
        season_name=info.season.name,
        season_color=info.color,
        special_day_id=special_day_id,
        special_day_name=get_feast_day(special_day_id).name if special_day_id else None,
        is_regular_sunday=is_sunday,
        is_special_weekday=not is_sunday,
    )


def generate_sundays(year: int) -> list[date]:
    """Every Sunday in the calendar year, in order."""
    current = date(year, 1, 1)
    current += timedelta(days=(SUNDAY - current.weekday()) % 7)
    sundays = []
    while current.year == year:
        sundays.append(current)
        current += timedelta(days=7)
    return sundays


def special_weekday_dates(year: int, cache: Optional[CalculationCache] = None) -> list[tuple[date, str]]:
    """(date, special day id) for each non-Sunday service in the year."""
    key = movable_dates(year, cache)
    weekdays = []

    christmas_eve = date(year, 12, 24)
    if christmas_eve.weekday() != SUNDAY:
        weekdays.append((christmas_eve, "CHRISTMAS_EVE"))

    if key.ash_wednesday.weekday() != SUNDAY:
        weekdays.append((key.ash_wednesday, "ASH_WEDNESDAY"))

    weekdays.append((key.maundy_thursday, "MAUNDY_THURSDAY"))
    weekdays.append((key.good_friday, "GOOD_FRIDAY"))
    weekdays.append((key.ascension, "ASCENSION"))

    wednesday = key.ash_wednesday
    for _ in range(LENTEN_MIDWEEK_LIMIT):
        wednesday += timedelta(days=7)
        if wednesday >= key.palm_sunday:
            break
        weekdays.append((wednesday, "LENT_MIDWEEK"))

    weekdays.append((key.thanksgiving_eve, "THANKSGIVING_EVE"))
    return weekdays


def _check_services(services: list[Service], year: int) -> tuple[list[ValidationIssue], list[ValidationIssue]]:
    errors = []
    warnings = []

    report = validate_service_date_range(s.date for s in services)
    if report.duplicates:
        errors.append(ValidationIssue("error", f"Found {len(report.duplicates)} duplicate dates"))
    for gap in report.gaps:
        warnings.append(ValidationIssue(
            "warning",
            f"Gap of {gap.days_between} days between {gap.after.isoformat()} "
            f"and {gap.before.isoformat()}"))

    if len(services) < MIN_SERVICES_PER_YEAR:
        errors.append(ValidationIssue(
            "error", f"Expected at least {MIN_SERVICES_PER_YEAR} services, got {len(services)}"))

    if not any(s.special_day_id == "EASTER_SUNDAY" for s in services):
        errors.append(ValidationIssue("error", "Easter Sunday not found in generated services"))

    if not any(s.special_day_id in ("CHRISTMAS_EVE", "CHRISTMAS_DAY") for s in services):
        warnings.append(ValidationIssue("warning", "Christmas services not found in generated services"))

    wrong_year = [s for s in services if s.date.year != year]
    if wrong_year:
        errors.append(ValidationIssue("error", f"Found {len(wrong_year)} dates in wrong year"))

    return errors, warnings


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def generate_services_for_year(year: int, cache: Optional[CalculationCache] = None) -> YearCalendar:
    """Build and validate the full service schedule for year (2024-2100).

    Raises YearOutOfRange for years outside the schedulable window and
    CalculationError when Easter falls outside March 22 - April 25.
    """
    validate_year(year, SCHEDULE_YEAR_RANGE)

    easter_check = validate_easter_date(year, cache)
    if not easter_check.is_valid:
        raise CalculationError(f"Easter validation failed for {year}: {easter_check.message}")

    services = [_make_service(d, cache, is_sunday=True) for d in generate_sundays(year)]
    services.extend(
        _make_service(d, cache, is_sunday=False, special_day_id=special_day_id)
        for d, special_day_id in special_weekday_dates(year, cache)
    )
    services.sort(key=lambda s: s.date)

    key_dates = {}
    for service in services:
        name = KEY_DATE_NAMES.get(service.special_day_id)
        if name:
            key_dates[name] = service.date

    errors, warnings = _check_services(services, year)
    for issue in errors:
        logger.warning("Schedule %d: %s", year, issue)

    metadata = CalendarMetadata(
        total_services=len(services),
        regular_sundays=sum(1 for s in services if s.is_regular_sunday),
        special_weekdays=sum(1 for s in services if s.is_special_weekday),
        overridden_count=sum(1 for s in services if s.is_overridden),
    )
    logger.debug("Generated %d services for %d", metadata.total_services, year)

    return YearCalendar(
        year=year,
        services=tuple(services),
        key_dates=MappingProxyType(key_dates),
        metadata=metadata,
        validated=not errors,
        validation_errors=tuple(str(issue) for issue in errors),
        validation_warnings=tuple(str(issue) for issue in warnings),
        algorithm_version=ALGORITHM_VERSION,
        generated_at=datetime.now(UTC),
    )


def generate_services_for_years(start_year: int, end_year: int,
                                cache: Optional[CalculationCache] = None
                                ) -> list[Union[YearCalendar, YearGenerationFailure]]:
    """Generate each year from start_year through end_year independently.

    A year that fails with a LiturgicalCalendarError is recorded as a
    YearGenerationFailure and does not stop the years after it. Any other
    exception is a defect in the calendar itself and stops the batch.
    """
    results = []
    for year in range(start_year, end_year + 1):
        try:
            results.append(generate_services_for_year(year, cache))
        except LiturgicalCalendarError as e:
            logger.error("Error generating services for %d: %s", year, e)
            results.append(YearGenerationFailure(year=year, error=str(e)))
    return results
