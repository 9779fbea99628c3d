"""
Structural sanity checks for computed dates and service schedules.

Only validate_easter_date() is ever used as a hard gate (by the year
generator). The other checks return reports for the caller to turn into
errors or warnings.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Optional

from liturgy.config import EASTER_EARLIEST, EASTER_LATEST, MAX_SERVICE_GAP_DAYS
from liturgy.logic.cache import CalculationCache
from liturgy.logic.dates import DateInput, normalize_date
from liturgy.logic.feasts import calculate_easter
from liturgy.logic.seasons import get_current_season


@dataclass(frozen=True)
class ValidationIssue:
    """A non-fatal finding: severity is "error" or "warning"."""
    severity: str
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class EasterCheck:
    is_valid: bool
    message: str
    calculated_date: date


@dataclass(frozen=True)
class SeasonCheck:
    is_valid: bool
    date: date
    expected_season: str
    calculated_season: str
    message: str


@dataclass(frozen=True)
class DateGap:
    after: date
    before: date
    days_between: int


@dataclass
class DateRangeReport:
    """Duplicates and gaps found in a list of service dates."""
    is_valid: bool
    message: str
    total_services: int = 0
    duplicates: list[date] = field(default_factory=list)
    gaps: list[DateGap] = field(default_factory=list)


def _format_long(d: date) -> str:
    return d.strftime("%a %b %d %Y")


def validate_easter_date(year: int, cache: Optional[CalculationCache] = None) -> EasterCheck:
    """Check that Easter for year falls between March 22 and April 25."""
    easter = calculate_easter(year, cache)
    earliest = date(year, *EASTER_EARLIEST)
    latest = date(year, *EASTER_LATEST)

    if not earliest <= easter <= latest:
        return EasterCheck(
            is_valid=False,
            message=(f"Easter {year} falls on {_format_long(easter)}, which is outside "
                     f"the valid range of March 22 - April 25"),
            calculated_date=easter,
        )
    return EasterCheck(
        is_valid=True,
        message=f"Easter {year} on {_format_long(easter)} is valid",
        calculated_date=easter,
    )


def validate_liturgical_date(value: DateInput, expected_season: str,
                             cache: Optional[CalculationCache] = None) -> SeasonCheck:
    """Compare the computed season of a date with an expected season id."""
    d = normalize_date(value)
    calculated = get_current_season(d, cache)
    is_valid = calculated == expected_season
    if is_valid:
        message = f"Date {_format_long(d)} correctly identified as {calculated}"
    else:
        message = f"Date {_format_long(d)} expected {expected_season} but got {calculated}"
    return SeasonCheck(
        is_valid=is_valid,
        date=d,
        expected_season=expected_season,
        calculated_season=calculated,
        message=message,
    )


def validate_service_date_range(service_dates: Iterable[date],
                                max_gap_days: int = MAX_SERVICE_GAP_DAYS) -> DateRangeReport:
    """Report duplicate dates and gaps longer than max_gap_days.

    The input is not modified; a sorted copy is checked.
    """
    ordered = sorted(service_dates)
    if not ordered:
        return DateRangeReport(is_valid=False, message="No service dates provided")

    duplicates = []
    gaps = []
    for earlier, later in zip(ordered, ordered[1:]):
        if earlier == later:
            duplicates.append(earlier)
            continue
        days_between = (later - earlier).days
        if days_between > max_gap_days:
            gaps.append(DateGap(after=earlier, before=later, days_between=days_between))

    is_valid = not duplicates and not gaps
    if is_valid:
        message = f"All {len(ordered)} service dates are valid"
    else:
        message = f"Found {len(duplicates)} duplicates and {len(gaps)} gaps"

    return DateRangeReport(
        is_valid=is_valid,
        message=message,
        total_services=len(ordered),
        duplicates=duplicates,
        gaps=gaps,
    )
