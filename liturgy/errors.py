"""
Exceptions raised by the liturgical calendar.

All of them are ValueErrors, so callers that already guard calendar input
with ``except ValueError`` keep working.
"""


class LiturgicalCalendarError(ValueError):
    """Base class for every calendar failure."""


class InvalidDateFormat(LiturgicalCalendarError):
    """A date input could not be parsed into a real calendar date."""


class YearOutOfRange(LiturgicalCalendarError):
    """A year falls outside the window the operation supports."""

    def __init__(self, year, year_range):
        self.year = year
        self.year_range = year_range
        low, high = year_range
        super().__init__(f"Year must be between {low} and {high}. Got: {year}")


class CalculationError(LiturgicalCalendarError):
    """A computed date or a reference table is implausible."""
