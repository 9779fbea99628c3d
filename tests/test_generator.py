"""Tests for yearly service schedule generation."""

import dataclasses
from datetime import UTC, date, datetime

import pytest
import yaml

from liturgy.errors import CalculationError, YearOutOfRange
from liturgy.logic.feasts import SUNDAY
from liturgy.logic.seasons import get_liturgical_info_for_service
from liturgy.logic.validation import EasterCheck
from liturgy.schedule import generator
from liturgy.schedule.generator import (
    YearCalendar,
    YearGenerationFailure,
    generate_services_for_year,
    generate_services_for_years,
    generate_sundays,
    special_weekday_dates,
)


class TestGenerateSundays:

    def test_2025(self):
        sundays = generate_sundays(2025)
        assert len(sundays) == 52
        assert sundays[0] == date(2025, 1, 5)
        assert sundays[-1] == date(2025, 12, 28)
        assert all(d.weekday() == SUNDAY for d in sundays)

    def test_53_sunday_year(self):
        # Jan 2 and Dec 31, 2028 are both Sundays
        assert len(generate_sundays(2028)) == 53


class TestSpecialWeekdays:

    def test_2025(self, cache):
        weekdays = {special_day_id: d for d, special_day_id in special_weekday_dates(2025, cache)
                    if special_day_id != "LENT_MIDWEEK"}
        assert weekdays == {
            "CHRISTMAS_EVE": date(2025, 12, 24),
            "ASH_WEDNESDAY": date(2025, 3, 5),
            "MAUNDY_THURSDAY": date(2025, 4, 17),
            "GOOD_FRIDAY": date(2025, 4, 18),
            "ASCENSION": date(2025, 5, 29),
            "THANKSGIVING_EVE": date(2025, 11, 26),
        }

    def test_five_lenten_wednesdays(self, cache):
        lenten = [d for d, special_day_id in special_weekday_dates(2025, cache)
                  if special_day_id == "LENT_MIDWEEK"]
        assert lenten == [date(2025, 3, 12), date(2025, 3, 19), date(2025, 3, 26),
                          date(2025, 4, 2), date(2025, 4, 9)]

    def test_sunday_christmas_eve_is_not_a_weekday_service(self, cache):
        ids = [special_day_id for _, special_day_id in special_weekday_dates(2028, cache)]
        assert "CHRISTMAS_EVE" not in ids


class TestGenerateServicesForYear:

    def test_counts(self, calendar_2025):
        meta = calendar_2025.metadata
        assert meta.regular_sundays == 52
        assert meta.special_weekdays == 11
        assert meta.total_services == 63 == len(calendar_2025.services)
        assert meta.overridden_count == 0

    def test_validated(self, calendar_2025):
        assert calendar_2025.validated
        assert calendar_2025.validation_errors == ()
        assert calendar_2025.validation_warnings == ()

    def test_sorted_without_duplicates(self, calendar_2025):
        dates = [s.date for s in calendar_2025.services]
        assert dates == sorted(dates)
        assert len(set(dates)) == len(dates)
        assert all(d.year == 2025 for d in dates)

    def test_exactly_one_easter(self, calendar_2025):
        easter = [s for s in calendar_2025.services if s.special_day_id == "EASTER_SUNDAY"]
        assert len(easter) == 1
        service = easter[0]
        assert service.date == date(2025, 4, 20)
        assert service.date_string == "4/20/25"
        assert service.day_of_week == "Sunday"
        assert service.season_id == "EASTER"
        assert service.season_color == "#FFF0AA"
        assert service.special_day_name == "Easter Sunday"
        assert service.is_regular_sunday and not service.is_special_weekday

    def test_christmas_eve_weekday_service(self, calendar_2025):
        service = next(s for s in calendar_2025.services if s.date == date(2025, 12, 24))
        assert service.day_of_week == "Wednesday"
        assert service.special_day_id == "CHRISTMAS_EVE"
        assert service.special_day_name == "Christmas Eve"
        assert service.season_id == "CHRISTMAS"
        assert service.is_special_weekday

    def test_lenten_services_named(self, calendar_2025):
        lenten = [s for s in calendar_2025.services if s.special_day_id == "LENT_MIDWEEK"]
        assert len(lenten) == 5
        assert {s.special_day_name for s in lenten} == {"Midweek Lenten Service"}
        assert {s.season_id for s in lenten} == {"LENT"}

    def test_key_dates(self, calendar_2025):
        key_dates = calendar_2025.key_dates
        assert key_dates["easter"] == date(2025, 4, 20)
        assert key_dates["ash_wednesday"] == date(2025, 3, 5)
        assert key_dates["pentecost"] == date(2025, 6, 8)
        assert key_dates["advent_start"] == date(2025, 11, 30)
        assert key_dates["christmas_eve"] == date(2025, 12, 24)
        # Christmas Day 2025 is a Thursday and not a scheduled service
        assert "christmas_day" not in key_dates

    def test_stamped(self, calendar_2025):
        assert calendar_2025.algorithm_version == "1.0.0"
        assert calendar_2025.generated_at.tzinfo is not None

    def test_sunday_christmas_eve(self, cache):
        calendar = generate_services_for_year(2028, cache)
        on_eve = [s for s in calendar.services if s.date == date(2028, 12, 24)]
        assert len(on_eve) == 1
        assert on_eve[0].special_day_id == "CHRISTMAS_EVE"
        assert on_eve[0].is_regular_sunday
        assert calendar.metadata.regular_sundays == 53
        assert calendar.metadata.special_weekdays == 10
        assert calendar.validated

    @pytest.mark.parametrize("year", [2023, 2101])
    def test_year_out_of_range(self, year, cache):
        with pytest.raises(YearOutOfRange):
            generate_services_for_year(year, cache)

    @pytest.mark.parametrize("year", [2024, 2026, 2038, 2100])
    def test_other_years_validate(self, year, cache):
        calendar = generate_services_for_year(year, cache)
        assert calendar.validated, calendar.validation_errors
        assert sum(s.special_day_id == "EASTER_SUNDAY" for s in calendar.services) == 1

    def test_implausible_easter_raises(self, cache, monkeypatch):
        bad = EasterCheck(is_valid=False, message="Easter 2025 falls on Thu May 01 2025",
                          calculated_date=date(2025, 5, 1))
        monkeypatch.setattr(generator, "validate_easter_date", lambda year, cache=None: bad)
        with pytest.raises(CalculationError, match="Easter validation failed for 2025"):
            generate_services_for_year(2025, cache)

    def test_key_dates_are_read_only(self, calendar_2025):
        with pytest.raises(TypeError):
            calendar_2025.key_dates["easter"] = date(1999, 1, 1)
        assert calendar_2025.key_dates["easter"] == date(2025, 4, 20)

    def test_repeatable(self, cache):
        first = generate_services_for_year(2026, cache)
        cache.clear()
        second = generate_services_for_year(2026, cache)
        assert first.services == second.services
        assert first.key_dates == second.key_dates


class TestGenerateServicesForYears:

    def test_failure_does_not_stop_batch(self, cache):
        results = generate_services_for_years(2023, 2024, cache)
        assert len(results) == 2
        failure, calendar = results
        assert isinstance(failure, YearGenerationFailure)
        assert failure.year == 2023
        assert not failure.validated
        assert "2024 and 2100" in failure.error
        assert isinstance(calendar, YearCalendar)
        assert calendar.year == 2024
        assert calendar.validated

    def test_unexpected_error_stops_batch(self, cache, monkeypatch):
        def broken(year, cache=None):
            raise KeyError("NOT_A_FEAST")

        monkeypatch.setattr(generator, "generate_services_for_year", broken)
        with pytest.raises(KeyError):
            generate_services_for_years(2024, 2025, cache)

    def test_empty_when_end_before_start(self, cache):
        assert generate_services_for_years(2026, 2025, cache) == []


class TestServiceOverride:

    def test_with_override_copies(self, calendar_2025):
        original = calendar_2025.services[0]
        when = datetime(2025, 1, 2, 9, 30, tzinfo=UTC)
        overridden = original.with_override("Weather", "office", when)
        assert overridden.is_overridden
        assert overridden.override_reason == "Weather"
        assert overridden.overridden_by == "office"
        assert overridden.overridden_at == when
        assert overridden.date == original.date
        assert overridden.season_id == original.season_id
        assert not original.is_overridden

    def test_services_are_immutable(self, calendar_2025):
        with pytest.raises(dataclasses.FrozenInstanceError):
            calendar_2025.services[0].season_id = "LENT"


class TestSerialization:

    def test_service_to_dict(self, calendar_2025):
        data = calendar_2025.services[0].to_dict()
        assert data["date"] == "2025-01-05"
        assert data["date_string"] == "1/5/25"
        assert data["is_overridden"] is False
        assert data["overridden_at"] is None

    def test_override_timestamp_serialized(self, calendar_2025):
        when = datetime(2025, 1, 2, tzinfo=UTC)
        data = calendar_2025.services[0].with_override("x", "y", when).to_dict()
        assert data["overridden_at"] == when.isoformat()

    def test_calendar_to_dict_is_yaml_safe(self, calendar_2025):
        data = calendar_2025.to_dict()
        assert data["year"] == 2025
        assert data["key_dates"]["easter"] == "2025-04-20"
        assert data["metadata"]["total_services"] == 63
        assert len(data["services"]) == 63
        yaml.safe_dump(data)

    def test_failure_to_dict(self):
        failure = YearGenerationFailure(year=2023, error="boom")
        assert failure.to_dict() == {"year": 2023, "error": "boom", "validated": False}


class TestServiceDateLookup:
    """A generated date_string resolves back to the same service date."""

    @pytest.mark.parametrize("year", [2024, 2049, 2050, 2099, 2100])
    def test_easter_service(self, year, cache):
        calendar = generate_services_for_year(year, cache)
        easter = next(s for s in calendar.services if s.special_day_id == "EASTER_SUNDAY")
        info = get_liturgical_info_for_service(easter.date_string, cache)
        assert info.date == easter.date
        assert info.special_day == "EASTER_SUNDAY"
        assert info.season == "EASTER"

    def test_every_service_2100(self, cache):
        for service in generate_services_for_year(2100, cache).services:
            info = get_liturgical_info_for_service(service.date_string, cache)
            assert info.date == service.date, service.date_string
            assert info.special_day == service.special_day_id
