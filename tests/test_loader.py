"""Tests for the YAML reference tables."""

import pytest

from liturgy.data import loader
from liturgy.data.loader import (
    FALLBACK_SEASON_ID,
    get_feast_day,
    get_season,
    load_feast_days,
    load_reference_church_calendar,
    load_reference_easter_dates,
    load_seasons,
)
from liturgy.errors import CalculationError
from liturgy.logic.seasons import SEASON_ORDER

HEX_COLOR_CHARS = set("0123456789ABCDEF")


def _is_hex_color(value: str) -> bool:
    return len(value) == 7 and value[0] == "#" and set(value[1:]) <= HEX_COLOR_CHARS


class TestSeasons:

    def test_all_seasons_present(self):
        seasons = load_seasons()
        for season_id in SEASON_ORDER:
            assert season_id in seasons
        for season_id in ("REFORMATION", "ALL_SAINTS", "CHRIST_KING", FALLBACK_SEASON_ID):
            assert season_id in seasons

    def test_colors_are_hex(self):
        for season in load_seasons().values():
            assert _is_hex_color(season.color), season.id

    def test_unknown_id_falls_back(self):
        assert get_season("NOT_A_SEASON").id == FALLBACK_SEASON_ID
        assert get_season("NOT_A_SEASON").color == "#888888"


class TestFeastDays:

    def test_every_feast_maps_to_a_real_season(self):
        seasons = load_seasons()
        for feast in load_feast_days().values():
            assert feast.season in seasons
            assert feast.season != FALLBACK_SEASON_ID
            assert _is_hex_color(feast.color), feast.id

    def test_holy_week_days(self):
        for feast_id in ("PALM_SUNDAY", "MAUNDY_THURSDAY", "GOOD_FRIDAY"):
            assert get_feast_day(feast_id).season == "HOLY_WEEK"

    def test_unknown_feast_raises(self):
        with pytest.raises(KeyError):
            get_feast_day("NOT_A_FEAST")


@pytest.fixture
def feast_table(monkeypatch):
    """Serve a replacement feast_days.yaml; the real seasons table is kept."""
    real_load_yaml = loader._load_yaml
    table = {}

    def fake_load_yaml(relative_path):
        if relative_path == "feast_days.yaml":
            return table
        return real_load_yaml(relative_path)

    monkeypatch.setattr(loader, "_load_yaml", fake_load_yaml)
    load_seasons.cache_clear()
    load_feast_days.cache_clear()
    yield table
    load_seasons.cache_clear()
    load_feast_days.cache_clear()


class TestFeastSeasonMapping:
    """The feast table is rejected at load time if a season is missing or unknown."""

    def test_missing_season(self, feast_table):
        feast_table["GOOD_FRIDAY"] = {"name": "Good Friday", "color": "#000000"}
        with pytest.raises(CalculationError, match="GOOD_FRIDAY has no season"):
            load_feast_days()

    def test_unknown_season(self, feast_table):
        feast_table["GOOD_FRIDAY"] = {"name": "Good Friday", "color": "#000000",
                                      "season": "PASSIONTIDE"}
        with pytest.raises(CalculationError, match="PASSIONTIDE"):
            load_feast_days()

    def test_fallback_season_is_not_a_mapping(self, feast_table):
        feast_table["GOOD_FRIDAY"] = {"name": "Good Friday", "color": "#000000",
                                      "season": FALLBACK_SEASON_ID}
        with pytest.raises(CalculationError):
            load_feast_days()

    def test_valid_replacement_loads(self, feast_table):
        feast_table["GOOD_FRIDAY"] = {"name": "Good Friday", "color": "#000000",
                                      "season": "HOLY_WEEK"}
        assert load_feast_days()["GOOD_FRIDAY"].season == "HOLY_WEEK"


class TestReferenceDates:

    def test_easter_table_keys_are_years(self):
        dates = load_reference_easter_dates()
        assert dates[2025].isoformat() == "2025-04-20"
        for year, d in dates.items():
            assert d.year == year

    def test_church_calendar_years(self):
        calendar = load_reference_church_calendar()
        assert sorted(calendar) == [2024, 2025, 2026]
        assert calendar[2025]["advent_start"].isoformat() == "2025-11-30"
