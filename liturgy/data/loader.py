"""
Loads the YAML reference tables: liturgical seasons, feast days, and the
published dates used to cross-check the calculator.
"""

from dataclasses import dataclass
from datetime import date
from functools import lru_cache
from pathlib import Path

import yaml

from liturgy.errors import CalculationError


_DATA_DIR = Path(__file__).parent

FALLBACK_SEASON_ID = "UNKNOWN"


@dataclass(frozen=True)
class Season:
    """A named span of the church year and its display color."""
    id: str
    name: str
    color: str          # "#RRGGBB"


@dataclass(frozen=True)
class FeastDay:
    """A single-date observance that may override the season in effect."""
    id: str
    name: str
    color: str
    description: str
    season: str         # id of the Season this day places its date in


@lru_cache(maxsize=None)
def _load_yaml(relative_path: str) -> dict:
    """Load and cache a YAML file relative to the data directory."""
    full_path = _DATA_DIR / relative_path
    with open(full_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


@lru_cache(maxsize=1)
def load_seasons() -> dict[str, Season]:
    raw = _load_yaml("seasons.yaml")
    if FALLBACK_SEASON_ID not in raw:
        raise CalculationError(f"seasons.yaml has no {FALLBACK_SEASON_ID} fallback season")
    return {
        season_id: Season(id=season_id, name=entry["name"], color=entry["color"])
        for season_id, entry in raw.items()
    }


@lru_cache(maxsize=1)
def load_feast_days() -> dict[str, FeastDay]:
    """Load the feast day table, checking every day maps to a known season.

    A feast without a season would leave its dates unresolvable, so the
    table is rejected as a whole rather than discovered one date at a time.
    """
    seasons = load_seasons()
    feasts = {}
    for feast_id, entry in _load_yaml("feast_days.yaml").items():
        season_id = entry.get("season")
        if season_id is None:
            raise CalculationError(f"Feast day {feast_id} has no season mapping")
        if season_id not in seasons or season_id == FALLBACK_SEASON_ID:
            raise CalculationError(
                f"Feast day {feast_id} maps to unknown season {season_id!r}")
        feasts[feast_id] = FeastDay(
            id=feast_id,
            name=entry["name"],
            color=entry["color"],
            description=entry.get("description", ""),
            season=season_id,
        )
    return feasts


def get_season(season_id: str) -> Season:
    """Look up a season, falling back to UNKNOWN for unrecognized ids."""
    seasons = load_seasons()
    return seasons.get(season_id, seasons[FALLBACK_SEASON_ID])


def get_feast_day(feast_id: str) -> FeastDay:
    """Look up a feast day by id. Raises KeyError for an unknown id."""
    return load_feast_days()[feast_id]


def load_reference_easter_dates() -> dict[int, date]:
    """Published Easter dates, keyed by year."""
    raw = _load_yaml("reference_dates.yaml")["easter"]
    return {int(year): date.fromisoformat(value) for year, value in raw.items()}


def load_reference_church_calendar() -> dict[int, dict[str, date]]:
    """Published key dates from a church calendar, keyed by year then name."""
    raw = _load_yaml("reference_dates.yaml")["church_calendar"]
    return {
        int(year): {name: date.fromisoformat(value) for name, value in entries.items()}
        for year, entries in raw.items()
    }
