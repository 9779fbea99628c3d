import pytest

from liturgy.logic.cache import CalculationCache
from liturgy.schedule.generator import generate_services_for_year


@pytest.fixture
def cache():
    """A fresh calculation cache so no test depends on another's lookups."""
    return CalculationCache()


@pytest.fixture(scope="session")
def calendar_2025():
    """The generated 2025 schedule, built once per session."""
    return generate_services_for_year(2025, CalculationCache())
