#!/usr/bin/env python3
"""
Cross-check the calendar calculator against published dates.

Three passes:
  1. Easter for every year in liturgy/data/reference_dates.yaml
  2. Key dates from the published 2024-2026 church calendar
  3. Easter plausibility (March 22 - April 25) for every year 1970-2100

Prints a PASS/FAIL line per check and exits 1 if anything failed.

Usage:
    python tools/validate_calendar.py
    python tools/validate_calendar.py --quiet   (only failures and the summary)
"""

import argparse
import sys
from dataclasses import dataclass
from datetime import date

from liturgy.config import DATE_YEAR_RANGE
from liturgy.data.loader import load_reference_church_calendar, load_reference_easter_dates
from liturgy.logic.cache import CalculationCache
from liturgy.logic.feasts import movable_dates
from liturgy.logic.validation import validate_easter_date


@dataclass
class CheckResult:
    description: str
    calculated: date
    expected: date

    @property
    def passed(self) -> bool:
        return self.calculated == self.expected


# reference_dates.yaml name -> MovableDates attribute
_KEY_DATE_FIELDS = {
    "easter": "easter",
    "ash_wednesday": "ash_wednesday",
    "transfiguration": "transfiguration",
    "palm_sunday": "palm_sunday",
    "maundy_thursday": "maundy_thursday",
    "good_friday": "good_friday",
    "pentecost": "pentecost",
    "trinity": "trinity_sunday",
    "baptism_of_our_lord": "baptism_of_our_lord",
    "reformation_sunday": "reformation_sunday",
    "all_saints_day": "all_saints_sunday",
    "christ_the_king": "christ_the_king",
    "thanksgiving": "thanksgiving",
    "advent_start": "advent_start",
}


def check_published_easter(cache: CalculationCache) -> list[CheckResult]:
    results = []
    for year, expected in sorted(load_reference_easter_dates().items()):
        calculated = movable_dates(year, cache).easter
        results.append(CheckResult(f"Easter {year}", calculated, expected))
    return results


def check_church_calendar(cache: CalculationCache) -> list[CheckResult]:
    results = []
    for year, entries in sorted(load_reference_church_calendar().items()):
        key = movable_dates(year, cache)
        for name, expected in entries.items():
            calculated = getattr(key, _KEY_DATE_FIELDS[name])
            label = name.replace("_", " ").title()
            results.append(CheckResult(f"{label} {year}", calculated, expected))
    return results


def check_easter_plausibility(cache: CalculationCache) -> list[str]:
    """Return a failure message for every year whose Easter is out of range."""
    low, high = DATE_YEAR_RANGE
    failures = []
    for year in range(low, high + 1):
        check = validate_easter_date(year, cache)
        if not check.is_valid:
            failures.append(check.message)
    return failures


def _fmt(d: date) -> str:
    return f"{d.month}/{d.day}/{d.year}"


def _report(title: str, results: list[CheckResult], quiet: bool):
    print(title)
    print("-" * 80)
    for r in results:
        if r.passed and quiet:
            continue
        status = "PASS" if r.passed else "FAIL"
        print(f"{status}: {r.description}")
        print(f"   Calculated: {_fmt(r.calculated)}, Published: {_fmt(r.expected)}")
        if not r.passed:
            print(f"   Difference: {abs((r.calculated - r.expected).days)} days")
    print()


def main():
    parser = argparse.ArgumentParser(description="Cross-check calendar dates")
    parser.add_argument("--quiet", action="store_true",
                        help="Only print failures and the summary")
    args = parser.parse_args()

    cache = CalculationCache()

    print("=" * 80)
    print("LITURGICAL CALENDAR VALIDATION")
    print("=" * 80)
    print()

    easter_results = check_published_easter(cache)
    _report("EASTER (published tables)", easter_results, args.quiet)

    calendar_results = check_church_calendar(cache)
    _report("KEY DATES (published church calendar)", calendar_results, args.quiet)

    low, high = DATE_YEAR_RANGE
    print(f"EASTER PLAUSIBILITY {low}-{high}")
    print("-" * 80)
    implausible = check_easter_plausibility(cache)
    for message in implausible:
        print(f"FAIL: {message}")
    if not implausible:
        print(f"PASS: all {high - low + 1} years fall between March 22 and April 25")
    print()

    all_results = easter_results + calendar_results
    failed = [r for r in all_results if not r.passed]
    print("=" * 80)
    print(f"SUMMARY: {len(all_results) - len(failed)} passed, "
          f"{len(failed) + len(implausible)} failed")
    print("=" * 80)

    if failed or implausible:
        sys.exit(1)


if __name__ == "__main__":
    main()
