#!/usr/bin/env python3
"""
Generate the liturgical service calendar for one or more years.

Usage:
    python generate.py 2025
    python generate.py 2025 --through 2027
    python generate.py 2025 --output output/2025-calendar.docx
    python generate.py 2025 --yaml output/2025-services.yaml
"""

import argparse
import sys
from pathlib import Path

import yaml

from liturgy.config import LOG_LEVEL
from liturgy.document.builder import ScheduleBuilder
from liturgy.errors import LiturgicalCalendarError
from liturgy.logging_config import setup_logging
from liturgy.schedule.generator import (
    YearGenerationFailure,
    generate_services_for_year,
    generate_services_for_years,
)


def _print_summary(calendar):
    meta = calendar.metadata
    status = "valid" if calendar.validated else "NOT VALID"
    print(f"  {calendar.year}: {meta.total_services} services "
          f"({meta.regular_sundays} Sundays, {meta.special_weekdays} weekdays), {status}")
    easter = calendar.key_dates.get("easter")
    if easter:
        print(f"    Easter: {easter.strftime('%B %-d, %Y')}")
    for error in calendar.validation_errors:
        print(f"    Error: {error}")
    for warning in calendar.validation_warnings:
        print(f"    Warning: {warning}")


def main():
    parser = argparse.ArgumentParser(
        description="Generate the liturgical service calendar for a year")
    parser.add_argument("year", type=int,
                        help="First (or only) year to generate, e.g. 2025")
    parser.add_argument("--through", type=int,
                        help="Generate every year from YEAR through this year")
    parser.add_argument("--output", "-o",
                        help="Write a .docx schedule (single year only)")
    parser.add_argument("--yaml",
                        help="Write the generated calendar(s) as YAML")
    parser.add_argument("--log-level", default=LOG_LEVEL,
                        help="Logging level (default: %(default)s)")
    args = parser.parse_args()

    setup_logging(args.log_level)

    if args.through is not None:
        if args.output:
            print("Error: --output can only be used with a single year.")
            sys.exit(1)
        print(f"Generating service calendars for {args.year}-{args.through}...")
        results = generate_services_for_years(args.year, args.through)
    else:
        print(f"Generating service calendar for {args.year}...")
        try:
            results = [generate_services_for_year(args.year)]
        except LiturgicalCalendarError as e:
            print(f"Error: {e}")
            sys.exit(1)

    failed = False
    for result in results:
        if isinstance(result, YearGenerationFailure):
            print(f"  {result.year}: FAILED ({result.error})")
            failed = True
        else:
            _print_summary(result)

    if args.yaml:
        yaml_path = Path(args.yaml)
        yaml_path.parent.mkdir(parents=True, exist_ok=True)
        with open(yaml_path, "w", encoding="utf-8") as f:
            yaml.safe_dump([r.to_dict() for r in results], f,
                           sort_keys=False, allow_unicode=True)
        print(f"\nCalendar data saved to: {yaml_path}")

    if args.output:
        calendar = results[0]
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        ScheduleBuilder(calendar).build().save(str(output_path))
        print(f"\nSchedule saved to: {output_path}")

    if failed:
        sys.exit(1)


if __name__ == "__main__":
    main()
