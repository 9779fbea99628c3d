"""
Calendar-wide constants and configuration for the liturgical service calendar.
"""

import os

# Year windows (inclusive).
# DATE_YEAR_RANGE bounds any date the calendar will reason about;
# SCHEDULE_YEAR_RANGE bounds the years a service schedule can be generated for.
DATE_YEAR_RANGE = (1970, 2100)
SCHEDULE_YEAR_RANGE = (2024, 2100)

# Two-digit years below the pivot are 20xx, the rest 19xx ("49" -> 2049, "50" -> 1950)
TWO_DIGIT_YEAR_PIVOT = 50

# Canonical bounds for Gregorian Easter, as (month, day)
EASTER_EARLIEST = (3, 22)
EASTER_LATEST = (4, 25)

# Easter-relative offsets in days
ASH_WEDNESDAY_OFFSET = -46
PALM_SUNDAY_OFFSET = -7
MAUNDY_THURSDAY_OFFSET = -3
GOOD_FRIDAY_OFFSET = -2
ASCENSION_OFFSET = 39
PENTECOST_OFFSET = 49
TRINITY_AFTER_PENTECOST = 7

# Service schedule checks
MAX_SERVICE_GAP_DAYS = 14
MIN_SERVICES_PER_YEAR = 52
LENTEN_MIDWEEK_LIMIT = 5

# Bumped whenever generated schedules would change for the same input year
ALGORITHM_VERSION = "1.0.0"

# Logging
LOG_LEVEL = os.environ.get("LITURGY_LOG_LEVEL", "INFO")

# Schedule document (letter size, portrait)
PAGE_WIDTH_INCHES = 8.5
PAGE_HEIGHT_INCHES = 11.0
MARGIN_INCHES = 0.75

FONT_BODY = "Adobe Garamond Pro"
FONT_HEADING = "Gill Sans Nova SemiBold"
FONT_HEADING2 = "Gill Sans Nova Medium"
FONT_TABLE = "Gill Sans Nova Light"

CROSS_SYMBOL = "✠"  # Maltese cross
