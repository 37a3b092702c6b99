"""Fixed calendar used across the suite."""
from datetime import date

# 2026-01-04 is a Sunday
SUNDAY = "2026-01-04"
MONDAY = "2026-01-05"
TUESDAY = "2026-01-06"
WEDNESDAY = "2026-01-07"
TODAY = date(2026, 1, 5)
