"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

WEEK_DAYS = 7
DEFAULT_REPORT_DAYS = 7
DEFAULT_BREAK_MINUTES = 60
DEFAULT_LATE_THRESHOLD_MINUTES = 15
UNKNOWN_EMPLOYEE = "Unknown"
IN_PROGRESS_LABEL = "In Progress"
