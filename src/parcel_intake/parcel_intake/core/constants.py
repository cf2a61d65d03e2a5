"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_DAYS = 7
DEFAULT_DOUBLE_SUBMIT_WINDOW_SECONDS = 1.0

DATE_INPUT_FORMAT = "%Y-%m-%d"
TIME_DISPLAY_FORMAT = "%H:%M:%S"
EMPTY_PLACEHOLDER = "—"
