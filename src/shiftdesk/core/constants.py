"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_DAYS = 7
DEFAULT_LIST_LIMIT = 200
DEFAULT_PENDING_LIMIT = 500

# Python's date.weekday(): Monday=0 ... Sunday=6. The work week runs Sunday
# through Thursday, so Friday and Saturday are the weekend.
WEEKEND_WEEKDAYS = frozenset({4, 5})

ISO_DATE_FORMAT = "%Y-%m-%d"

MONTH_LABELS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
