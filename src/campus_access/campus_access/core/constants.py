"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

SESSION_TTL_HOURS = 24
DEFAULT_PAGE_LIMIT = 50
MAX_PAGE_LIMIT = 500

DEFAULT_LOCATION = "Unknown"
UNKNOWN_DEVICE_LOCATION = "Unknown Device"
WEB_CLIENT_DEVICE_ID = "WEB_CLIENT"
