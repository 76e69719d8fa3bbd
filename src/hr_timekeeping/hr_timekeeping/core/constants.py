"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

API_PREFIX = "/api/v1"

DATE_FORMAT = "%Y-%m-%d"

# Column widths in database/schema.sql
MAX_REASON_LENGTH = 500
MAX_SHIFT_LABEL_LENGTH = 100
