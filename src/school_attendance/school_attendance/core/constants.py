"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

RATE_DECIMALS = 2
DATE_FORMAT = "%Y-%m-%d"

# MySQL ER_DUP_ENTRY
MYSQL_DUPLICATE_KEY_ERRNO = 1062
