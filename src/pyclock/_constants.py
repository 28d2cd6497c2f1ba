"""Constants shared by the timestamp, timer and marker modules."""

YEAR_3000_UNIX_SECONDS = 32503680000
"""Raw values at or above this are read as milliseconds when no unit is given."""

# Relative-time decomposition. The divisor and the modulus differ for years
# and months; both pairs are kept as-is because they shape the output.
YEAR_DIVISOR = 31536926
YEAR_MODULUS = 31536000
MONTH_DIVISOR = 2629743
MONTH_MODULUS = 2592000
SECONDS_PER_DAY = 86400
SECONDS_PER_HOUR = 3600
SECONDS_PER_MINUTE = 60

MILLISECONDS_PER_SECOND = 1000

DATE_FORMAT = "%H:%M:%S %d-%m-%Y"
"""strftime pattern for displayed dates (always UTC)."""

TIMER_TICK_SECONDS = 0.05
"""Repaint interval of the countdown and count-up loops."""

DEFAULT_STORE_FILE_NAME = "clock.toml"
"""Marker file name, placed in the user's home directory by default."""

EVENTS_KEY = "events"

TOML_MAX_INTEGER = 2**63 - 1
"""Largest integer a TOML document can hold."""
