"""Exception hierarchy for timestamp, timer and marker operations."""


class ClockError(Exception):
    """Base exception for pyclock errors.

    Provides dual messaging: a short user-facing message and
    internal details for logging.
    """

    def __init__(
        self,
        user_message: str,
        internal_details: str = "",
        wrapped: Exception | None = None,
    ) -> None:
        super().__init__(user_message)
        self.user_message = user_message
        self.internal_details = internal_details or user_message
        self.wrapped = wrapped

    def internal(self) -> str:
        return self.internal_details


class InvalidNumericInputError(ClockError):
    """Raised when an argument is not a usable non-negative integer."""


class InvalidDurationFormatError(ClockError):
    """Raised when a timer duration string cannot be parsed."""


class MarkerNotFoundError(ClockError):
    """Raised when a marker position is outside the stored list."""


class StorageError(ClockError):
    """Base class for marker file failures."""


class StorageIOError(StorageError):
    """Raised when the marker file cannot be created, read or written."""


class StorageParseError(StorageError):
    """Raised when the marker file is not a valid marker document."""


# Sanitized user-facing error message constants
ERR_MSG_INVALID_NUMBER = "invalid input: expected a non-negative integer"
ERR_MSG_DATE_OUT_OF_RANGE = "timestamp is outside the displayable date range"
ERR_MSG_INVALID_DURATION = "invalid duration format (use e.g. 1h30m15s)"
ERR_MSG_MARKER_NOT_FOUND = "marker not found"
ERR_MSG_STORAGE_CREATE = "could not create marker file"
ERR_MSG_STORAGE_READ = "could not read marker file"
ERR_MSG_STORAGE_WRITE = "could not update marker file"
ERR_MSG_STORAGE_PARSE = "could not parse marker file"
