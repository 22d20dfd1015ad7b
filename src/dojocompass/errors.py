class DojoCompassError(Exception):
    """Base exception for attendance engine errors."""


class InvalidDate(DojoCompassError, ValueError):
    """Raised when a Shamsi date is malformed or out of range."""

    def __init__(self, value, reason: str = "invalid Shamsi date"):
        super().__init__(f"{reason}: {value!r}")
        self.value = value
        self.reason = reason


class InvalidAnchor(DojoCompassError):
    """Raised when the configured report start date cannot be parsed."""


class SyncFailure(DojoCompassError):
    """Raised when the persistence collaborator fails a read or write."""

    def __init__(self, operation: str, cause: Exception = None):
        msg = f"{operation} failed"
        if cause is not None:
            msg = f"{msg}: {cause}"
        super().__init__(msg)
        self.operation = operation
        self.cause = cause
