from typing import Optional


class TodoAppError(Exception):
    """Base class for every error raised by todoapp."""


class ConfigurationError(TodoAppError):
    """Missing or invalid process configuration."""


class ValidationError(TodoAppError):
    """A required input field is missing or empty."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class StorageError(TodoAppError):
    """A storage round-trip failed.

    ``retryable`` tells callers whether the same request may succeed later.
    """

    retryable = False
    kind = "storage"

    def __init__(self, message: str, retryable: Optional[bool] = None):
        super().__init__(message)
        self.message = message
        if retryable is not None:
            self.retryable = retryable


class ConstraintViolation(StorageError):
    """The statement was rejected as bad input (constraint violation or invalid value)."""

    retryable = False
    kind = "constraint"


class StorageUnavailable(StorageError):
    """The store could not be reached or dropped the connection."""

    retryable = True
    kind = "unavailable"


class StorageTimeout(StorageUnavailable):
    kind = "timeout"
