"""Domain-specific exceptions for the back-office core.

This module defines custom exceptions that are part of the public API.
All exceptions inherit from BackofficeError for easy catching.
"""


class BackofficeError(Exception):
    """Base exception for all back-office core errors.

    This is the base class for all domain-specific exceptions in the package.
    Users can catch this exception to handle any back-office error.
    """

    pass


class ConfigError(BackofficeError):
    """Raised when there is a configuration error.

    This exception is raised when:
    - Invalid configuration values are provided
    - Required configuration is missing
    - Environment variables cannot be parsed
    """

    pass


class ValidationError(BackofficeError):
    """Raised when business input is rejected before it reaches a record."""

    pass


class AmountParseError(ValidationError, ValueError):
    """Raised when a monetary or count input cannot be parsed.

    This exception is raised when:
    - The input is empty or only whitespace
    - The input is not a number once currency symbols are stripped
    - The input is NaN or infinite
    """

    pass


class InvalidAmountError(ValidationError):
    """Raised when a transaction or payment amount is not strictly positive."""

    pass


class ShiftStateError(BackofficeError):
    """Raised when a cash or inventory shift lifecycle rule is violated.

    This exception is raised when:
    - More than one shift is OPEN in the loaded data
    - A transition is attempted on a shift in the wrong status
    """

    pass


class ShiftAlreadyOpenError(ShiftStateError):
    """Raised when opening a shift while another one is still OPEN."""

    pass


class NoOpenShiftError(ShiftStateError):
    """Raised when an operation needs an OPEN shift and there is none."""

    pass


class ShiftClosedError(ShiftStateError):
    """Raised when mutating a shift that is already CLOSED."""

    pass


class TaskStateError(BackofficeError):
    """Raised when a task status change is not allowed.

    This exception is raised when:
    - A checklist task is completed or skipped while not PENDING
    - An admin task skips a step of PENDING, IN_PROGRESS, REVIEW, DONE
    - The person who finished an admin task tries to verify it
    """

    pass


class NotFoundError(BackofficeError):
    """Raised when a record id does not exist in a collection."""

    pass


class StorageError(BackofficeError):
    """Raised when a key-value store cannot load or save a collection."""

    pass


class RemoteStoreError(StorageError):
    """Raised when the remote key-value store fails.

    This exception is raised when:
    - The HTTP request fails or times out
    - The remote returns an error status
    - The response body is not the expected JSON shape

    Attributes:
        critical: True when retrying is pointless (missing table, forbidden
            key) and remote sync should be disabled.
    """

    def __init__(self, message: str, critical: bool = False) -> None:
        super().__init__(message)
        self.critical = critical
