"""Custom exceptions for NegativeGuard."""


class NegativeGuardError(Exception):
    """Base exception for all NegativeGuard errors."""

    pass


class APIError(NegativeGuardError):
    """Raised when API calls fail."""

    pass


class AuthenticationError(APIError):
    """Raised when authentication fails."""

    pass


class RateLimitError(APIError):
    """Raised when API rate limits are exceeded."""

    pass


class PlatformOperationError(APIError):
    """Raised when an enumeration or removal call against the ad platform fails.

    Not retried internally. Removals committed before the failure stay
    committed.
    """

    def __init__(self, message: str, operation: str | None = None):
        super().__init__(message)
        self.operation = operation


class ConfigurationError(NegativeGuardError):
    """Raised when configuration is invalid."""

    pass


class ValidationFailureError(NegativeGuardError):
    """Raised when the conflict regression suite does not fully pass."""

    def __init__(self, message: str, report=None):
        """Initialize validation failure.

        Args:
            message: Error message
            report: The ValidationReport that failed
        """
        super().__init__(message)
        self.report = report


class MalformedRecordError(NegativeGuardError):
    """Raised when a keyword record lacks its scope identity fields."""

    def __init__(self, message: str, missing_fields: list[str] | None = None):
        super().__init__(message)
        self.missing_fields = missing_fields or []


class ConflictDetectionError(NegativeGuardError):
    """Raised when conflict detection operations fail."""

    pass
