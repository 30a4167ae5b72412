"""Utility layer errors."""


class UtilError(Exception):
    """Base utility error."""

    pass


class ConfigurationError(UtilError):
    """Configuration error."""

    pass


class DependencyInjectionError(UtilError):
    """Dependency injection error."""

    pass


class RetryExhaustedError(UtilError):
    """An operation kept failing with retryable errors."""

    def __init__(self, operation: str, attempts: int, last_error: Exception):
        self.operation = operation
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(
            f"{operation} failed after {attempts} attempts: {type(last_error).__name__}"
        )
