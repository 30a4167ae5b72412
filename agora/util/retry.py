"""Bounded retry with exponential backoff for storage operations.

Used for errors that are expected to go away when the operation is simply
run again: uniqueness races resolved by another writer, deadlocks,
serialization failures and dropped connections.
"""

import asyncio
import random
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import TypeVar

import logfire
from sqlalchemy.exc import DBAPIError, OperationalError, PendingRollbackError

from agora.util.error import RetryExhaustedError

T = TypeVar("T")

# serialization_failure, deadlock_detected
TRANSIENT_SQLSTATES = frozenset({"40001", "40P01"})


def is_transient_storage_error(error: BaseException) -> bool:
    """Check whether a database error is worth retrying.

    Args:
        error: Exception raised by SQLAlchemy

    Returns:
        True for connection loss, deadlocks, serialization failures and
        sessions left needing a rollback by a failed flush or commit
    """
    if isinstance(error, (OperationalError, PendingRollbackError)):
        return True
    if isinstance(error, DBAPIError):
        if error.connection_invalidated:
            return True
        sqlstate = getattr(error.orig, "sqlstate", None) or getattr(
            error.orig, "pgcode", None
        )
        return sqlstate in TRANSIENT_SQLSTATES
    return False


@dataclass
class RetryConfig:
    """Configuration for retry behavior.

    Attributes:
        max_retries: Retries after the first attempt
        base_delay: Delay before the first retry in seconds
        max_delay: Upper bound for any single delay in seconds
        exponential_base: Growth factor between retries
        jitter: Whether to randomize delays
        retryable_exceptions: Exception types that are always retried
        retryable: Extra predicate for errors outside retryable_exceptions
    """

    max_retries: int = 3
    base_delay: float = 0.05
    max_delay: float = 1.0
    exponential_base: float = 2.0
    jitter: bool = True
    retryable_exceptions: tuple[type[Exception], ...] = ()
    retryable: Callable[[BaseException], bool] = field(
        default=is_transient_storage_error
    )

    def calculate_delay(self, attempt: int) -> float:
        """Calculate delay for a given attempt number.

        Args:
            attempt: The attempt number (0-indexed)

        Returns:
            Delay in seconds
        """
        delay = min(
            self.base_delay * (self.exponential_base**attempt),
            self.max_delay,
        )
        if self.jitter:
            delay = delay * (0.5 + random.random())
        return delay

    def should_retry(self, error: Exception) -> bool:
        """Check whether an error is retryable under this config."""
        return isinstance(error, self.retryable_exceptions) or self.retryable(error)


async def retry_async(
    operation: Callable[[], Awaitable[T]],
    config: RetryConfig,
    name: str,
) -> T:
    """Run an async operation, retrying retryable failures.

    Non-retryable exceptions propagate immediately.

    Args:
        operation: Zero-argument coroutine factory, called once per attempt
        config: Retry configuration
        name: Operation name for logs

    Returns:
        The operation's result

    Raises:
        RetryExhaustedError: If every attempt failed with a retryable error
    """
    attempts = config.max_retries + 1
    for attempt in range(attempts):
        try:
            return await operation()
        except Exception as e:
            if not config.should_retry(e):
                raise
            if attempt + 1 >= attempts:
                logfire.error(
                    "Retry budget exhausted",
                    operation=name,
                    attempts=attempts,
                    error_type=type(e).__name__,
                )
                raise RetryExhaustedError(name, attempts, e) from e
            delay = config.calculate_delay(attempt)
            logfire.warn(
                "Retrying operation",
                operation=name,
                attempt=attempt + 1,
                max_retries=config.max_retries,
                delay=round(delay, 3),
                error_type=type(e).__name__,
            )
            await asyncio.sleep(delay)

    # attempts >= 1, so the loop either returned or raised
    raise AssertionError("unreachable")
