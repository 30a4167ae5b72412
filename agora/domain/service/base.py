"""Base service class for domain services."""

from collections.abc import Awaitable, Callable
from typing import TypeVar

from agora.config import KarmaSettings
from agora.domain.error import ConflictError, StorageUnavailableError
from agora.domain.repository import TransactionManager
from agora.util.error import RetryExhaustedError
from agora.util.retry import RetryConfig, retry_async

T = TypeVar("T")


class Service:
    """Base class for all domain services.

    Domain services contain business logic that doesn't naturally belong
    to a single entity or spans multiple entities/aggregates.
    """

    pass


def retry_config_for(
    settings: KarmaSettings, retry_conflicts: bool = True
) -> RetryConfig:
    """Build the retry policy for karma engine storage work.

    Args:
        settings: Karma settings with the retry budget
        retry_conflicts: Whether ConflictError is retried in addition to
            transient storage errors

    Returns:
        Retry configuration
    """
    return RetryConfig(
        max_retries=settings.max_retries,
        base_delay=settings.retry_base_delay,
        max_delay=settings.retry_max_delay,
        retryable_exceptions=(ConflictError,) if retry_conflicts else (),
    )


async def run_in_transaction(
    transactions: TransactionManager,
    work: Callable[[], Awaitable[T]],
    retry_config: RetryConfig,
    name: str,
) -> T:
    """Run work as one atomic unit, retrying the whole unit on retryable errors.

    Each attempt runs in a fresh atomic block, so a failed attempt leaves
    nothing behind before the next one starts.

    Args:
        transactions: Transaction boundary
        work: Zero-argument coroutine factory doing the repository calls
        retry_config: Retry policy
        name: Operation name for logs and errors

    Returns:
        Result of the successful attempt

    Raises:
        StorageUnavailableError: If the retry budget was exhausted
    """

    async def attempt() -> T:
        async with transactions.atomic():
            return await work()

    try:
        return await retry_async(attempt, retry_config, name)
    except RetryExhaustedError as e:
        raise StorageUnavailableError(name, e.attempts) from e
