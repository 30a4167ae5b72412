"""PostgreSQL implementation of the transaction boundary."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession

from agora.domain.repository import TransactionManager


class PostgresTransactionManager(TransactionManager):
    """Atomic blocks on the request session.

    The outermost ``atomic()`` block begins a real transaction and commits
    it when the block exits, so a unit of work is durable before the
    service returns and a failed COMMIT surfaces inside the caller's retry.
    Blocks opened while a transaction is already running are SAVEPOINTs,
    released on success and rolled back on error.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @asynccontextmanager
    async def atomic(self) -> AsyncIterator[None]:
        if self.session.in_transaction():
            async with self.session.begin_nested():
                yield
        else:
            async with self.session.begin():
                yield
