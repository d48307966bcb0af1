import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from psycopg_pool import AsyncConnectionPool

from website.config import POSTGRES_URL


@asynccontextmanager
async def psycopg_pool_open(url: str | None = POSTGRES_URL) -> AsyncIterator[AsyncConnectionPool | None]:
    """
    Open and close the psycopg pool.

    Yields None when no database is configured.
    """
    if not url:
        logging.info('POSTGRES_URL is not set, running without a database pool')
        yield None
        return

    pool = AsyncConnectionPool(
        url,
        min_size=1,
        max_size=16,
        open=False,
        num_workers=2,  # workers for opening new connections
    )
    async with pool:
        logging.info('Opened database pool (max_size=%d)', pool.max_size)
        yield pool
