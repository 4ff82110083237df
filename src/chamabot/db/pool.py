"""Async Postgres connection pool for the member store."""

from __future__ import annotations

from psycopg_pool import AsyncConnectionPool

from chamabot.db.session import ensure_utc


def create_pool(database_url: str, *, max_size: int = 10, timeout: float = 30.0) -> AsyncConnectionPool:
    """Create an unopened pool whose connections run in UTC.

    Call `await pool.open()` at startup.
    """

    return AsyncConnectionPool(
        conninfo=database_url,
        min_size=1,
        max_size=max_size,
        timeout=timeout,
        open=False,
        configure=ensure_utc,
    )
