"""UTC session helpers for async pool connections and the sync migrations connection.

Join timestamps are stored as `TIMESTAMPTZ` and read back as aware datetimes; every session is locked
to UTC so what the store returns is identical to what the ledger wrote.
"""

from __future__ import annotations

import psycopg
from psycopg import AsyncConnection

_SET_UTC = "SET TIME ZONE 'UTC'"


async def ensure_utc(conn: AsyncConnection) -> None:
    """Pool `configure` hook: set the session timezone to UTC."""

    await conn.execute(_SET_UTC, prepare=False)
    # `SET` starts a transaction when autocommit is disabled; commit so the pool doesn't see INTRANS.
    await conn.commit()


def connect_utc(database_url: str) -> psycopg.Connection:
    """Open a synchronous connection with the session timezone set to UTC."""

    conn = psycopg.connect(database_url)
    conn.execute(_SET_UTC, prepare=False)
    return conn
