"""PostgreSQL member store.

Members live in the `chama_members` table (see `db/migrations/`). Amounts use `NUMERIC` and the
join time `TIMESTAMPTZ`, which psycopg maps to `Decimal` and aware `datetime` without loss.
"""

from __future__ import annotations

from psycopg_pool import AsyncConnectionPool

from chamabot.ledger.models import Member

_SELECT_MEMBER = """
                 SELECT name,
                        monthly_goal,
                        current_period_contributions,
                        total_contributions,
                        joined_at
                 FROM chama_members
                 WHERE member_key = %s
                 """

_UPSERT_MEMBER = """
                 INSERT INTO chama_members (member_key,
                                            name,
                                            monthly_goal,
                                            current_period_contributions,
                                            total_contributions,
                                            joined_at)
                 VALUES (%s, %s, %s, %s, %s, %s)
                 ON CONFLICT (member_key) DO UPDATE
                     SET name                         = EXCLUDED.name,
                         monthly_goal                 = EXCLUDED.monthly_goal,
                         current_period_contributions = EXCLUDED.current_period_contributions,
                         total_contributions          = EXCLUDED.total_contributions,
                         joined_at                    = EXCLUDED.joined_at,
                         updated_at                   = NOW()
                 """


class PostgresMemberStore:
    """`MemberStore` backed by an async psycopg pool.

    DB errors are not swallowed; the bot handler decides how to answer them.
    """

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool

    async def load(self, key: str) -> Member | None:
        async with self._pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(_SELECT_MEMBER, (key,))
                row = await cur.fetchone()
            await conn.commit()

        if not row:
            return None

        name, goal, current, total, joined_at = row
        return Member(
            name=name,
            monthly_goal=goal,
            current_period_contributions=current,
            total_contributions=total,
            joined_at=joined_at,
        )

    async def save(self, key: str, member: Member) -> None:
        async with self._pool.connection() as conn:
            await conn.execute(
                _UPSERT_MEMBER,
                (
                    key,
                    member.name,
                    member.monthly_goal,
                    member.current_period_contributions,
                    member.total_contributions,
                    member.joined_at,
                ),
            )
            await conn.commit()
