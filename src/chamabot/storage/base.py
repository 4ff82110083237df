"""Member store interface.

A store maps a conversation key (a Telegram user id, a phone number) to at most one `Member`.
Values must round-trip exactly: amounts and the join timestamp come back unchanged.
"""

from __future__ import annotations

from typing import Protocol

from chamabot.ledger.models import Member


class MemberStore(Protocol):
    """Async key-value store for members."""

    async def load(self, key: str) -> Member | None:
        """Return the member stored under `key`, or `None`."""

    async def save(self, key: str, member: Member) -> None:
        """Store `member` under `key`, replacing any previous value."""
