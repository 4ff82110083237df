"""Process-local member store.

Members are kept as serialized JSON blobs, the same shape a browser key-value store would hold, so
every load returns a fresh copy and nothing leaks between keys.
"""

from __future__ import annotations

from chamabot.ledger.models import Member


class InMemoryMemberStore:
    """`MemberStore` backed by a dict of JSON strings."""

    def __init__(self, initial: dict[str, Member] | None = None) -> None:
        self._blobs: dict[str, str] = {
            key: member.to_json() for key, member in (initial or {}).items()
        }

    async def load(self, key: str) -> Member | None:
        blob = self._blobs.get(key)
        if blob is None:
            return None
        return Member.from_json(blob)

    async def save(self, key: str, member: Member) -> None:
        self._blobs[key] = member.to_json()

    def __len__(self) -> int:
        return len(self._blobs)
