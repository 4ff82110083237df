"""Reply engine interface shared by the local interpreter and the webhook client."""

from __future__ import annotations

from typing import Protocol


class ReplyEngine(Protocol):
    """Turns one incoming chat message into one reply."""

    name: str

    async def reply(self, key: str, text: str, *, name: str | None = None) -> str:
        """Return the reply for `text` sent by the conversation identified by `key`."""
