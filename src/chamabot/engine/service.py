"""Local reply engine: classify, apply to the member's ledger, persist, format.

One message is processed at a time per conversation key. Messages for different keys run
concurrently and never share ledger state.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from datetime import datetime

from chamabot.engine.dispatcher import DispatchResult, dispatch
from chamabot.intent.classifier import classify
from chamabot.intent.schema import Intent
from chamabot.ledger.ledger import Ledger
from chamabot.ledger.models import Member, utc_now
from chamabot.replies.formatter import format_reply
from chamabot.replies.texts import monthly_reminder
from chamabot.storage.base import MemberStore

logger = logging.getLogger(__name__)


class KeyedLocks:
    """One `asyncio.Lock` per conversation key, dropped once nobody holds or waits for it."""

    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}
        self._users: dict[str, int] = {}

    @asynccontextmanager
    async def hold(self, key: str) -> AsyncIterator[None]:
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        self._users[key] = self._users.get(key, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._users[key] -= 1
            if not self._users[key]:
                del self._users[key]
                del self._locks[key]

    def __len__(self) -> int:
        return len(self._locks)


class ConversationService:
    """`ReplyEngine` backed by the local classifier and ledger."""

    name = "local"

    def __init__(
            self,
            store: MemberStore,
            *,
            currency: str = "KES",
            clock: Callable[[], datetime] = utc_now,
            locks: KeyedLocks | None = None,
    ) -> None:
        self._store = store
        self._currency = currency
        self._clock = clock
        self._locks = locks if locks is not None else KeyedLocks()

    async def handle(self, key: str, text: str) -> tuple[Intent, DispatchResult]:
        """Classify and apply one message, saving the member if it changed."""

        async with self._locks.hold(key):
            member = await self._store.load(key)
            ledger = Ledger(member, clock=self._clock)

            intent = classify(text, has_member=ledger.has_member)
            result = dispatch(intent, ledger)

            if result.mutated and result.member is not None:
                await self._store.save(key, result.member)

        logger.debug(
            "dispatched intent=%s outcome=%s mutated=%s",
            intent.kind,
            result.outcome,
            result.mutated,
        )
        return intent, result

    async def reply(self, key: str, text: str, *, name: str | None = None) -> str:
        # The display name comes from the registration message, not the chat profile.
        intent, result = await self.handle(key, text)
        return format_reply(intent, result, currency=self._currency, today=self._clock().date())

    async def status(self, key: str) -> Member | None:
        return await self._store.load(key)

    async def reminder(self, key: str) -> str:
        """Monthly contribution reminder for the member under `key`."""

        return monthly_reminder(await self.status(key), currency=self._currency)
