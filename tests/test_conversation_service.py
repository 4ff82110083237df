"""Tests for the local reply engine: load, dispatch, save and reply per conversation key."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from decimal import Decimal

import pytest

from chamabot.engine.service import ConversationService, KeyedLocks
from chamabot.ledger.models import Member
from chamabot.storage.memory import InMemoryMemberStore

_NOW = datetime(2025, 3, 7, 12, 0, tzinfo=UTC)


class _CountingStore(InMemoryMemberStore):
    def __init__(self) -> None:
        super().__init__()
        self.saves = 0

    async def save(self, key: str, member: Member) -> None:
        self.saves += 1
        await super().save(key, member)


class _YieldingStore(InMemoryMemberStore):
    """Store that suspends on every call, so concurrent messages interleave at each await."""

    async def load(self, key: str) -> Member | None:
        await asyncio.sleep(0)
        member = await super().load(key)
        await asyncio.sleep(0)
        return member

    async def save(self, key: str, member: Member) -> None:
        await asyncio.sleep(0)
        await super().save(key, member)


def _service(store: InMemoryMemberStore | None = None) -> ConversationService:
    return ConversationService(store if store is not None else InMemoryMemberStore(), clock=lambda: _NOW)


@pytest.mark.asyncio
async def test_end_to_end_register_pay_and_check_balance() -> None:
    service = _service()

    joined = await service.reply("254700000001", "Jane, 2000")
    assert "Thanks Jane" in joined

    paid = await service.reply("254700000001", "Paid 2500")
    assert "KES 2,500 received on 07/03/2025" in paid
    assert "reached your monthly goal" in paid

    member = await service.status("254700000001")
    assert member is not None
    assert member.current_period_contributions == Decimal(2500)
    assert member.total_contributions == Decimal(2500)
    assert member.joined_at == _NOW

    balance = await service.reply("254700000001", "Balance")
    assert "Progress: 125%" in balance
    assert "Goal achieved" in balance


@pytest.mark.asyncio
async def test_payment_before_registration_creates_nothing() -> None:
    store = _CountingStore()
    service = _service(store)

    reply = await service.reply("k1", "Paid 500")

    assert "Join Chama" in reply
    assert await service.status("k1") is None
    assert store.saves == 0


@pytest.mark.asyncio
async def test_only_mutations_are_saved() -> None:
    store = _CountingStore()
    service = _service(store)

    for text in ("hello", "Join Chama", "Jane, 1000", "Balance", "Paid abc", "Paid 100", "help"):
        await service.reply("k1", text)

    assert store.saves == 2


@pytest.mark.asyncio
async def test_registration_text_after_joining_is_fallback() -> None:
    service = _service()
    await service.reply("k1", "Monicah Mwanzia, 1000")

    reply = await service.reply("k1", "Monicah Mwanzia, 1000")

    assert "didn't quite understand" in reply
    member = await service.status("k1")
    assert member is not None and member.monthly_goal == Decimal(1000)


@pytest.mark.asyncio
async def test_keys_are_isolated() -> None:
    service = _service()
    await service.reply("a", "Alice, 1000")
    await service.reply("b", "Bob, 3000")
    await service.reply("a", "Paid 400")

    alice = await service.status("a")
    bob = await service.status("b")
    assert alice is not None and alice.current_period_contributions == Decimal(400)
    assert bob is not None and bob.current_period_contributions == 0


@pytest.mark.asyncio
async def test_concurrent_payments_on_one_key_are_serialized() -> None:
    store = _YieldingStore()
    locks = KeyedLocks()
    service = ConversationService(store, clock=lambda: _NOW, locks=locks)
    await service.reply("k1", "Jane, 5000")

    await asyncio.gather(*(service.reply("k1", "Paid 10") for _ in range(50)))

    member = await service.status("k1")
    assert member is not None
    assert member.current_period_contributions == Decimal(500)
    assert member.total_contributions == Decimal(500)
    assert len(locks) == 0


@pytest.mark.asyncio
async def test_reminder() -> None:
    service = _service()
    assert "Join Chama" in await service.reminder("k1")

    await service.reply("k1", "Jane, 1000")
    assert "KES 1,000 contribution by the 5th" in await service.reminder("k1")


@pytest.mark.asyncio
async def test_currency_is_configurable() -> None:
    service = ConversationService(InMemoryMemberStore(), currency="UGX", clock=lambda: _NOW)
    reply = await service.reply("k1", "Jane, 50000")
    assert "UGX 50,000" in reply


@pytest.mark.asyncio
async def test_same_key_updates_would_be_lost_without_the_lock() -> None:
    class _UnlockedLocks(KeyedLocks):
        @asynccontextmanager
        async def hold(self, key: str) -> AsyncIterator[None]:
            yield

    service = ConversationService(_YieldingStore(), clock=lambda: _NOW, locks=_UnlockedLocks())
    await service.reply("k1", "Jane, 5000")

    await asyncio.gather(*(service.reply("k1", "Paid 10") for _ in range(50)))

    member = await service.status("k1")
    assert member is not None
    assert member.current_period_contributions < Decimal(500)


@pytest.mark.asyncio
async def test_keyed_locks_serialize_and_clean_up() -> None:
    locks = KeyedLocks()
    events: list[str] = []

    async def _worker(name: str) -> None:
        async with locks.hold("k1"):
            events.append(f"{name}-in")
            await asyncio.sleep(0)
            await asyncio.sleep(0)
            events.append(f"{name}-out")

    await asyncio.gather(_worker("a"), _worker("b"), _worker("c"))

    assert events == ["a-in", "a-out", "b-in", "b-out", "c-in", "c-out"]
    assert len(locks) == 0


@pytest.mark.asyncio
async def test_lock_is_released_when_the_store_fails() -> None:
    class _FailingStore(InMemoryMemberStore):
        async def load(self, key: str) -> Member | None:
            raise RuntimeError("store down")

    locks = KeyedLocks()
    service = ConversationService(_FailingStore(), clock=lambda: _NOW, locks=locks)

    with pytest.raises(RuntimeError):
        await service.reply("k1", "Balance")
    assert len(locks) == 0


@pytest.mark.asyncio
async def test_oversized_payment_gets_format_reply_and_is_not_saved() -> None:
    store = _CountingStore()
    service = _service(store)
    await service.reply("k1", "Jane, 1000")

    reply = await service.reply("k1", "Paid 1" + "0" * 28)

    assert "Paid 500" in reply
    assert store.saves == 1
    member = await service.status("k1")
    assert member is not None and member.total_contributions == 0
    assert "Progress: 0%" in await service.reply("k1", "Balance")


@pytest.mark.asyncio
async def test_oversized_goal_gets_registration_format_reply() -> None:
    service = _service()

    reply = await service.reply("k1", "Jane, " + "9" * 30)

    assert "Full Name, Amount" in reply
    assert await service.status("k1") is None
