"""Application composition root.

This module wires together configuration, the member store and the reply engine for the bot runtime.
"""

from __future__ import annotations

from dataclasses import dataclass

from psycopg_pool import AsyncConnectionPool

from chamabot.config.settings import Settings
from chamabot.db.pool import create_pool
from chamabot.engine.base import ReplyEngine
from chamabot.engine.service import ConversationService
from chamabot.engine.webhook import WebhookConfig, WebhookReplyEngine
from chamabot.storage.base import MemberStore
from chamabot.storage.memory import InMemoryMemberStore
from chamabot.storage.postgres import PostgresMemberStore


@dataclass(frozen=True)
class App:
    """Shared application dependencies for handlers."""

    settings: Settings
    engine: ReplyEngine
    service: ConversationService | None = None
    pool: AsyncConnectionPool | None = None


def create_store(settings: Settings) -> tuple[MemberStore, AsyncConnectionPool | None]:
    """Pick the member store: PostgreSQL when `DATABASE_URL` is set, in-memory otherwise."""

    if settings.database_url:
        pool = create_pool(settings.database_url, max_size=10)
        return PostgresMemberStore(pool), pool
    return InMemoryMemberStore(), None


def create_app(settings: Settings) -> App:
    """Create the application container.

    Note:
        A returned DB pool is not opened. Call `await app.pool.open()` at startup.
    """

    if settings.reply_engine == "webhook" and settings.webhook_url is not None:
        engine = WebhookReplyEngine(
            WebhookConfig(url=str(settings.webhook_url), timeout_s=settings.webhook_timeout_s)
        )
        return App(settings=settings, engine=engine)

    store, pool = create_store(settings)
    service = ConversationService(store, currency=settings.currency)
    return App(settings=settings, engine=service, service=service, pool=pool)
