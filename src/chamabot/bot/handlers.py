"""aiogram message handlers.

Hard contract: every incoming message produces exactly one non-empty reply. Unrecognized text gets
the fallback guidance from the reply engine; an internal error (webhook down, DB unreachable) gets a
short apology and is logged, never shown to the user.
"""

from __future__ import annotations

import logging
from time import monotonic

from aiogram import Router
from aiogram.types import Message

from chamabot.app import App
from chamabot.replies.texts import help_text, welcome_text

logger = logging.getLogger(__name__)

router = Router(name="root")

ERROR_REPLY = "😓 Sorry, something went wrong on my side. Please try again in a moment."


def _conversation_key(message: Message) -> str:
    """Identify the conversation: the sender's user id, or the chat id for anonymous senders."""

    user = message.from_user
    if user is not None:
        return str(user.id)
    return str(message.chat.id)


def _display_name(message: Message) -> str | None:
    user = message.from_user
    if user is None:
        return None
    return user.full_name or None


def _command(text: str) -> str | None:
    """Return the bare command name for `/start`, `/help@ChamaBot` style text."""

    value = text.strip()
    if not value.startswith("/"):
        return None
    head = value[1:].split(maxsplit=1)[0] if len(value) > 1 else ""
    return head.split("@", 1)[0].lower()


async def _command_reply(command: str, key: str, app: App) -> str | None:
    if command == "start":
        return welcome_text()
    if command == "help":
        return help_text()
    if command == "remind" and app.service is not None:
        return await app.service.reminder(key)
    return None


def _sanitize_reply(text: str | None) -> str:
    """Return the reply, or the apology text if it is empty."""

    value = (text or "").strip()
    return value or ERROR_REPLY


@router.message()
async def handle_message(message: Message, app: App) -> None:
    """Handle any incoming Telegram message and reply exactly once."""

    started = monotonic()
    reply_text: str | None = None
    key = "unknown"

    # noinspection PyBroadException
    try:
        key = _conversation_key(message)
        raw_text = message.text or message.caption or ""

        command = _command(raw_text)
        if command is not None:
            reply_text = await _command_reply(command, key, app)

        if reply_text is None:
            reply_text = await app.engine.reply(key, raw_text, name=_display_name(message))

        latency_ms = int((monotonic() - started) * 1000)
        logger.info(
            "handled key=%s engine=%s command=%s latency_ms=%d",
            key,
            app.engine.name,
            command,
            latency_ms,
        )
    except Exception:
        # Handler boundary: any internal error must still produce one reply, without leaking details.
        logger.exception("handler failed key=%s", key)
        reply_text = ERROR_REPLY

    await message.answer(_sanitize_reply(reply_text))
