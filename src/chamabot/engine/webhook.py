"""Remote reply engine (feature-flagged).

The webhook owns the whole conversation: it receives `{message, phone, name}` and must answer with a
JSON object holding a non-empty `reply` string. Nothing is classified or stored locally.
"""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

logger = logging.getLogger(__name__)


class WebhookError(RuntimeError):
    """Raised when the webhook cannot be reached or returns an unusable response."""


@dataclass(frozen=True)
class WebhookConfig:
    """Where and how long to wait for the remote reply service."""

    url: str
    timeout_s: float = 15.0


def _parse_reply(body: bytes) -> str:
    try:
        decoded: Any = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise WebhookError("Webhook did not return valid JSON") from exc

    reply = decoded.get("reply") if isinstance(decoded, dict) else None
    if not isinstance(reply, str) or not reply.strip():
        raise WebhookError("Webhook response has no reply text")
    return reply


def post_message(
        message: str,
        *,
        phone: str,
        name: str | None,
        config: WebhookConfig,
) -> str:
    """POST one message to the webhook and return its reply (blocking)."""

    payload = {"message": message, "phone": phone, "name": name or ""}
    req = Request(
        config.url,
        method="POST",
        headers={"Content-Type": "application/json", "Accept": "application/json"},
        data=json.dumps(payload).encode(),
    )

    try:
        with urlopen(req, timeout=config.timeout_s) as resp:  # noqa: S310 (explicit, configured endpoint)
            body = resp.read()
    except HTTPError as exc:
        raise WebhookError(f"Webhook HTTP error: {exc.code}") from exc
    except (URLError, TimeoutError) as exc:
        raise WebhookError("Webhook connection error") from exc

    return _parse_reply(body)


class WebhookReplyEngine:
    """`ReplyEngine` that forwards every message to a remote webhook."""

    name = "webhook"

    def __init__(self, config: WebhookConfig) -> None:
        self._config = config

    async def reply(self, key: str, text: str, *, name: str | None = None) -> str:
        return await asyncio.to_thread(
            post_message,
            text,
            phone=key,
            name=name,
            config=self._config,
        )
