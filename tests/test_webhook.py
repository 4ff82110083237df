"""Tests for the remote webhook reply engine."""

from __future__ import annotations

import json
from typing import Any
from urllib.error import HTTPError, URLError

import pytest

from chamabot.engine.webhook import WebhookConfig, WebhookError, WebhookReplyEngine, post_message

_CONFIG = WebhookConfig(url="http://localhost:5000/chat", timeout_s=2.0)


class _FakeResponse:
    def __init__(self, body: bytes) -> None:
        self._body = body

    def read(self) -> bytes:
        return self._body

    def __enter__(self) -> _FakeResponse:
        return self

    def __exit__(self, *_exc: object) -> None:
        return None


def _patch_urlopen(monkeypatch: pytest.MonkeyPatch, body: bytes, captured: dict[str, Any]) -> None:
    def _fake_urlopen(req: Any, timeout: float) -> _FakeResponse:
        captured["url"] = req.full_url
        captured["method"] = req.get_method()
        captured["payload"] = json.loads(req.data)
        captured["timeout"] = timeout
        return _FakeResponse(body)

    monkeypatch.setattr("chamabot.engine.webhook.urlopen", _fake_urlopen)


def test_post_message_sends_message_phone_and_name(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, Any] = {}
    _patch_urlopen(monkeypatch, b'{"reply": "Hi Jane"}', captured)

    reply = post_message("hello", phone="254700000001", name="Jane", config=_CONFIG)

    assert reply == "Hi Jane"
    assert captured["url"] == "http://localhost:5000/chat"
    assert captured["method"] == "POST"
    assert captured["payload"] == {"message": "hello", "phone": "254700000001", "name": "Jane"}
    assert captured["timeout"] == 2.0


@pytest.mark.parametrize("body", [b"not json", b"[]", b"{}", b'{"reply": ""}', b'{"reply": 5}'])
def test_unusable_response_raises(monkeypatch: pytest.MonkeyPatch, body: bytes) -> None:
    _patch_urlopen(monkeypatch, body, {})
    with pytest.raises(WebhookError):
        post_message("hello", phone="1", name=None, config=_CONFIG)


@pytest.mark.parametrize(
    "error",
    [
        HTTPError("http://localhost:5000/chat", 502, "Bad Gateway", {}, None),  # type: ignore[arg-type]
        URLError("connection refused"),
        TimeoutError(),
    ],
)
def test_transport_errors_raise_webhook_error(monkeypatch: pytest.MonkeyPatch, error: Exception) -> None:
    def _failing_urlopen(_req: Any, timeout: float) -> Any:
        raise error

    monkeypatch.setattr("chamabot.engine.webhook.urlopen", _failing_urlopen)
    with pytest.raises(WebhookError):
        post_message("hello", phone="1", name=None, config=_CONFIG)


@pytest.mark.asyncio
async def test_engine_uses_key_as_phone(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, Any] = {}
    _patch_urlopen(monkeypatch, b'{"reply": "ok"}', captured)

    engine = WebhookReplyEngine(_CONFIG)
    reply = await engine.reply("254711111111", "Balance", name=None)

    assert reply == "ok"
    assert engine.name == "webhook"
    assert captured["payload"] == {"message": "Balance", "phone": "254711111111", "name": ""}
