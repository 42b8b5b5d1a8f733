import asyncio
import json
import logging
from typing import Any

import httpx
import pytest

from app.components.telegram.telegram_bot_client import (
    TelegramApiError,
    TelegramBotClient,
)

TOKEN = "123:ABC"


class RecordingTransport(httpx.MockTransport):
    def __init__(self, body: dict[str, Any], status_code: int = 200) -> None:
        self.body = body
        self.status_code = status_code
        self.requests: list[httpx.Request] = []
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json=self.body)

    def last_payload(self) -> dict[str, Any]:
        return json.loads(self.requests[-1].content)


def _client(transport: httpx.MockTransport) -> TelegramBotClient:
    return TelegramBotClient(
        token=TOKEN,
        logger=logging.getLogger("TelegramBotClientTest"),
        http_client=httpx.AsyncClient(transport=transport),
    )


def test_requires_token() -> None:
    with pytest.raises(ValueError):
        TelegramBotClient(token="", logger=logging.getLogger("TelegramBotClientTest"))


def test_build_file_url_uses_bot_token() -> None:
    client = _client(RecordingTransport({"ok": True}))

    assert (
        client.build_file_url("photos/file_1.jpg")
        == "https://api.telegram.org/file/bot123:ABC/photos/file_1.jpg"
    )


def test_get_file_returns_remote_file() -> None:
    transport = RecordingTransport(
        {
            "ok": True,
            "result": {
                "file_id": "b",
                "file_unique_id": "u",
                "file_path": "img/large.png",
            },
        }
    )
    client = _client(transport)

    remote_file = asyncio.run(client.get_file("b"))

    assert remote_file["file_path"] == "img/large.png"
    assert transport.requests[-1].url.path == "/bot123:ABC/getFile"
    assert transport.last_payload() == {"file_id": "b"}


def test_api_error_is_raised() -> None:
    transport = RecordingTransport(
        {"ok": False, "error_code": 400, "description": "Bad Request: file is too big"},
        status_code=400,
    )
    client = _client(transport)

    with pytest.raises(TelegramApiError) as exc_info:
        asyncio.run(client.get_file("huge"))

    assert exc_info.value.method == "getFile"
    assert exc_info.value.error_code == 400
    assert "file is too big" in exc_info.value.description


def test_get_updates_sends_offset_and_timeout() -> None:
    transport = RecordingTransport(
        {"ok": True, "result": [{"update_id": 3, "message": {"message_id": 1}}]}
    )
    client = _client(transport)

    updates = asyncio.run(client.get_updates(offset=3, timeout=25))

    assert updates[0]["update_id"] == 3
    payload = transport.last_payload()
    assert payload["offset"] == 3
    assert payload["timeout"] == 25
    assert payload["allowed_updates"] == ["message"]


def test_send_message_posts_chat_and_text() -> None:
    transport = RecordingTransport({"ok": True, "result": {"message_id": 9}})
    client = _client(transport)

    asyncio.run(client.send_message(42, "hi there"))

    assert transport.requests[-1].url.path.endswith("/sendMessage")
    assert transport.last_payload() == {"chat_id": 42, "text": "hi there"}


def test_send_chat_action_defaults_to_typing() -> None:
    transport = RecordingTransport({"ok": True, "result": True})
    client = _client(transport)

    asyncio.run(client.send_chat_action(42))

    assert transport.last_payload() == {"chat_id": 42, "action": "typing"}


def test_close_leaves_injected_client_open() -> None:
    http_client = httpx.AsyncClient(transport=RecordingTransport({"ok": True}))
    client = TelegramBotClient(
        token=TOKEN,
        logger=logging.getLogger("TelegramBotClientTest"),
        http_client=http_client,
    )

    asyncio.run(client.close())

    assert not http_client.is_closed
