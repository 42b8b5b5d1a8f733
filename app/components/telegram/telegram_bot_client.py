"""
Minimal asynchronous client for the Telegram Bot HTTP API.

Covers the calls the bridge needs:
- get_me(): Verify the bot token
- get_updates(): Long-poll for new updates
- get_file(): Resolve a file_id into a downloadable file path
- send_message(): Deliver a text reply
- send_chat_action(): Show the "typing" indicator
"""

from __future__ import annotations

import logging
from typing import Any, cast

import httpx

from app.entities.message import RemoteFile, TelegramUpdate

TELEGRAM_API_BASE_URL = "https://api.telegram.org"


class TelegramApiError(Exception):
    """Raised when the Bot API answers with ``ok: false``."""

    def __init__(
        self, method: str, description: str, error_code: int | None = None
    ) -> None:
        self.method = method
        self.description = description
        self.error_code = error_code
        super().__init__(f"{method} failed ({error_code}): {description}")


class TelegramBotClient:
    def __init__(
        self,
        token: str,
        logger: logging.Logger,
        api_base_url: str = TELEGRAM_API_BASE_URL,
        request_timeout: float = 10.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        if not token:
            raise ValueError("A Telegram bot token is required")

        self._token = token
        self.logger = logger
        self.api_base_url = api_base_url.rstrip("/")
        self.request_timeout = request_timeout

        self._owns_client = http_client is None
        self._client: httpx.AsyncClient = http_client or httpx.AsyncClient(
            timeout=request_timeout
        )

    def build_file_url(self, file_path: str) -> str:
        """Download URL for a path returned by getFile."""
        return f"{self.api_base_url}/file/bot{self._token}/{file_path.lstrip('/')}"

    def _method_url(self, method: str) -> str:
        return f"{self.api_base_url}/bot{self._token}/{method}"

    async def _call(
        self,
        method: str,
        payload: dict[str, Any] | None = None,
        timeout: float | None = None,
    ) -> Any:
        response = await self._client.post(
            self._method_url(method),
            json=payload or {},
            timeout=timeout or self.request_timeout,
        )

        try:
            body = response.json()
        except ValueError:
            # Not a Bot API answer (proxy error page, etc.)
            response.raise_for_status()
            raise TelegramApiError(method, "Response is not JSON", response.status_code)

        if not body.get("ok"):
            raise TelegramApiError(
                method,
                body.get("description", "unknown error"),
                body.get("error_code", response.status_code),
            )

        return body.get("result")

    async def get_me(self) -> dict[str, Any]:
        return cast(dict[str, Any], await self._call("getMe"))

    async def get_updates(
        self, offset: int | None = None, timeout: int = 30
    ) -> list[TelegramUpdate]:
        payload: dict[str, Any] = {
            "timeout": timeout,
            "allowed_updates": ["message"],
        }
        if offset is not None:
            payload["offset"] = offset

        # The HTTP timeout must outlive the server-side long poll
        result = await self._call(
            "getUpdates", payload, timeout=timeout + self.request_timeout
        )
        return cast(list[TelegramUpdate], result or [])

    async def get_file(self, file_id: str) -> RemoteFile:
        self.logger.debug("Resolving file %s", file_id)
        return cast(RemoteFile, await self._call("getFile", {"file_id": file_id}))

    async def send_message(self, chat_id: int, text: str) -> None:
        await self._call("sendMessage", {"chat_id": chat_id, "text": text})

    async def send_chat_action(self, chat_id: int, action: str = "typing") -> None:
        await self._call("sendChatAction", {"chat_id": chat_id, "action": action})

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()
