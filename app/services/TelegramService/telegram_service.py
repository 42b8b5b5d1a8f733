from __future__ import annotations

import asyncio
import logging

import httpx

from app.components.telegram.telegram_bot_client import (
    TelegramApiError,
    TelegramBotClient,
)
from app.entities.message import ReplyEnvelope, TelegramMessage, TelegramUpdate
from app.entities.result import Err, HandleResult, Ok
from app.services.ChatService.chat_service_interface import ChatServiceInterface
from app.services.ContentExtractorService.content_extractor_service_interface import (
    ContentExtractorServiceInterface,
)
from app.services.TelegramService.telegram_service_interface import (
    TelegramServiceInterface,
)

FALLBACK_MESSAGE = "Could not establish response. Please try again."


class TelegramService(TelegramServiceInterface):
    def __init__(
        self,
        telegram_client: TelegramBotClient,
        content_extractor: ContentExtractorServiceInterface,
        chat_service: ChatServiceInterface,
        logger: logging.Logger,
        poll_timeout: int = 30,
        retry_delay: float = 5.0,
    ) -> None:
        self.bot = telegram_client
        self.content_extractor = content_extractor
        self.chat_service = chat_service
        self.logger: logging.Logger = logger
        self.poll_timeout = poll_timeout
        self.retry_delay = retry_delay
        self.me: dict | None = None
        self._running = False
        self._tasks: set[asyncio.Task[None]] = set()
        self.logger.info("TelegramService initialized")

    async def start(self) -> None:
        self.logger.info("Starting Telegram bot...")
        self.me = await self.bot.get_me()
        self.logger.info("Telegram bot started as @%s", self.me.get("username"))

        self._running = True
        offset: int | None = None
        while self._running:
            try:
                updates = await self.bot.get_updates(
                    offset=offset, timeout=self.poll_timeout
                )
            except (TelegramApiError, httpx.HTTPError) as exc:
                self.logger.error("Polling failed: %s", exc)
                await asyncio.sleep(self.retry_delay)
                continue

            for update in updates:
                offset = update["update_id"] + 1
                self._dispatch(update)

    async def stop(self) -> None:
        self._running = False
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)
        self.logger.info("Telegram bot stopped.")

    def _dispatch(self, update: TelegramUpdate) -> None:
        message = update.get("message")
        if message is None:
            self.logger.debug("Ignoring update %s without message", update["update_id"])
            return

        # Messages run independently; nothing is shared between them
        task = asyncio.create_task(self._on_message(message))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _on_message(self, message: TelegramMessage) -> None:
        result = await self.handle_message(message)
        if isinstance(result, Err):
            self.logger.error(
                "Failed to handle message %s in chat %s: %s",
                message.get("message_id"),
                message.get("chat", {}).get("id"),
                result.cause,
                exc_info=result.cause,
            )

    async def handle_message(self, message: TelegramMessage) -> HandleResult:
        try:
            chat_id = message["chat"]["id"]
            user_id = self._resolve_user_key(message)

            prompt = await self.content_extractor.extract(message)
            if not prompt["content"]:
                self.logger.info("Nothing to forward for chat %s", chat_id)
                await self._respond(chat_id, FALLBACK_MESSAGE)
                return Ok()

            self.logger.info(
                "Forwarding %s content parts for user %s",
                len(prompt["content"]),
                user_id,
            )
            await self._send_typing(chat_id)
            reply = await self.chat_service.send_message(prompt, user_id)

            await self._respond(chat_id, self._render_reply(reply))
            return Ok()
        except Exception as exc:
            return Err(exc)

    @staticmethod
    def _resolve_user_key(message: TelegramMessage) -> str:
        sender = message.get("from")
        if sender and sender.get("id") is not None:
            return str(sender["id"])
        return str(message["chat"]["id"])

    @staticmethod
    def _render_reply(reply: ReplyEnvelope) -> str:
        return "\n".join(
            part["text"] for part in reply["content"] if part["type"] == "text"
        )

    async def _respond(self, chat_id: int, text: str) -> None:
        # Delivery is not confirmed or retried
        try:
            await self.bot.send_message(chat_id, text)
        except (TelegramApiError, httpx.HTTPError) as exc:
            self.logger.warning("Failed to send reply to chat %s: %s", chat_id, exc)

    async def _send_typing(self, chat_id: int) -> None:
        try:
            await self.bot.send_chat_action(chat_id, "typing")
        except (TelegramApiError, httpx.HTTPError) as exc:
            self.logger.debug("Could not send typing action: %s", exc)
