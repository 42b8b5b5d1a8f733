from abc import ABC, abstractmethod

from app.entities.message import TelegramMessage
from app.entities.result import HandleResult


class TelegramServiceInterface(ABC):
    @abstractmethod
    async def start(self) -> None:
        """Begin processing Telegram updates."""
        raise NotImplementedError

    @abstractmethod
    async def stop(self) -> None:
        """Stop polling and release transport resources."""
        raise NotImplementedError

    @abstractmethod
    async def handle_message(self, message: TelegramMessage) -> HandleResult:
        """Run the prompt pipeline for one inbound message."""
        raise NotImplementedError
