from abc import ABC, abstractmethod

from app.entities.message import PromptEnvelope, ReplyEnvelope


class ChatBackendError(Exception):
    """Raised when the conversational backend cannot produce a reply."""


class ChatServiceInterface(ABC):
    @abstractmethod
    async def send_message(
        self, prompt: PromptEnvelope, user_id: str
    ) -> ReplyEnvelope:
        """Send one prompt on behalf of ``user_id`` and return the reply."""
