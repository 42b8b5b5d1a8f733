from abc import ABC, abstractmethod

from app.entities.message import (
    ImageContent,
    PromptEnvelope,
    RemoteFile,
    TelegramMessage,
)


class ContentExtractorServiceInterface(ABC):
    @abstractmethod
    async def extract(self, message: TelegramMessage) -> PromptEnvelope:
        """Build the prompt envelope for an inbound message. May be empty."""

    @abstractmethod
    async def to_image_part(self, remote_file: RemoteFile) -> ImageContent:
        """Download a resolved attachment and encode it as an image data URL."""
