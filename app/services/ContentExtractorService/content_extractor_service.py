from __future__ import annotations

import logging
import os
import posixpath
from datetime import datetime, timezone
from typing import Protocol

import httpx

from app.components.telegram.telegram_bot_client import TelegramApiError
from app.entities.message import (
    ContentPart,
    ImageContent,
    PromptEnvelope,
    RemoteFile,
    TelegramMessage,
)
from app.services.ContentExtractorService.content_extractor_service_interface import (
    ContentExtractorServiceInterface,
)
from app.services.FileService.file_service_interface import FileServiceInterface


class ContentExtractionError(Exception):
    """Base error for attachment processing failures."""


class AttachmentResolutionError(ContentExtractionError):
    def __init__(self, file_id: str) -> None:
        self.file_id = file_id
        super().__init__(f"Could not resolve attachment {file_id}")


class AttachmentDownloadError(ContentExtractionError):
    def __init__(self, file_path: str) -> None:
        self.file_path = file_path
        super().__init__(f"Could not download attachment {file_path}")


class AttachmentEncodingError(ContentExtractionError):
    def __init__(self, file_path: str) -> None:
        self.file_path = file_path
        super().__init__(f"Could not encode attachment {file_path}")


class AttachmentResolver(Protocol):
    """The part of the Telegram client the extractor relies on."""

    async def get_file(self, file_id: str) -> RemoteFile: ...

    def build_file_url(self, file_path: str) -> str: ...


class ContentExtractorService(ContentExtractorServiceInterface):
    def __init__(
        self,
        attachment_resolver: AttachmentResolver,
        file_service: FileServiceInterface,
        logger: logging.Logger,
    ) -> None:
        self.attachment_resolver = attachment_resolver
        self.file_service = file_service
        self.logger = logger

    async def extract(self, message: TelegramMessage) -> PromptEnvelope:
        content: list[ContentPart] = []

        text = message.get("text")
        if text:
            content.append({"type": "text", "text": text})

        photo = message.get("photo") or []
        document = message.get("document")

        file_id: str | None = None
        if photo:
            # Sizes come ascending; the last one is the original resolution
            file_id = photo[-1].get("file_id")
        elif document and self._is_image_document(document.get("mime_type")):
            file_id = document.get("file_id")
        elif document:
            self.logger.info(
                "Skipping non-image document with mime type: %s",
                document.get("mime_type") or "unknown",
            )
            document = None

        if file_id:
            image = await self._resolve_image(file_id)
            if image:
                content.append(image)
        elif photo or document:
            self.logger.info("Skipping attachment without file_id")

        return {"content": content, "date": datetime.now(timezone.utc)}

    @staticmethod
    def _is_image_document(mime_type: str | None) -> bool:
        return mime_type is not None and mime_type.startswith("image/")

    async def _resolve_image(self, file_id: str) -> ImageContent | None:
        try:
            remote_file = await self.attachment_resolver.get_file(file_id)
        except (TelegramApiError, httpx.HTTPError) as exc:
            raise AttachmentResolutionError(file_id) from exc

        if not remote_file or not remote_file.get("file_path"):
            self.logger.warning("Attachment %s has no downloadable path", file_id)
            return None

        return await self.to_image_part(remote_file)

    async def to_image_part(self, remote_file: RemoteFile) -> ImageContent:
        file_path = remote_file["file_path"]
        download_url = self.attachment_resolver.build_file_url(file_path)

        with self.file_service.create_tmp_dir() as tmp_dir:
            destination = os.path.join(tmp_dir, posixpath.basename(file_path))
            try:
                try:
                    await self.file_service.download_file(download_url, destination)
                except (httpx.HTTPError, OSError) as exc:
                    raise AttachmentDownloadError(file_path) from exc

                try:
                    encoded = await self.file_service.convert_file_to_base64(
                        destination
                    )
                except OSError as exc:
                    raise AttachmentEncodingError(file_path) from exc
            finally:
                await self._discard(destination)

        extension = posixpath.splitext(file_path)[1].lstrip(".").lower()
        mime_type = self.file_service.get_mime_type_from_extension(extension)

        self.logger.info("Collected image attachment: %s (%s)", file_path, mime_type)
        return {
            "type": "image",
            "name": file_path,
            "base64": f"data:{mime_type};base64,{encoded}",
        }

    async def _discard(self, path: str) -> None:
        if not os.path.exists(path):
            return
        try:
            await self.file_service.delete_file(path)
        except OSError as exc:
            self.logger.warning("Failed to delete temporary file %s: %s", path, exc)
