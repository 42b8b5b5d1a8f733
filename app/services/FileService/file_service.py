from __future__ import annotations

import asyncio
import base64
import logging
import mimetypes
import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import httpx
from tenacity import (
    AsyncRetrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential_jitter,
)

from app.services.FileService.file_service_interface import FileServiceInterface

DEFAULT_IMAGE_MIME_TYPE = "image/jpeg"

# mimetypes depends on the host's tables; pin the formats Telegram serves.
_IMAGE_MIME_TYPES: dict[str, str] = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "webp": "image/webp",
    "bmp": "image/bmp",
    "tif": "image/tiff",
    "tiff": "image/tiff",
    "heic": "image/heic",
}


def _is_retryable(exc: BaseException) -> bool:
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code >= 500
    return isinstance(exc, httpx.TransportError)


class FileService(FileServiceInterface):
    def __init__(
        self,
        http_client: httpx.AsyncClient,
        logger: logging.Logger,
        tmp_dir_prefix: str = "bridge-",
        download_timeout: float = 30.0,
        download_max_attempts: int = 3,
    ) -> None:
        self.logger = logger
        self.tmp_dir_prefix = tmp_dir_prefix
        self.download_timeout = download_timeout
        self.download_max_attempts = max(1, download_max_attempts)

        self._client = http_client

    @contextmanager
    def create_tmp_dir(self) -> Iterator[str]:
        with tempfile.TemporaryDirectory(prefix=self.tmp_dir_prefix) as tmp_dir:
            yield tmp_dir

    async def download_file(self, url: str, destination: str) -> None:
        Path(destination).parent.mkdir(parents=True, exist_ok=True)

        async for attempt in AsyncRetrying(
            retry=retry_if_exception(_is_retryable),
            stop=stop_after_attempt(self.download_max_attempts),
            wait=wait_exponential_jitter(initial=0.2, max=2.0, jitter=0.2),
            reraise=True,
        ):
            with attempt:
                await self._stream_to_file(url, destination)

        self.logger.debug(
            "Downloaded %s bytes to %s", os.path.getsize(destination), destination
        )

    async def _stream_to_file(self, url: str, destination: str) -> None:
        async with self._client.stream(
            "GET", url, timeout=self.download_timeout
        ) as response:
            response.raise_for_status()
            handle = await asyncio.to_thread(open, destination, "wb")
            try:
                async for chunk in response.aiter_bytes():
                    await asyncio.to_thread(handle.write, chunk)
            finally:
                await asyncio.to_thread(handle.close)

    async def convert_file_to_base64(self, path: str) -> str:
        data = await asyncio.to_thread(Path(path).read_bytes)
        return base64.b64encode(data).decode("ascii")

    async def delete_file(self, path: str) -> None:
        await asyncio.to_thread(os.remove, path)

    def get_mime_type_from_extension(self, extension: str) -> str:
        normalized = extension.lower().lstrip(".")
        if not normalized:
            return DEFAULT_IMAGE_MIME_TYPE

        if normalized in _IMAGE_MIME_TYPES:
            return _IMAGE_MIME_TYPES[normalized]

        guessed, _ = mimetypes.guess_type(f"file.{normalized}")
        return guessed or DEFAULT_IMAGE_MIME_TYPE
