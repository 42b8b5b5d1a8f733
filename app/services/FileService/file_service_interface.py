from abc import ABC, abstractmethod
from contextlib import AbstractContextManager


class FileServiceInterface(ABC):
    @abstractmethod
    def create_tmp_dir(self) -> AbstractContextManager[str]:
        """Scoped temporary directory, removed when the context exits."""

    @abstractmethod
    async def download_file(self, url: str, destination: str) -> None:
        """Download ``url`` into the local path ``destination``."""

    @abstractmethod
    async def convert_file_to_base64(self, path: str) -> str:
        """Return the file content encoded as base64 text."""

    @abstractmethod
    async def delete_file(self, path: str) -> None:
        """Remove a local file."""

    @abstractmethod
    def get_mime_type_from_extension(self, extension: str) -> str:
        """Map a file extension (without dot) to a MIME type."""
