"""Blob-backed storage for files attached to document revisions.

Blobs get a random hex name; the original extension is kept on the revision
record so downloads can be renamed.
"""

from __future__ import annotations

import logging
import mimetypes
import uuid
from pathlib import PurePath
from typing import TYPE_CHECKING

from azure.core.exceptions import ResourceExistsError, ResourceNotFoundError
from azure.storage.blob import ContentSettings
from azure.storage.blob.aio import BlobServiceClient, ContainerClient

from program_review.config import REVISION_EXTENSIONS, REVISION_MAX_FILE_SIZE
from program_review.errors import FileTooLargeError, UnsupportedFileTypeError

if TYPE_CHECKING:
    from fastapi import UploadFile

    from program_review.config import StorageConfig

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 2**20


def revision_extension(
    filename: str | None,
    allowed: tuple[str, ...] = REVISION_EXTENSIONS,
) -> str:
    """Return the lower-cased extension of ``filename`` if it is allowed."""
    extension = PurePath(filename or "").suffix.lower()
    if extension not in allowed:
        raise UnsupportedFileTypeError("Invalid file extension")
    return extension


async def read_limited(upload: UploadFile, max_size: int = REVISION_MAX_FILE_SIZE) -> bytes:
    """Read an upload into memory, rejecting it once it exceeds ``max_size`` bytes."""
    chunks: list[bytes] = []
    total = 0
    while chunk := await upload.read(_CHUNK_SIZE):
        total += len(chunk)
        if total > max_size:
            raise FileTooLargeError(f"File exceeds the {max_size // 2**20} MB limit")
        chunks.append(chunk)
    return b"".join(chunks)


def new_blob_name() -> str:
    return uuid.uuid4().hex


class RevisionFileStore:
    """Manages the async Blob Storage client for revision files."""

    def __init__(self, config: StorageConfig) -> None:
        self._config = config
        self._service: BlobServiceClient | None = None
        self._container: ContainerClient | None = None

    async def initialize(self) -> None:
        """Create the client and make sure the container exists."""
        self._service = BlobServiceClient.from_connection_string(self._config.connection_string)
        self._container = self._service.get_container_client(self._config.container)
        try:
            await self._container.create_container()
            logger.info("Blob container created — container=%s", self._config.container)
        except ResourceExistsError:
            pass

    async def close(self) -> None:
        """Close the underlying client."""
        if self._service:
            await self._service.close()
            self._service = None
            self._container = None

    @property
    def container(self) -> ContainerClient:
        if self._container is None:
            raise RuntimeError("RevisionFileStore not initialized — call initialize() first")
        return self._container

    async def upload(self, data: bytes, extension: str) -> str:
        """Store ``data`` under a new blob name and return the name."""
        name = new_blob_name()
        content_type = mimetypes.guess_type(f"{name}{extension}")[0] or "application/octet-stream"
        await self.container.upload_blob(
            name=name,
            data=data,
            overwrite=False,
            content_settings=ContentSettings(content_type=content_type),
        )
        logger.info("Revision file stored — blob=%s bytes=%d", name, len(data))
        return name

    async def download(self, name: str) -> bytes | None:
        """Return the blob's content, or None if it does not exist."""
        try:
            stream = await self.container.download_blob(name)
        except ResourceNotFoundError:
            return None
        return await stream.readall()

    async def delete(self, name: str) -> bool:
        """Delete a blob. Returns False if it did not exist."""
        try:
            await self.container.delete_blob(name)
        except ResourceNotFoundError:
            return False
        logger.info("Revision file deleted — blob=%s", name)
        return True
