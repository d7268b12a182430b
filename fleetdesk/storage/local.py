"""Local file store for uploaded images and documents.

Files are written to ``{root}/{folder}/{uuid}.{ext}`` and exposed under
``{public_base_url}/{folder}/{uuid}.{ext}``.
"""

from __future__ import annotations

import asyncio
import os
import re
import uuid
from pathlib import Path
from typing import Optional

from fastapi import UploadFile

from fleetdesk.core.errors import StorageError
from fleetdesk.core.logging_config import get_logger
from fleetdesk.server.core.config import StorageConfig, settings

logger = get_logger(__name__)

UPLOAD_CHUNK_BYTES = 64 * 1024
_SAFE_SEGMENT = re.compile(r"^[A-Za-z0-9_-]+$")


class LocalFileStorage:
    def __init__(self, config: Optional[StorageConfig] = None) -> None:
        self.config = config or settings.storage
        self.root = Path(self.config.root)

    def _public_prefix(self) -> str:
        return self.config.public_base_url.rstrip("/")

    @staticmethod
    def _extension(filename: Optional[str]) -> str:
        if not filename or "." not in filename:
            return "bin"
        ext = filename.rsplit(".", 1)[-1].lower()
        return ext if _SAFE_SEGMENT.match(ext) else "bin"

    def save_bytes(self, folder: str, filename: Optional[str], content: bytes) -> str:
        """Store ``content`` and return its public URL.

        Raises:
            StorageError: for an invalid folder name, an empty or oversized payload
        """
        if not _SAFE_SEGMENT.match(folder):
            raise StorageError(f"Invalid storage folder: {folder}")
        if not content:
            raise StorageError("Uploaded file is empty")
        if len(content) > self.config.max_upload_bytes:
            raise StorageError(f"Uploaded file exceeds {self.config.max_upload_bytes} bytes")

        name = f"{uuid.uuid4()}.{self._extension(filename)}"
        directory = self.root / folder
        os.makedirs(directory, exist_ok=True)
        with open(directory / name, "wb") as f:
            f.write(content)
        logger.info(f"Stored upload {folder}/{name} ({len(content)} bytes)")
        return f"{self._public_prefix()}/{folder}/{name}"

    async def save_upload(self, folder: str, upload: UploadFile) -> str:
        """Read ``upload`` in chunks and store it off the event loop.

        Reading stops as soon as the upload passes ``max_upload_bytes``.
        """
        limit = self.config.max_upload_bytes
        chunk_size = min(UPLOAD_CHUNK_BYTES, limit + 1)
        chunks = []
        size = 0
        while True:
            chunk = await upload.read(chunk_size)
            if not chunk:
                break
            size += len(chunk)
            if size > limit:
                raise StorageError(f"Uploaded file exceeds {limit} bytes")
            chunks.append(chunk)
        return await asyncio.to_thread(self.save_bytes, folder, upload.filename, b"".join(chunks))

    def path_for_url(self, url: str) -> Optional[Path]:
        """Map a public URL produced by this store back to its file path."""
        prefix = self._public_prefix() + "/"
        if not url or not url.startswith(prefix):
            return None
        parts = url[len(prefix) :].split("/")
        if len(parts) != 2 or not all(parts) or ".." in parts:
            return None
        return self.root / parts[0] / parts[1]

    def delete_by_url(self, url: Optional[str]) -> bool:
        path = self.path_for_url(url or "")
        if path is None or not path.exists():
            return False
        path.unlink()
        logger.info(f"Deleted stored file {path}")
        return True


def get_storage() -> LocalFileStorage:
    return LocalFileStorage()
