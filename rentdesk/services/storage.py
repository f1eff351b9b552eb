"""
Local disk storage for uploaded documents.
"""
import logging
import os
import re
from pathlib import Path

import aiofiles
import aiofiles.os
from fastapi import UploadFile

from rentdesk.config import settings

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")
_CHUNK_SIZE = 1024 * 1024


def safe_filename(filename: str) -> str:
    """Strip directories and anything outside [A-Za-z0-9._-] from a client file name."""
    name = os.path.basename(filename or "").strip()
    name = _UNSAFE_CHARS.sub("_", name).strip("._")
    return name or "file"


class DocumentStorage:
    """Stores files under a single directory, addressed by storage key."""

    def __init__(self, base_dir: str):
        self.base_dir = Path(base_dir)

    def path(self, key: str) -> Path:
        path = (self.base_dir / key).resolve()
        if self.base_dir.resolve() not in path.parents:
            raise ValueError(f"Storage key escapes base directory: {key}")
        return path

    async def save(self, key: str, upload: UploadFile) -> int:
        """
        Write an upload to disk.

        Returns:
            Number of bytes written
        """
        await aiofiles.os.makedirs(self.base_dir, exist_ok=True)
        size = 0

        async with aiofiles.open(self.path(key), "wb") as f:
            while chunk := await upload.read(_CHUNK_SIZE):
                await f.write(chunk)
                size += len(chunk)

        logger.info("Stored document key=%s size=%d", key, size)
        return size

    async def exists(self, key: str) -> bool:
        return await aiofiles.os.path.exists(self.path(key))

    async def delete(self, key: str) -> bool:
        """Remove a stored file. Missing files are logged, not raised."""
        try:
            await aiofiles.os.remove(self.path(key))
            return True
        except FileNotFoundError:
            logger.warning("Stored document already gone key=%s", key)
            return False


document_storage = DocumentStorage(settings.document_upload_dir)
