"""Image storage for user and petition pictures."""

import logging
import uuid
from pathlib import Path

import aiofiles
import aiofiles.os
from fastapi import HTTPException, status

from src.config import get_settings

logger = logging.getLogger(__name__)

# Content type -> file extension
ALLOWED_IMAGE_TYPES = {
    "image/png": "png",
    "image/jpeg": "jpeg",
    "image/gif": "gif",
}

EXTENSION_CONTENT_TYPES = {
    "png": "image/png",
    "jpeg": "image/jpeg",
    "jpg": "image/jpeg",
    "gif": "image/gif",
}


def normalize_content_type(content_type: str | None) -> str | None:
    """Strip parameters such as ``; charset=...`` and lowercase."""
    if not content_type:
        return None
    return content_type.split(";", 1)[0].strip().lower()


def content_type_for(filename: str) -> str:
    """Content type to serve a stored image with."""
    ext = Path(filename).suffix.lstrip(".").lower()
    return EXTENSION_CONTENT_TYPES.get(ext, "image/jpeg")


class ImageStorage:
    """Stores image bytes on disk under server-generated filenames."""

    def __init__(self, root: str | Path | None = None, max_bytes: int | None = None):
        settings = get_settings()
        self.root = Path(root or settings.image_storage_dir).resolve()
        self.max_bytes = max_bytes if max_bytes is not None else settings.max_image_bytes
        self.root.mkdir(parents=True, exist_ok=True)

    def _path(self, filename: str) -> Path:
        # Only bare filenames generated by save() are ever stored
        return self.root / Path(filename).name

    def validate(self, content_type: str | None, data: bytes) -> str:
        """Check an upload and return the extension to store it under."""
        normalized = normalize_content_type(content_type)
        if normalized not in ALLOWED_IMAGE_TYPES:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Image must be one of image/png, image/jpeg or image/gif",
            )
        if not data:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Image body is empty",
            )
        if len(data) > self.max_bytes:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Image is too large",
            )
        return ALLOWED_IMAGE_TYPES[normalized]

    async def save(self, kind: str, entity_id: int, content_type: str | None, data: bytes) -> str:
        """Write an image and return its new filename."""
        ext = self.validate(content_type, data)
        filename = f"{kind}_{entity_id}_{uuid.uuid4().hex}.{ext}"
        async with aiofiles.open(self._path(filename), "wb") as f:
            await f.write(data)
        logger.info(f"Stored {kind} image {filename} ({len(data)} bytes)")
        return filename

    async def read(self, filename: str) -> bytes | None:
        """Read a stored image, or None if the file is gone."""
        path = self._path(filename)
        if not await aiofiles.os.path.exists(path):
            logger.warning(f"Image file missing on disk: {filename}")
            return None
        async with aiofiles.open(path, "rb") as f:
            return await f.read()

    async def delete(self, filename: str | None) -> None:
        """Remove a stored image if present."""
        if not filename:
            return
        path = self._path(filename)
        if await aiofiles.os.path.exists(path):
            await aiofiles.os.remove(path)
            logger.info(f"Removed image {filename}")
