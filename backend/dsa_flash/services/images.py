"""Image storage on the local disk, served back as static files."""

import logging
import time
from pathlib import Path
from uuid import uuid4

import anyio

from dsa_flash.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()

STATIC_PREFIX = "uploads"


class ImageStorage:
    """Service for persisting uploaded note images under the upload directory."""

    def __init__(self, directory: Path | None = None):
        """Use the configured upload directory unless one is given."""
        self.directory = Path(directory or settings.upload_dir)

    def ensure_directory(self) -> None:
        """Create the upload directory if it does not exist yet."""
        self.directory.mkdir(parents=True, exist_ok=True)

    @staticmethod
    def generate_filename(original_name: str | None) -> str:
        """
        Build a collision-resistant file name.

        Millisecond timestamp plus a random suffix, keeping the original
        extension so the static server picks the right content type.
        """
        suffix = Path(original_name or "").suffix.lower()
        return f"{int(time.time() * 1000)}-{uuid4().hex[:8]}{suffix}"

    async def save_image(self, original_name: str | None, data: bytes) -> str:
        """
        Write image bytes to disk.

        Args:
            original_name: File name as sent by the client
            data: Raw bytes of the image

        Returns:
            The stored file name, relative to the static prefix

        Raises:
            OSError: If the file cannot be written
        """
        self.ensure_directory()
        filename = self.generate_filename(original_name)
        await anyio.Path(self.directory / filename).write_bytes(data)
        logger.info("Stored image %s (%d bytes)", filename, len(data))
        return filename

    @staticmethod
    def public_url(base_url: str, filename: str) -> str:
        """Absolute URL under which the static mount serves the file."""
        return f"{base_url.rstrip('/')}/{STATIC_PREFIX}/{filename}"


# Singleton instance
image_storage = ImageStorage()
