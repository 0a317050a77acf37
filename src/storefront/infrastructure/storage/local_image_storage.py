"""Local filesystem image storage."""

import asyncio
import logging
import time
from pathlib import Path
from typing import Callable

from storefront.application.ports import ImageStorage, ImageUpload
from storefront.domain.product import (
    ImageTooLargeError,
    InvalidImageError,
    TooManyImagesError,
)

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = frozenset({".jpeg", ".jpg", ".png", ".gif"})
ALLOWED_CONTENT_TYPES = frozenset(
    {"image/jpeg", "image/jpg", "image/png", "image/gif"},
)
UPLOADS_PREFIX = "uploads"


def _epoch_millis() -> int:
    return time.time_ns() // 1_000_000


class LocalImageStorage(ImageStorage):
    """
    Stores uploaded images in a local directory served under ``/uploads``.

    Files are named ``<epoch-millis><ext>``. When several files land in the
    same millisecond the later ones take the next free millisecond value,
    so names stay unique and keep upload order.
    """

    def __init__(
        self,
        uploads_dir: Path,
        max_files: int = 5,
        max_file_size_bytes: int = 5 * 1024 * 1024,
        clock: Callable[[], int] = _epoch_millis,
    ):
        self._uploads_dir = Path(uploads_dir)
        self._max_files = max_files
        self._max_file_size_bytes = max_file_size_bytes
        self._clock = clock

    def validate(self, uploads: list[ImageUpload]) -> None:
        if len(uploads) > self._max_files:
            raise TooManyImagesError(self._max_files)

        for upload in uploads:
            extension = Path(upload.filename or "").suffix.lower()
            content_type = (upload.content_type or "").lower()
            if (
                extension not in ALLOWED_EXTENSIONS
                or content_type not in ALLOWED_CONTENT_TYPES
            ):
                raise InvalidImageError(upload.filename)
            if upload.size > self._max_file_size_bytes:
                raise ImageTooLargeError(upload.filename, self._max_file_size_bytes)

    async def store(self, uploads: list[ImageUpload]) -> list[str]:
        self.validate(uploads)
        return await asyncio.to_thread(self._write_all, uploads)

    def _write_all(self, uploads: list[ImageUpload]) -> list[str]:
        self._uploads_dir.mkdir(parents=True, exist_ok=True)

        references = []
        stamp = self._clock()
        for upload in uploads:
            extension = Path(upload.filename or "").suffix.lower()
            target = self._uploads_dir / f"{stamp}{extension}"
            while target.exists():
                stamp += 1
                target = self._uploads_dir / f"{stamp}{extension}"
            target.write_bytes(upload.content)
            references.append(f"{UPLOADS_PREFIX}/{target.name}")
            logger.debug("Stored image %s as %s", upload.filename, target.name)
            stamp += 1

        return references
