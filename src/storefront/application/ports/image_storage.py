"""Image storage port."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class ImageUpload:
    """An uploaded image as received from the client."""

    filename: str | None
    content_type: str | None
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)


class ImageStorage(ABC):
    @abstractmethod
    async def store(self, uploads: list[ImageUpload]) -> list[str]:
        """
        Validate and persist a batch of uploads.

        Every upload is validated before any is written.

        Returns
        -------
        Stored-file references (``uploads/<filename>``) in upload order

        Raises
        ------
        TooManyImagesError
            If the batch exceeds the per-request file limit
        InvalidImageError
            If a file is not a JPEG, PNG or GIF image
        ImageTooLargeError
            If a file exceeds the size limit
        """
