"""Image hosting interfaces."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


class MediaStoreError(Exception):
    """Raised when the image host rejects an upload or cannot be reached."""


@dataclass(frozen=True, slots=True)
class StoredImage:
    url: str
    public_id: str
    size: int
    width: int | None = None
    height: int | None = None
    format: str | None = None


class MediaStore(ABC):
    @abstractmethod
    async def upload_image(self, *, content: bytes, filename: str, folder: str) -> StoredImage:
        """Store image bytes under ``folder`` and return its public location."""

    @abstractmethod
    async def ping(self) -> dict[str, Any]:
        """Return provider status details or raise ``MediaStoreError``."""


__all__ = ["MediaStore", "MediaStoreError", "StoredImage"]
