"""In-memory image store for local development and tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Any
from uuid import uuid4

from app.adapters.media.base import MediaStore, MediaStoreError, StoredImage


@dataclass(slots=True)
class InMemoryMediaStore(MediaStore):
    base_url: str = "memory://media"
    uploads: dict[str, bytes] = field(default_factory=dict)
    fail_with: str | None = None

    async def upload_image(self, *, content: bytes, filename: str, folder: str) -> StoredImage:
        if self.fail_with is not None:
            raise MediaStoreError(self.fail_with)

        path = PurePosixPath(filename)
        public_id = f"{folder}/{path.stem}-{uuid4().hex[:8]}"
        self.uploads[public_id] = content
        image_format = path.suffix.lstrip(".").lower() or None
        return StoredImage(
            url=f"{self.base_url}/{public_id}{path.suffix.lower()}",
            public_id=public_id,
            size=len(content),
            format=image_format,
        )

    async def ping(self) -> dict[str, Any]:
        if self.fail_with is not None:
            raise MediaStoreError(self.fail_with)
        return {"status": "ok"}


__all__ = ["InMemoryMediaStore"]
