"""Image upload validation and storage."""

from __future__ import annotations

import logging
from pathlib import PurePosixPath
import re

from fastapi import UploadFile

from app.adapters.media import MediaStore, StoredImage
from app.errors import ApiError
from app.schemas.upload import UploadedImage

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES = ("jpeg", "jpg", "png", "gif", "webp", "svg")
ICON_FOLDER = "icons"
PROJECT_FOLDER = "projects"
_WHITESPACE = re.compile(r"\s+")


def _rejected(message: str) -> ApiError:
    return ApiError(status_code=400, code="UPLOAD_REJECTED", message=message)


def _to_uploaded(stored: StoredImage, *, filename: str, mimetype: str | None) -> UploadedImage:
    return UploadedImage(
        url=stored.url,
        public_id=stored.public_id,
        filename=filename,
        mimetype=mimetype,
        size=stored.size,
        width=stored.width,
        height=stored.height,
        format=stored.format,
    )


def is_allowed_image(filename: str, content_type: str | None) -> bool:
    extension = PurePosixPath(filename).suffix.lstrip(".").lower()
    mimetype = (content_type or "").lower()
    return extension in ALLOWED_IMAGE_TYPES and any(kind in mimetype for kind in ALLOWED_IMAGE_TYPES)


class UploadService:
    def __init__(self, media: MediaStore, *, root_folder: str, max_bytes: int, max_files: int) -> None:
        self._media = media
        self._root_folder = root_folder.strip("/")
        self._max_bytes = max_bytes
        self._max_files = max_files

    def folder(self, subfolder: str | None = None) -> str:
        return f"{self._root_folder}/{subfolder}" if subfolder else self._root_folder

    async def _read_checked(self, upload: UploadFile) -> tuple[str, bytes]:
        filename = _WHITESPACE.sub("-", upload.filename or "")
        if not is_allowed_image(filename, upload.content_type):
            raise _rejected("Only image files are allowed (jpeg, jpg, png, gif, webp, svg)")
        content = await upload.read(self._max_bytes + 1)
        if len(content) > self._max_bytes:
            limit_mb = self._max_bytes // (1024 * 1024)
            raise _rejected(f"File size is too large. Maximum size is {limit_mb}MB")
        return filename, content

    async def store_image(
        self,
        upload: UploadFile | None,
        *,
        subfolder: str | None = None,
        missing_message: str = "Please upload an image",
    ) -> UploadedImage:
        if upload is None:
            raise _rejected(missing_message)

        filename, content = await self._read_checked(upload)
        stored = await self._media.upload_image(content=content, filename=filename, folder=self.folder(subfolder))
        logger.info("upload.stored folder=%s size=%s", self.folder(subfolder), stored.size)
        return _to_uploaded(stored, filename=filename, mimetype=upload.content_type)

    async def store_images(self, uploads: list[UploadFile] | None) -> list[UploadedImage]:
        if not uploads:
            raise _rejected("Please upload at least one image")
        if len(uploads) > self._max_files:
            raise _rejected("Too many files uploaded")

        # Validate every file before storing any of them.
        checked = [await self._read_checked(upload) for upload in uploads]
        results: list[UploadedImage] = []
        for upload, (filename, content) in zip(uploads, checked):
            stored = await self._media.upload_image(content=content, filename=filename, folder=self.folder())
            results.append(_to_uploaded(stored, filename=filename, mimetype=upload.content_type))
        logger.info("upload.stored_batch folder=%s count=%s", self.folder(), len(results))
        return results


__all__ = ["ALLOWED_IMAGE_TYPES", "ICON_FOLDER", "PROJECT_FOLDER", "UploadService", "is_allowed_image"]
