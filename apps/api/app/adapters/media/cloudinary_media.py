"""Cloudinary image store adapter."""

from __future__ import annotations

import io
import logging
from typing import Any

from starlette.concurrency import run_in_threadpool

from app.adapters.media.base import MediaStore, MediaStoreError, StoredImage
from app.core.logging_safety import mask_secret

logger = logging.getLogger(__name__)


class CloudinaryMediaStore(MediaStore):
    """Uploads through the Cloudinary SDK, which is blocking, from the threadpool."""

    def __init__(self, *, cloud_name: str, api_key: str, api_secret: str) -> None:
        self._cloud_name = cloud_name
        self._api_key = api_key
        self._api_secret = api_secret
        self._configured = False

    def _sdk(self) -> Any:
        try:
            import cloudinary
            import cloudinary.api
            import cloudinary.uploader
        except ImportError as exc:
            raise MediaStoreError("Cloudinary SDK is unavailable") from exc

        if not self._configured:
            cloudinary.config(
                cloud_name=self._cloud_name,
                api_key=self._api_key,
                api_secret=self._api_secret,
                secure=True,
            )
            logger.info(
                "media.configured provider=cloudinary cloud_name=%s api_key=%s",
                self._cloud_name,
                mask_secret(self._api_key),
            )
            self._configured = True
        return cloudinary

    async def upload_image(self, *, content: bytes, filename: str, folder: str) -> StoredImage:
        sdk = self._sdk()
        try:
            result = await run_in_threadpool(
                sdk.uploader.upload,
                io.BytesIO(content),
                folder=folder,
                resource_type="image",
                filename=filename,
                use_filename=True,
                unique_filename=True,
            )
        except Exception as exc:
            raise MediaStoreError(str(exc) or "Image upload failed") from exc

        return StoredImage(
            url=result["secure_url"],
            public_id=result["public_id"],
            size=len(content),
            width=result.get("width"),
            height=result.get("height"),
            format=result.get("format"),
        )

    async def ping(self) -> dict[str, Any]:
        sdk = self._sdk()
        try:
            return dict(await run_in_threadpool(sdk.api.ping))
        except Exception as exc:
            raise MediaStoreError(str(exc) or "Cloudinary ping failed") from exc


__all__ = ["CloudinaryMediaStore"]
