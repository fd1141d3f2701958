"""Image hosting adapters."""

from .base import MediaStore, MediaStoreError, StoredImage
from .cloudinary_media import CloudinaryMediaStore
from .memory_media import InMemoryMediaStore

__all__ = [
    "CloudinaryMediaStore",
    "InMemoryMediaStore",
    "MediaStore",
    "MediaStoreError",
    "StoredImage",
]
