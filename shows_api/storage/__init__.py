"""Image storage for uploads."""

from shows_api.storage.images import ImageStorage, ImageUpload

__all__ = ["ImageStorage", "ImageUpload"]
