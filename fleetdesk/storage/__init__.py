"""Uploaded file storage."""

from .local import LocalFileStorage, get_storage

__all__ = ["LocalFileStorage", "get_storage"]
