"""
Object storage abstraction for uploaded model files.
Supports multiple backends: Local filesystem, S3/MinIO, Azure Blob.
"""

from showcase.storage.base import (
    FORMAT_MIME_TYPES,
    StorageBackend,
    build_object_key,
    get_mime_type,
)
from showcase.storage.local import LocalStorageBackend
from showcase.storage.factory import create_storage_backend, get_storage

__all__ = [
    "StorageBackend",
    "LocalStorageBackend",
    "create_storage_backend",
    "get_storage",
    "build_object_key",
    "get_mime_type",
    "FORMAT_MIME_TYPES",
]
