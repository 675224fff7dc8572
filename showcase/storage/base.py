"""
Abstract storage backend interface.
Defines the contract for all object storage implementations.
"""

import re
import time
from abc import ABC, abstractmethod
from pathlib import PurePosixPath


class StorageBackend(ABC):
    """
    Abstract base class for storage backends.

    All storage implementations (Local, S3, Azure) must implement
    these methods to ensure consistent behavior across backends.
    """

    @abstractmethod
    async def upload_bytes(self, data: bytes, path: str, content_type: str) -> str:
        """
        Upload raw bytes to storage.

        Args:
            data: Raw file bytes
            path: Destination key in storage (e.g., "3d-models/1700000000000-chair.glb")
            content_type: MIME type of the content

        Returns:
            The storage key where the file was saved

        Raises:
            UploadError: If upload fails
        """
        pass

    @abstractmethod
    async def delete(self, path: str) -> bool:
        """
        Delete a file from storage.

        Returns:
            True if deleted successfully, False if file didn't exist

        Raises:
            UploadError: If deletion fails for other reasons
        """
        pass

    @abstractmethod
    async def exists(self, path: str) -> bool:
        """Check if a file exists in storage."""
        pass

    @abstractmethod
    def get_url(self, path: str) -> str:
        """
        Get the public URL under which the stored file is served.

        The URL is persisted on the asset record, so it must not expire.
        """
        pass


# MIME type mapping for model and background formats
FORMAT_MIME_TYPES = {
    "gltf": "model/gltf+json",
    "glb": "model/gltf-binary",
    "usdz": "model/vnd.usdz+zip",
    "obj": "model/obj",
    "stl": "model/stl",
    "ply": "application/x-ply",
    "fbx": "application/octet-stream",
    "png": "image/png",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "webp": "image/webp",
    "hdr": "image/vnd.radiance",
}


def get_mime_type(filename: str, fallback: str | None = None) -> str:
    """Get MIME type from a filename's extension."""
    ext = PurePosixPath(filename).suffix.lower().lstrip(".")
    return FORMAT_MIME_TYPES.get(ext) or fallback or "application/octet-stream"


def build_object_key(
    filename: str,
    folder: str,
    unique: str = "",
    timestamp_ms: int | None = None,
) -> str:
    """
    Build a storage key like ``3d-models/1700000000000-my-chair.glb``.

    Non-alphanumeric characters in the base name become "-"; the
    extension is kept (lower-cased) so viewers can sniff the format.
    A ``unique`` token is appended to the base name when given.
    """
    name = PurePosixPath(filename.replace("\\", "/")).name
    path = PurePosixPath(name)
    ext = path.suffix.lower()
    base = re.sub(r"[^a-zA-Z0-9]", "-", path.stem) or "file"
    if timestamp_ms is None:
        timestamp_ms = time.time_ns() // 1_000_000
    if unique:
        base = f"{base}-{unique}"
    return f"{folder.strip('/')}/{timestamp_ms}-{base}{ext}"
