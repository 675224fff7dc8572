"""
Local filesystem storage backend.
Stores files on the local filesystem for development and simple deployments.
"""

from pathlib import Path

import aiofiles
import aiofiles.os

from showcase.core.exceptions import UploadError
from showcase.storage.base import StorageBackend


class LocalStorageBackend(StorageBackend):
    """
    Local filesystem storage implementation.

    Files are stored under base_path and addressed as {base_url}/{key}.
    """

    def __init__(self, base_path: str, base_url: str = "/storage"):
        self.base_path = Path(base_path)
        self.base_url = base_url.rstrip("/")
        # Ensure base directory exists
        self.base_path.mkdir(parents=True, exist_ok=True)

    def _get_full_path(self, path: str) -> Path:
        """Get full filesystem path for a storage key, refusing escapes."""
        full_path = (self.base_path / path).resolve()
        if not full_path.is_relative_to(self.base_path.resolve()):
            raise UploadError(
                message="Invalid storage path",
                details={"path": path},
            )
        return full_path

    async def upload_bytes(self, data: bytes, path: str, content_type: str) -> str:
        """Upload raw bytes to storage."""
        full_path = self._get_full_path(path)

        try:
            # Ensure parent directory exists
            full_path.parent.mkdir(parents=True, exist_ok=True)

            async with aiofiles.open(full_path, "wb") as f:
                await f.write(data)

            return path

        except OSError as e:
            raise UploadError(
                message=f"Failed to upload file: {str(e)}",
                details={"path": path},
            )

    async def delete(self, path: str) -> bool:
        """Delete a file from storage."""
        full_path = self._get_full_path(path)

        if not full_path.exists():
            return False

        try:
            await aiofiles.os.remove(full_path)

            # Try to remove empty parent directories
            parent = full_path.parent
            root = self.base_path.resolve()
            while parent != root:
                try:
                    parent.rmdir()  # Only removes if empty
                    parent = parent.parent
                except OSError:
                    break

            return True

        except OSError as e:
            raise UploadError(
                message=f"Failed to delete file: {str(e)}",
                details={"path": path},
            )

    async def exists(self, path: str) -> bool:
        """Check if a file exists."""
        return self._get_full_path(path).exists()

    def get_url(self, path: str) -> str:
        """Get URL/path for file access."""
        return f"{self.base_url}/{path}"
