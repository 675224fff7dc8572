"""
Azure Blob Storage backend.
Supports Azure Blob Storage for Azure-based deployments.
"""

import asyncio

from azure.core.exceptions import AzureError
from azure.storage.blob import BlobServiceClient, ContentSettings

from showcase.core.exceptions import UploadError
from showcase.storage.base import StorageBackend


class AzureStorageBackend(StorageBackend):
    """
    Azure Blob Storage implementation.

    Configured via AZURE_* environment variables.
    """

    def __init__(self, connection_string: str | None, container_name: str):
        """
        Initialize Azure Blob storage backend.

        Args:
            connection_string: Azure Storage connection string
            container_name: Blob container name
        """
        if not connection_string:
            raise UploadError(
                message="Azure connection string not configured",
                details={"required": "AZURE_STORAGE_CONNECTION_STRING"},
            )

        self.container_name = container_name
        self.blob_service_client = BlobServiceClient.from_connection_string(
            connection_string
        )

        # Ensure container exists
        self._ensure_container_exists()

    def _ensure_container_exists(self):
        """Create container if it doesn't exist."""
        try:
            container_client = self.blob_service_client.get_container_client(
                self.container_name
            )
            if not container_client.exists():
                container_client.create_container()
        except AzureError as e:
            raise UploadError(
                message=f"Failed to ensure container exists: {str(e)}",
                details={"container": self.container_name},
            )

    def _get_blob_client(self, path: str):
        """Get blob client for a path."""
        return self.blob_service_client.get_blob_client(
            container=self.container_name,
            blob=path,
        )

    async def upload_bytes(self, data: bytes, path: str, content_type: str) -> str:
        """Upload raw bytes to storage."""
        try:
            blob_client = self._get_blob_client(path)
            await asyncio.to_thread(
                blob_client.upload_blob,
                data,
                overwrite=True,
                content_settings=ContentSettings(content_type=content_type),
            )
            return path

        except AzureError as e:
            raise UploadError(
                message=f"Failed to upload file to Azure: {str(e)}",
                details={"path": path, "container": self.container_name},
            )

    async def delete(self, path: str) -> bool:
        """Delete a file from storage."""
        if not await self.exists(path):
            return False

        try:
            blob_client = self._get_blob_client(path)
            await asyncio.to_thread(blob_client.delete_blob)
            return True

        except AzureError as e:
            raise UploadError(
                message=f"Failed to delete file from Azure: {str(e)}",
                details={"path": path, "container": self.container_name},
            )

    async def exists(self, path: str) -> bool:
        """Check if a file exists."""
        try:
            blob_client = self._get_blob_client(path)
            return await asyncio.to_thread(blob_client.exists)
        except AzureError as e:
            raise UploadError(
                message=f"Failed to check file existence: {str(e)}",
                details={"path": path, "container": self.container_name},
            )

    def get_url(self, path: str) -> str:
        """Get URL for file access."""
        return self._get_blob_client(path).url
