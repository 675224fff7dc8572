"""
Storage backend factory.
Provides configuration-driven backend selection.
"""

from fastapi import Request

from showcase.config import Settings
from showcase.storage.base import StorageBackend


def create_storage_backend(settings: Settings) -> StorageBackend:
    """
    Build the configured storage backend.

    Called once at application startup; the instance is shared through
    app.state. Cloud SDKs are imported only for the selected backend.

    Raises:
        ValueError: If unknown storage backend is configured
    """
    backend = settings.STORAGE_BACKEND.lower()

    if backend == "local":
        from showcase.storage.local import LocalStorageBackend

        return LocalStorageBackend(
            base_path=settings.LOCAL_STORAGE_PATH,
            base_url=settings.LOCAL_STORAGE_URL,
        )
    elif backend == "s3":
        from showcase.storage.s3 import S3StorageBackend

        return S3StorageBackend(
            bucket_name=settings.S3_BUCKET_NAME,
            endpoint_url=settings.S3_ENDPOINT_URL,
            access_key=settings.S3_ACCESS_KEY,
            secret_key=settings.S3_SECRET_KEY,
            region=settings.S3_REGION,
            public_url=settings.S3_PUBLIC_URL,
        )
    elif backend == "azure":
        from showcase.storage.azure import AzureStorageBackend

        return AzureStorageBackend(
            connection_string=settings.AZURE_STORAGE_CONNECTION_STRING,
            container_name=settings.AZURE_CONTAINER_NAME,
        )
    else:
        raise ValueError(f"Unknown storage backend: {backend}")


def get_storage(request: Request) -> StorageBackend:
    """
    Dependency function for FastAPI.

    Usage:
        @router.post("/upload")
        async def upload(storage: StorageBackend = Depends(get_storage)):
            ...
    """
    return request.app.state.storage
