"""
S3-compatible storage backend.
Supports AWS S3 and S3-compatible services like MinIO.
"""

import asyncio

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from showcase.core.exceptions import UploadError
from showcase.storage.base import StorageBackend


class S3StorageBackend(StorageBackend):
    """
    S3-compatible object storage implementation.

    Objects are written with public-read semantics left to the bucket
    policy; URLs are built from S3_PUBLIC_URL when configured.
    """

    def __init__(
        self,
        bucket_name: str,
        endpoint_url: str | None = None,
        access_key: str | None = None,
        secret_key: str | None = None,
        region: str = "us-east-1",
        public_url: str | None = None,
    ):
        """
        Initialize S3 storage backend.

        Args:
            bucket_name: S3 bucket name
            endpoint_url: S3 endpoint URL (for MinIO, custom S3-compatible services)
            access_key: AWS access key ID
            secret_key: AWS secret access key
            region: AWS region
            public_url: Base URL objects are publicly served from (CDN or bucket website)
        """
        self.endpoint_url = endpoint_url
        self.bucket_name = bucket_name
        self.region = region
        self.public_url = public_url.rstrip("/") if public_url else None

        config = Config(
            signature_version="s3v4",
            retries={"max_attempts": 3, "mode": "standard"},
        )

        self.client = boto3.client(
            "s3",
            endpoint_url=endpoint_url,
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key,
            region_name=region,
            config=config,
        )

        # Ensure bucket exists
        self._ensure_bucket_exists()

    def _ensure_bucket_exists(self):
        """Create bucket if it doesn't exist."""
        try:
            self.client.head_bucket(Bucket=self.bucket_name)
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code")
            if error_code != "404":
                raise UploadError(
                    message=f"Failed to access bucket: {str(e)}",
                    details={"bucket": self.bucket_name},
                )
            try:
                if self.region and self.region != "us-east-1":
                    self.client.create_bucket(
                        Bucket=self.bucket_name,
                        CreateBucketConfiguration={"LocationConstraint": self.region},
                    )
                else:
                    self.client.create_bucket(Bucket=self.bucket_name)
            except ClientError as create_error:
                raise UploadError(
                    message=f"Failed to create bucket: {str(create_error)}",
                    details={"bucket": self.bucket_name},
                )

    async def upload_bytes(self, data: bytes, path: str, content_type: str) -> str:
        """Upload raw bytes to storage."""
        try:
            await asyncio.to_thread(
                self.client.put_object,
                Bucket=self.bucket_name,
                Key=path,
                Body=data,
                ContentType=content_type,
            )
            return path

        except (ClientError, BotoCoreError) as e:
            raise UploadError(
                message=f"Failed to upload file to S3: {str(e)}",
                details={"path": path, "bucket": self.bucket_name},
            )

    async def delete(self, path: str) -> bool:
        """Delete a file from storage."""
        if not await self.exists(path):
            return False

        try:
            await asyncio.to_thread(
                self.client.delete_object,
                Bucket=self.bucket_name,
                Key=path,
            )
            return True

        except (ClientError, BotoCoreError) as e:
            raise UploadError(
                message=f"Failed to delete file from S3: {str(e)}",
                details={"path": path, "bucket": self.bucket_name},
            )

    async def exists(self, path: str) -> bool:
        """Check if a file exists."""
        try:
            await asyncio.to_thread(
                self.client.head_object,
                Bucket=self.bucket_name,
                Key=path,
            )
            return True
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code")
            if error_code == "404":
                return False
            raise UploadError(
                message=f"Failed to check file existence: {str(e)}",
                details={"path": path, "bucket": self.bucket_name},
            )
        except BotoCoreError as e:
            raise UploadError(
                message=f"Failed to check file existence: {str(e)}",
                details={"path": path, "bucket": self.bucket_name},
            )

    def get_url(self, path: str) -> str:
        """Build the public URL of an object."""
        if self.public_url:
            return f"{self.public_url}/{path}"
        if self.endpoint_url:
            return f"{self.endpoint_url.rstrip('/')}/{self.bucket_name}/{path}"
        return f"https://{self.bucket_name}.s3.{self.region}.amazonaws.com/{path}"
