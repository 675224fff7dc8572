"""
Pydantic schemas for request/response validation.
"""

from showcase.schemas.asset import (
    AssetCreate,
    AssetInfo,
    AssetInfoUpdate,
    AssetResponse,
    AssetUpdate,
    DeleteResponse,
    LikeRequest,
    LikeResponse,
    UploadResponse,
)
from showcase.schemas.error import ErrorResponse, ValidationErrorDetail, ValidationErrorResponse

__all__ = [
    # Asset schemas
    "AssetCreate",
    "AssetInfo",
    "AssetInfoUpdate",
    "AssetResponse",
    "AssetUpdate",
    "DeleteResponse",
    "LikeRequest",
    "LikeResponse",
    "UploadResponse",
    # Error schemas
    "ErrorResponse",
    "ValidationErrorDetail",
    "ValidationErrorResponse",
]
