"""Core exceptions for the showcase registry."""

from showcase.core.exceptions import (
    ShowcaseAPIException,
    ValidationError,
    Unauthorized,
    NotFound,
    ConflictError,
    PayloadTooLarge,
    UploadError,
    InternalError,
)

__all__ = [
    "ShowcaseAPIException",
    "ValidationError",
    "Unauthorized",
    "NotFound",
    "ConflictError",
    "PayloadTooLarge",
    "UploadError",
    "InternalError",
]
