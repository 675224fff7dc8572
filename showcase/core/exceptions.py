"""
Custom exceptions for the showcase registry.
Every error leaves the API as {"error": ..., "message": ..., "details"?: ...}.
"""

from typing import Any


class ShowcaseAPIException(Exception):
    """Base exception for all showcase API errors."""

    def __init__(
        self,
        error: str,
        message: str,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        self.error = error
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to response dictionary."""
        response = {
            "error": self.error,
            "message": self.message,
        }
        if self.details:
            response["details"] = self.details
        return response


class ValidationError(ShowcaseAPIException):
    """400 - Missing or malformed input."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            error="validation_failed",
            message=message,
            status_code=400,
            details=details,
        )


class Unauthorized(ShowcaseAPIException):
    """401 - Missing or incorrect admin credential."""

    def __init__(self, message: str = "Invalid admin token"):
        super().__init__(
            error="unauthorized",
            message=message,
            status_code=401,
        )


class NotFound(ShowcaseAPIException):
    """404 - No record for the given short identifier."""

    def __init__(self, short_id: str):
        self.short_id = short_id
        super().__init__(
            error="not_found",
            message=f"Model '{short_id}' not found",
            status_code=404,
        )


class ConflictError(ShowcaseAPIException):
    """409 - Short identifier already taken."""

    def __init__(self, short_id: str, attempts: int | None = None):
        self.short_id = short_id
        details = {"shortId": short_id}
        if attempts is not None:
            details["attempts"] = attempts
        super().__init__(
            error="conflict",
            message=f"Short identifier '{short_id}' already exists",
            status_code=409,
            details=details,
        )


class PayloadTooLarge(ShowcaseAPIException):
    """413 - Upload size exceeds limit."""

    def __init__(self, max_size: int):
        max_size_mb = max_size / (1024 * 1024)
        super().__init__(
            error="payload_too_large",
            message=f"Maximum upload size exceeded ({max_size_mb:.0f}MB limit)",
            status_code=413,
        )


class UploadError(ShowcaseAPIException):
    """502 - Object storage rejected or failed the upload."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            error="upload_failed",
            message=message,
            status_code=502,
            details=details,
        )


class InternalError(ShowcaseAPIException):
    """500 - Anything unexpected. Never carries internal detail."""

    def __init__(self, message: str = "An unexpected error occurred"):
        super().__init__(
            error="internal_error",
            message=message,
            status_code=500,
        )
