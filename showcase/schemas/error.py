"""
Pydantic schemas for error responses.
"""

from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    Standard error response format.

    Examples:
        400: {"error": "validation_failed", "message": "Model file is required"}
        401: {"error": "unauthorized", "message": "Missing admin token"}
        404: {"error": "not_found", "message": "Model 'abc' not found"}
        502: {"error": "upload_failed", "message": "Failed to upload file to S3: ..."}
    """

    error: str = Field(
        ...,
        description="Error code string",
        examples=["validation_failed", "unauthorized", "not_found", "conflict"],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] | None = Field(
        default=None,
        description="Optional additional error details",
    )


class ValidationErrorDetail(BaseModel):
    """Detail for validation errors."""

    loc: list[str | int]
    msg: str
    type: str


class ValidationErrorResponse(BaseModel):
    """Response for request validation errors (400)."""

    error: str = "validation_failed"
    message: str = "Request validation failed"
    details: list[ValidationErrorDetail]
