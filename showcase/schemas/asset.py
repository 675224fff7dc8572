"""
Pydantic schemas for Asset request/response validation.
"""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from showcase.models.asset import DEFAULT_QUANTITY, DEFAULT_SOLD


# ===================
# Shared
# ===================

class AssetInfo(BaseModel):
    """Free-text labels shown in the four corners of the viewer."""

    top_left: str = Field(default="", max_length=500, alias="topLeft")
    top_right: str = Field(default="", max_length=500, alias="topRight")
    bottom_left: str = Field(default="", max_length=500, alias="bottomLeft")
    bottom_right: str = Field(default="", max_length=500, alias="bottomRight")

    model_config = ConfigDict(populate_by_name=True)


# ===================
# Request Schemas
# ===================

class AssetCreate(BaseModel):
    """Form metadata accompanying an upload (POST /api/upload)."""

    name: str | None = Field(
        default=None,
        max_length=255,
        description="Display name; defaults to the uploaded file name",
    )
    qty: int = Field(default=DEFAULT_QUANTITY, ge=0, description="Total supply")
    sold: int = Field(default=DEFAULT_SOLD, ge=0, description="Units sold")
    info: AssetInfo = Field(default_factory=AssetInfo)


class AssetInfoUpdate(BaseModel):
    """Partial update of the corner labels."""

    top_left: str | None = Field(default=None, max_length=500, alias="topLeft")
    top_right: str | None = Field(default=None, max_length=500, alias="topRight")
    bottom_left: str | None = Field(default=None, max_length=500, alias="bottomLeft")
    bottom_right: str | None = Field(default=None, max_length=500, alias="bottomRight")

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    @model_validator(mode="after")
    def reject_explicit_null(self) -> "AssetInfoUpdate":
        _reject_null_fields(self)
        return self


class AssetUpdate(BaseModel):
    """
    Schema for editing an asset (PATCH /api/models/{shortId}).

    Absent keys are left untouched. A key sent with a falsy value
    (0 or "") is applied; a key sent as null is rejected.
    """

    name: str | None = Field(default=None, min_length=1, max_length=255)
    qty: int | None = Field(default=None, ge=0)
    sold: int | None = Field(default=None, ge=0)
    info: AssetInfoUpdate | None = None

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def reject_explicit_null(self) -> "AssetUpdate":
        _reject_null_fields(self)
        return self

    def to_fields(self) -> dict[str, Any]:
        """Flatten the supplied keys into asset column names."""
        fields: dict[str, Any] = {}
        for key in ("name", "qty", "sold"):
            if key in self.model_fields_set:
                fields[key] = getattr(self, key)
        if self.info is not None:
            for key in self.info.model_fields_set:
                fields[f"info_{key}"] = getattr(self.info, key)
        return fields


class LikeRequest(BaseModel):
    """
    Body of POST /api/models/{shortId}/like: {"change": 1 | -1}.

    Bodies that are not a JSON object count as a plain like.
    """

    change: Any = 1


def _reject_null_fields(model: BaseModel) -> None:
    nulls = [key for key in model.model_fields_set if getattr(model, key) is None]
    if nulls:
        raise ValueError(f"Fields may be omitted but not null: {', '.join(sorted(nulls))}")


# ===================
# Response Schemas
# ===================

class AssetResponse(BaseModel):
    """Standard JSON response for a single asset."""

    id: str
    short_id: str = Field(alias="shortId")
    name: str
    model_url: str = Field(alias="modelUrl")
    background_url: str = Field(alias="backgroundUrl")
    info: AssetInfo
    views: int
    likes: int
    qty: int
    sold: int
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        protected_namespaces=(),
    )

    @field_validator("created_at", "updated_at")
    @classmethod
    def as_utc(cls, v: datetime) -> datetime:
        # SQLite hands timestamps back without tzinfo; they were stored as UTC
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)


class UploadResponse(BaseModel):
    """Response of a successful upload."""

    success: bool = True
    model: AssetResponse
    view_link: str = Field(alias="viewLink")

    model_config = ConfigDict(populate_by_name=True)


class LikeResponse(BaseModel):
    likes: int


class DeleteResponse(BaseModel):
    success: bool = True
