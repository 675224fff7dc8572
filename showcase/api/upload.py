"""
Upload endpoint - creates an asset record from a model file and optional
background image.
"""

from fastapi import APIRouter, Depends, File, Form, UploadFile

from showcase.api.common import asset_to_response
from showcase.auth import require_admin
from showcase.dependencies import AppSettings, DbSession, Storage
from showcase.schemas.asset import AssetCreate, AssetInfo
from showcase.services.asset_store import AssetStore
from showcase.services.ingestion import IngestionService

router = APIRouter()


@router.post("/upload", status_code=201, dependencies=[Depends(require_admin)])
async def upload_model(
    db: DbSession,
    storage: Storage,
    settings: AppSettings,
    modelFile: UploadFile | None = File(default=None, description="3D model file"),
    bgFile: UploadFile | None = File(default=None, description="Optional background image"),
    name: str | None = Form(default=None, max_length=255),
    qty: int | None = Form(default=None, ge=0, description="Total supply (default 100)"),
    sold: int | None = Form(default=None, ge=0, description="Units sold (default 0)"),
    infoTopLeft: str = Form(default="", max_length=500),
    infoTopRight: str = Form(default="", max_length=500),
    infoBottomLeft: str = Form(default="", max_length=500),
    infoBottomRight: str = Form(default="", max_length=500),
):
    """
    Upload a 3D model and create its public record.
    Requires the admin token.

    Returns the created record and its shareable view link.
    """
    fields = {
        "name": name or None,
        "info": AssetInfo(
            top_left=infoTopLeft,
            top_right=infoTopRight,
            bottom_left=infoBottomLeft,
            bottom_right=infoBottomRight,
        ),
    }
    if qty is not None:
        fields["qty"] = qty
    if sold is not None:
        fields["sold"] = sold
    data = AssetCreate(**fields)

    service = IngestionService(AssetStore(db), storage, settings)
    asset, view_link = await service.ingest(modelFile, bgFile, data)

    return {
        "success": True,
        "model": asset_to_response(asset),
        "viewLink": view_link,
    }
