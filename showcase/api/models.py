"""
Model endpoints - public read/like access and admin edit/delete.
"""

from fastapi import APIRouter, Depends, Request

from showcase.api.common import asset_to_response
from showcase.auth import require_admin
from showcase.dependencies import DbSession, Storage
from showcase.schemas.asset import AssetUpdate, LikeRequest
from showcase.services.asset_service import AssetService
from showcase.services.asset_store import AssetStore
from showcase.services.counters import CounterService

router = APIRouter()


@router.get("")
async def list_models(db: DbSession, storage: Storage):
    """List every model, newest first."""
    service = AssetService(AssetStore(db), storage)
    assets = await service.list_models()
    return [asset_to_response(asset) for asset in assets]


@router.get("/{short_id}")
async def get_model(short_id: str, db: DbSession):
    """
    Get a model by its short identifier.
    Each successful fetch counts as one view; the response carries the
    updated count.
    """
    service = CounterService(AssetStore(db))
    asset = await service.record_view(short_id)
    return asset_to_response(asset)


async def _read_like_change(request: Request) -> object:
    """The "change" of a JSON object body; 1 for any other body."""
    try:
        payload = await request.json()
    except ValueError:
        return 1
    if not isinstance(payload, dict):
        return 1
    return LikeRequest.model_validate(payload).change


@router.post("/{short_id}/like")
async def like_model(short_id: str, request: Request, db: DbSession):
    """
    Like ({"change": 1}, the default) or unlike ({"change": -1}) a model.
    The like count never goes below zero.
    """
    change = await _read_like_change(request)
    service = CounterService(AssetStore(db))
    likes = await service.apply_like_delta(short_id, change)
    return {"likes": likes}


@router.patch("/{short_id}", dependencies=[Depends(require_admin)])
async def update_model(
    short_id: str,
    data: AssetUpdate,
    db: DbSession,
    storage: Storage,
):
    """
    Edit name, quantity, sold count or corner labels.
    Requires the admin token. Keys left out of the body are untouched.
    """
    service = AssetService(AssetStore(db), storage)
    asset = await service.update(short_id, data)
    return asset_to_response(asset)


@router.delete("/{short_id}", dependencies=[Depends(require_admin)])
async def delete_model(short_id: str, db: DbSession, storage: Storage):
    """
    Delete a model record.
    Requires the admin token. Stored files are removed on a best-effort basis.
    """
    service = AssetService(AssetStore(db), storage)
    await service.delete(short_id)
    return {"success": True}
