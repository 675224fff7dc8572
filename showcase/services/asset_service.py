"""
Asset service - listing and admin edits of asset records.
"""

import logging
from typing import Sequence

from showcase.core.exceptions import NotFound
from showcase.models.asset import Asset
from showcase.schemas.asset import AssetUpdate
from showcase.services.asset_store import AssetStore
from showcase.storage.base import StorageBackend

logger = logging.getLogger(__name__)


class AssetService:
    """Service class for asset operations."""

    def __init__(self, store: AssetStore, storage: StorageBackend):
        self.store = store
        self.storage = storage

    async def list_models(self) -> Sequence[Asset]:
        """All assets, newest first."""
        return await self.store.list_all()

    async def update(self, short_id: str, data: AssetUpdate) -> Asset:
        """
        Apply an admin edit. Only the keys present in the request change.

        Raises:
            NotFound: If no asset has this short identifier
        """
        asset = await self.store.update_fields(short_id, data.to_fields())
        await self.store.commit()
        logger.info(f"Updated model {short_id}")
        return asset

    async def delete(self, short_id: str) -> None:
        """
        Delete an asset record, then try to remove its stored files.

        Storage cleanup failures are logged; the record stays deleted.

        Raises:
            NotFound: If no asset has this short identifier
        """
        asset = await self.store.delete(short_id)
        if asset is None:
            raise NotFound(short_id)
        await self.store.commit()
        logger.info(f"Deleted model {short_id}")

        for key in (asset.model_key, asset.background_key):
            if not key:
                continue
            try:
                await self.storage.delete(key)
            except Exception as e:
                logger.warning(f"Could not remove stored object {key}: {e}")
