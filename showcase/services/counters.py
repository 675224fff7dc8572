"""
Counter engine - view and like counters.

Every change is a single atomic UPDATE through the asset store, so
concurrent requests against the same record never lose an increment.
"""

import logging

from showcase.models.asset import Asset
from showcase.services.asset_store import AssetStore

logger = logging.getLogger(__name__)


def normalize_like_delta(change: object) -> int:
    """Exactly -1 unlikes; any other value (booleans included) likes."""
    if isinstance(change, bool) or not isinstance(change, (int, float)):
        return 1
    return -1 if change == -1 else 1


class CounterService:
    """Applies engagement counter changes."""

    def __init__(self, store: AssetStore):
        self.store = store

    async def record_view(self, short_id: str) -> Asset:
        """
        Count one view and return the record with the new view count.

        Raises:
            NotFound: If no asset has this short identifier
        """
        await self.store.apply_counter_delta(short_id, "views", 1)
        asset = await self.store.find_by_short_id(short_id)
        await self.store.commit()
        return asset

    async def apply_like_delta(self, short_id: str, change: object = 1) -> int:
        """
        Like (+1) or unlike (-1); the like count never drops below zero.

        Returns:
            The like count after the change

        Raises:
            NotFound: If no asset has this short identifier
        """
        likes = await self.store.apply_counter_delta(
            short_id, "likes", normalize_like_delta(change), floor=0
        )
        await self.store.commit()
        return likes
