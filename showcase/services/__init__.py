"""
Business logic services.
Services handle record lifecycle and counter operations separate from API endpoints.
"""

from showcase.services.asset_service import AssetService
from showcase.services.asset_store import AssetStore
from showcase.services.counters import CounterService, normalize_like_delta
from showcase.services.ingestion import IngestionService
from showcase.services.short_id import generate_short_id

__all__ = [
    "AssetService",
    "AssetStore",
    "CounterService",
    "IngestionService",
    "generate_short_id",
    "normalize_like_delta",
]
