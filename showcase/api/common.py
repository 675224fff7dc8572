"""
Helpers shared by the API routers.
"""

from typing import Any

from showcase.models.asset import Asset
from showcase.schemas.asset import AssetResponse


def asset_to_response(asset: Asset) -> dict[str, Any]:
    """Convert Asset model to its camelCase JSON representation."""
    return AssetResponse.model_validate(asset).model_dump(by_alias=True, mode="json")
