"""
Asset record store - persistence operations keyed by short identifier.

Counter changes are single UPDATE statements evaluated by the database, so
concurrent callers never overwrite each other's increments.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Sequence

from sqlalchemy import case, delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from showcase.core.exceptions import ConflictError, NotFound
from showcase.models.asset import Asset, COUNTER_COLUMNS, INFO_SLOTS

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = frozenset({"name", "qty", "sold", *INFO_SLOTS.values()})


class AssetStore:
    """Data access for Asset records."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def insert(self, asset: Asset) -> Asset:
        """
        Persist a new asset.

        The insert must be the first write of the unit of work: on a
        duplicate short identifier the session is rolled back so the caller
        can retry with a fresh identifier.

        Raises:
            ConflictError: If the short identifier is already taken
        """
        self.db.add(asset)
        try:
            await self.db.flush()
        except IntegrityError as e:
            await self.db.rollback()
            if "short_id" in str(e.orig):
                raise ConflictError(asset.short_id) from e
            raise
        return asset

    async def commit(self) -> None:
        await self.db.commit()

    async def find_by_short_id(self, short_id: str) -> Asset:
        """
        Get asset by short identifier, always reloading column values.

        Raises:
            NotFound: If no asset has this short identifier
        """
        query = (
            select(Asset)
            .where(Asset.short_id == short_id)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(query)
        asset = result.scalar_one_or_none()

        if asset is None:
            raise NotFound(short_id)

        return asset

    async def list_all(self) -> Sequence[Asset]:
        """List every asset, newest first."""
        query = select(Asset).order_by(Asset.created_at.desc(), Asset.id.desc())
        result = await self.db.execute(query)
        return result.scalars().all()

    async def update_fields(self, short_id: str, fields: dict[str, Any]) -> Asset:
        """
        Apply a partial update.

        Only keys present in ``fields`` are written; a key mapped to a falsy
        value (0, "") is still applied.

        Raises:
            NotFound: If no asset has this short identifier
            ValueError: If a field is not editable
        """
        unknown = set(fields) - EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"Fields not editable: {sorted(unknown)}")

        asset = await self.find_by_short_id(short_id)

        for key, value in fields.items():
            setattr(asset, key, value)
        if fields:
            asset.updated_at = datetime.now(timezone.utc)

        await self.db.flush()
        return asset

    async def apply_counter_delta(
        self,
        short_id: str,
        counter: str,
        delta: int,
        floor: int = 0,
    ) -> int:
        """
        Atomically add ``delta`` to a counter, clamping the result at ``floor``.

        Returns:
            The counter value after the update

        Raises:
            NotFound: If no asset has this short identifier
            ValueError: If ``counter`` is not a counter column
        """
        if counter not in COUNTER_COLUMNS:
            raise ValueError(f"Unknown counter: {counter}")

        column = getattr(Asset, counter)
        candidate = column + delta
        stmt = (
            update(Asset)
            .where(Asset.short_id == short_id)
            .values({counter: case((candidate < floor, floor), else_=candidate)})
            .returning(column)
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        value = result.scalar_one_or_none()

        if value is None:
            raise NotFound(short_id)

        return value

    async def delete(self, short_id: str) -> Asset | None:
        """
        Delete an asset.

        Returns:
            The removed row, or None if nothing matched
        """
        stmt = (
            delete(Asset)
            .where(Asset.short_id == short_id)
            .returning(Asset)
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()
