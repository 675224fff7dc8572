"""
Ingestion pipeline - turns an uploaded model file plus form metadata into a
stored asset record with a fresh short identifier.

Files are pushed to object storage before the record store is touched, so
no database transaction is held open across the storage round trip.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from fastapi import UploadFile

from showcase.config import Settings
from showcase.core.exceptions import (
    ConflictError,
    PayloadTooLarge,
    UploadError,
    ValidationError,
)
from showcase.models.asset import Asset
from showcase.schemas.asset import AssetCreate
from showcase.services.asset_store import AssetStore
from showcase.services.short_id import generate_short_id
from showcase.storage.base import StorageBackend, build_object_key, get_mime_type

logger = logging.getLogger(__name__)

# Random token in object keys; two uploads of the same file name in the
# same millisecond must not overwrite each other
OBJECT_KEY_TOKEN_LENGTH = 6


@dataclass
class StoredFile:
    """An object written to storage during one ingest."""

    key: str
    url: str


class IngestionService:
    """Creates asset records from uploads."""

    def __init__(
        self,
        store: AssetStore,
        storage: StorageBackend,
        settings: Settings,
        id_generator: Callable[[int], str] = generate_short_id,
    ):
        self.store = store
        self.storage = storage
        self.settings = settings
        self.id_generator = id_generator

    async def ingest(
        self,
        model_file: UploadFile | None,
        background_file: UploadFile | None,
        data: AssetCreate,
    ) -> tuple[Asset, str]:
        """
        Store the files and create exactly one asset record.

        Args:
            model_file: The 3D model upload (required)
            background_file: Optional background image
            data: Form metadata

        Returns:
            Tuple of (created asset, public view link)

        Raises:
            ValidationError: If the model file is missing or empty
            PayloadTooLarge: If a file exceeds MAX_UPLOAD_SIZE
            UploadError: If object storage fails
            ConflictError: If no free short identifier was found
        """
        if not _is_present(model_file):
            raise ValidationError(
                "Model file is required",
                details={"field": "modelFile"},
            )

        model_content = await self._read(model_file)
        if not model_content:
            raise ValidationError(
                "Model file is empty",
                details={"field": "modelFile"},
            )

        background_content = None
        if _is_present(background_file):
            background_content = await self._read(background_file)

        stored: list[str] = []
        try:
            model = await self._store_file(model_file, model_content, stored)

            background = None
            if background_content:
                background = await self._store_file(
                    background_file, background_content, stored
                )

            asset = await self._insert_with_fresh_id(
                name=data.name or model_file.filename,
                model=model,
                background=background,
                data=data,
            )
            await self.store.commit()

        except Exception:
            await self._discard(stored)
            raise

        view_link = f"{self.settings.public_base_url}/view/{asset.short_id}"
        logger.info(f"Ingested model {asset.short_id} ({asset.name})")
        return asset, view_link

    async def _read(self, file: UploadFile) -> bytes:
        content = await file.read()
        if len(content) > self.settings.MAX_UPLOAD_SIZE:
            raise PayloadTooLarge(self.settings.MAX_UPLOAD_SIZE)
        return content

    async def _store_file(
        self, file: UploadFile, content: bytes, stored: list[str]
    ) -> StoredFile:
        """Upload one file, recording its key in ``stored`` for cleanup."""
        key = build_object_key(
            file.filename,
            self.settings.UPLOAD_FOLDER,
            unique=generate_short_id(OBJECT_KEY_TOKEN_LENGTH),
        )
        content_type = get_mime_type(file.filename, fallback=file.content_type)

        await self.storage.upload_bytes(content, key, content_type)
        stored.append(key)
        url = self.storage.get_url(key)

        if not url:
            raise UploadError(
                message="Storage returned no URL for the uploaded file",
                details={"path": key},
            )
        return StoredFile(key=key, url=url)

    async def _insert_with_fresh_id(
        self,
        name: str,
        model: StoredFile,
        background: StoredFile | None,
        data: AssetCreate,
    ) -> Asset:
        max_attempts = self.settings.SHORT_ID_MAX_ATTEMPTS

        attempt = 0
        while True:
            attempt += 1
            asset = Asset(
                short_id=self.id_generator(self.settings.SHORT_ID_LENGTH),
                name=name,
                model_url=model.url,
                model_key=model.key,
                background_url=background.url if background else "",
                background_key=background.key if background else "",
                info_top_left=data.info.top_left,
                info_top_right=data.info.top_right,
                info_bottom_left=data.info.bottom_left,
                info_bottom_right=data.info.bottom_right,
                views=0,
                likes=0,
                qty=data.qty,
                sold=data.sold,
            )
            try:
                return await self.store.insert(asset)
            except ConflictError as e:
                logger.warning(
                    f"Short id collision on '{asset.short_id}' "
                    f"(attempt {attempt}/{max_attempts})"
                )
                if attempt >= max_attempts:
                    raise ConflictError(asset.short_id, attempts=attempt) from e

    async def _discard(self, keys: list[str]) -> None:
        """Best-effort removal of objects written by a failed ingest."""
        for key in keys:
            try:
                await self.storage.delete(key)
            except Exception as e:
                logger.warning(f"Could not remove orphaned object {key}: {e}")


def _is_present(file: UploadFile | None) -> bool:
    return file is not None and bool(file.filename)
