"""
Pytest configuration and fixtures for showcase registry tests.
"""

import io
from collections.abc import AsyncGenerator
from typing import Any

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession

from showcase.config import Settings
from showcase.db.session import Database
from showcase.main import create_app
from showcase.services.asset_store import AssetStore
from showcase.storage import LocalStorageBackend

ADMIN_TOKEN = "test-admin-secret"


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Settings pointing at a per-test SQLite file and storage folder."""
    return Settings(
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        ADMIN_TOKEN=ADMIN_TOKEN,
        FRONTEND_BASE_URL="http://frontend.test/",
        STORAGE_BACKEND="local",
        LOCAL_STORAGE_PATH=str(tmp_path / "storage"),
    )


@pytest_asyncio.fixture
async def database(test_settings: Settings) -> AsyncGenerator[Database, None]:
    """Create a test database with all tables."""
    db = Database(test_settings.DATABASE_URL)
    await db.create_tables()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def db_session(database: Database) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async with database.sessionmaker() as session:
        yield session
        await session.rollback()


@pytest.fixture
def store(db_session: AsyncSession) -> AssetStore:
    return AssetStore(db_session)


@pytest.fixture
def test_storage(test_settings: Settings) -> LocalStorageBackend:
    """Create a test storage backend."""
    return LocalStorageBackend(base_path=test_settings.LOCAL_STORAGE_PATH)


@pytest.fixture
def app(test_settings: Settings, database: Database, test_storage: LocalStorageBackend) -> FastAPI:
    """
    Application wired to the test database and storage.

    ASGITransport does not run the lifespan, so the handles it would
    create are attached directly.
    """
    application = create_app(test_settings)
    application.state.db = database
    application.state.storage = test_storage
    return application


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create a test HTTP client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def admin_headers() -> dict[str, str]:
    """Headers carrying the admin credential."""
    return {"x-api-key": ADMIN_TOKEN}


@pytest.fixture
def sample_file_content() -> bytes:
    """Sample file content for testing uploads."""
    return b"glTF fake binary content for testing"


@pytest.fixture
def upload_model(client: AsyncClient, admin_headers: dict[str, str], sample_file_content: bytes):
    """Upload a model through the API and return the JSON response."""

    async def _upload(
        filename: str = "chair.glb",
        data: dict[str, Any] | None = None,
        background: tuple[str, bytes] | None = None,
    ) -> dict[str, Any]:
        files = {
            "modelFile": (filename, io.BytesIO(sample_file_content), "model/gltf-binary"),
        }
        if background is not None:
            bg_name, bg_content = background
            files["bgFile"] = (bg_name, io.BytesIO(bg_content), "image/png")

        response = await client.post(
            "/api/upload",
            data=data or {},
            files=files,
            headers=admin_headers,
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _upload
