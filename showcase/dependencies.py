"""
FastAPI dependency injection functions.
Provides common dependencies used across endpoints.
"""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from showcase.config import Settings
from showcase.db.session import get_db
from showcase.services.metrics import MetricsCollector, get_metrics_collector
from showcase.storage import StorageBackend, get_storage


def get_app_settings(request: Request) -> Settings:
    """Settings the application was created with."""
    return request.app.state.settings


# Type aliases for cleaner endpoint signatures
DbSession = Annotated[AsyncSession, Depends(get_db)]
Storage = Annotated[StorageBackend, Depends(get_storage)]
AppSettings = Annotated[Settings, Depends(get_app_settings)]
Metrics = Annotated[MetricsCollector, Depends(get_metrics_collector)]
