"""
API Router - Aggregates all endpoints.
Base Path: /api
"""

from fastapi import APIRouter

from showcase.api import health, models, upload

api_router = APIRouter()

# Include endpoint routers
api_router.include_router(health.router, tags=["health"])
api_router.include_router(upload.router, tags=["models"])
api_router.include_router(models.router, prefix="/models", tags=["models"])
