"""
Health and metrics endpoints.
No authentication required.
"""

import logging

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

from showcase.db.session import Database
from showcase.dependencies import DbSession, Metrics
from showcase.models.asset import Asset

logger = logging.getLogger(__name__)

router = APIRouter()


async def _count_assets(db) -> int:
    result = await db.execute(select(func.count(Asset.id)))
    return result.scalar() or 0


@router.get("/health")
async def health_check(request: Request):
    """
    Service health check endpoint.

    Returns:
        {"status": "ok", "database": <dialect>} when the database answers
        {"status": "degraded", "issues": [...]} otherwise
    """
    database: Database = request.app.state.db

    try:
        await database.ping()
    except (SQLAlchemyError, OSError) as e:
        logger.warning(f"Health check failed: {e}")
        return {
            "status": "degraded",
            "issues": [f"Database: {e}"],
        }

    return {
        "status": "ok",
        "database": database.engine.dialect.name,
    }


@router.get("/metrics")
async def metrics(db: DbSession, collector: Metrics):
    """Request metrics plus the number of stored models, as JSON."""
    metrics_data = collector.get_metrics()
    metrics_data["models"] = {"total": await _count_assets(db)}
    return metrics_data


@router.get("/metrics/prometheus", response_class=PlainTextResponse)
async def metrics_prometheus(db: DbSession, collector: Metrics):
    """
    Prometheus text exposition format endpoint.
    Compatible with Prometheus scraping.
    """
    gauges = {
        "models_total": ("Total number of stored models", await _count_assets(db)),
    }
    return PlainTextResponse(
        content=collector.to_prometheus(gauges),
        media_type="text/plain; version=0.0.4; charset=utf-8",
    )
