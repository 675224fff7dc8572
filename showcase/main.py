"""
Model Showcase Registry - Main Application Entry Point.

FastAPI application serving uploaded 3D models under short shareable
identifiers, with view/like counters and admin-only editing.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from showcase import __version__
from showcase.api.router import api_router
from showcase.config import Settings, get_settings
from showcase.core.exceptions import InternalError, ShowcaseAPIException
from showcase.db.session import Database
from showcase.schemas.error import ValidationErrorDetail, ValidationErrorResponse
from showcase.services.metrics import MetricsCollector, MetricsMiddleware
from showcase.storage.factory import create_storage_backend

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.
    Opens the record store and object storage; closes them on shutdown.
    """
    settings: Settings = app.state.settings

    logger.info(f"Starting {settings.PROJECT_NAME}")
    logger.info(f"Storage backend: {settings.STORAGE_BACKEND}")
    if not settings.ADMIN_TOKEN:
        logger.warning("ADMIN_TOKEN is not set; upload, edit and delete are disabled")

    database = Database(settings.DATABASE_URL, echo=settings.DEBUG)
    if settings.CREATE_TABLES:
        await database.create_tables()
        logger.info("Database tables ready")

    app.state.db = database
    app.state.storage = create_storage_backend(settings)

    yield

    logger.info(f"Shutting down {settings.PROJECT_NAME}")
    await database.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application for the given (or environment) settings."""
    settings = settings or get_settings()

    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="""
## Model Showcase Registry

Upload 3D models and share them under short public links.

### Features
- **Upload**: model file plus optional background image (admin)
- **Share**: every model gets a short identifier and a view link
- **Engagement**: view and like counters safe under concurrent traffic
- **Inventory**: quantity and sold counters editable by the admin
        """,
        version=__version__,
        openapi_tags=[
            {"name": "models", "description": "3D model records"},
            {"name": "health", "description": "Service health checks"},
        ],
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.metrics = MetricsCollector()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["Content-Type", "x-api-key", "authorization"],
    )
    app.add_middleware(MetricsMiddleware, collector=app.state.metrics)

    @app.exception_handler(ShowcaseAPIException)
    async def showcase_exception_handler(
        request: Request, exc: ShowcaseAPIException
    ) -> JSONResponse:
        """Render API exceptions as {"error", "message", "details"?}."""
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_dict(),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Malformed bodies and out-of-range fields are client errors (400)."""
        body = ValidationErrorResponse(
            details=[
                ValidationErrorDetail(
                    loc=list(err.get("loc", ())),
                    msg=err.get("msg", ""),
                    type=err.get("type", ""),
                )
                for err in exc.errors()
            ]
        )
        return JSONResponse(status_code=400, content=body.model_dump())

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """
        Catch-all exception handler for unexpected errors.
        Logs the full error but returns a sanitized response.
        """
        logger.exception(f"Unexpected error: {exc}")
        error = InternalError()
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    app.include_router(api_router, prefix="/api")

    @app.get("/ping", response_class=PlainTextResponse, tags=["health"])
    async def ping():
        """Liveness probe."""
        return "pong"

    @app.get("/", include_in_schema=False)
    async def root():
        return {
            "name": settings.PROJECT_NAME,
            "version": __version__,
            "docs": "/docs",
            "api": "/api",
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "showcase.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
