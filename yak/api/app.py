"""
FastAPI application factory.

``create_app()`` assembles the application with CORS, error handlers,
the transcription router, and the health endpoint. The module-level
``app`` instance allows ``uvicorn yak.api.app:app --reload``.
"""

import logging
from datetime import UTC, datetime

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from yak.api.middleware.error_handler import register_error_handlers
from yak.api.routes import transcribe
from yak.core.config import get_settings
from yak.core.models import HealthResponse


def create_app() -> FastAPI:
    """Build and return a fully configured FastAPI application.

    Returns:
        FastAPI: The configured application, ready for ``uvicorn``.
    """
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
    )

    app = FastAPI(
        title="yak",
        description="Upload or record audio and get a time-aligned, clickable transcript.",
        version="0.1.0",
    )

    # -- CORS --
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -- Error handlers --
    register_error_handlers(app)

    # -- Health check --
    @app.get("/health", response_model=HealthResponse, tags=["system"])
    async def health() -> HealthResponse:
        return HealthResponse(timestamp=datetime.now(UTC))

    # -- REST routes --
    app.include_router(transcribe.router, prefix="/api")

    return app


app = create_app()
