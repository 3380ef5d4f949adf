"""FastAPI application wiring for the incident intake backend."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from intake.api.action_items import router as action_items_router
from intake.core.config import settings
from intake.core.error_handling import install_error_handling
from intake.core.logging import configure_logging, get_logger
from intake.db.session import engine, init_db

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    configure_logging()
    await init_db()
    logger.info("app.startup", extra={"environment": settings.environment})
    try:
        yield
    finally:
        await engine.dispose()
        logger.info("app.shutdown")


def create_app() -> FastAPI:
    """Build the application with routes, middleware, and error handling."""
    app = FastAPI(title="KT Intake Actions", version="0.1.0", lifespan=lifespan)

    origins = settings.allowed_cors_origins()
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(origins),
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.get("/health", tags=["health"])
    async def health() -> dict[str, bool]:
        return {"ok": True}

    @app.get("/readyz", tags=["health"])
    async def readyz() -> dict[str, bool]:
        return {"ok": True}

    app.include_router(action_items_router)
    install_error_handling(app)
    return app


app = create_app()
