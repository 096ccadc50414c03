"""FastAPI application factory — the development masters server."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mfg_console.config import get_settings
from mfg_console.infrastructure.logging.log_config import setup_logging
from mfg_console.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — configure logging and the storage directory."""
    settings = get_settings()
    setup_logging(settings)

    Path(settings.storage_dir).mkdir(parents=True, exist_ok=True)
    logger.info("Serving master data from %s", Path(settings.storage_dir).resolve())

    yield


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Mount API routes
    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "mfg_console.main:app",
        host="0.0.0.0",
        port=8030,
        reload=True,
    )
