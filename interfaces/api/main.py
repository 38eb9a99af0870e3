"""Main FastAPI application."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from application.ports.blob_store import BlobStore
from infrastructure.config import settings
from infrastructure.logging import setup_logging
from interfaces.api.middleware import log_requests, register_exception_handlers
from interfaces.api.routes.bucket_routes import router as bucket_router
from interfaces.api.routes.object_routes import router as object_router
from interfaces.dependencies import get_container

# Configure structured logging
setup_logging()

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown."""
    logger.info("app_starting", env=settings.app_env)

    container = app.dependency_overrides.get(get_container, get_container)()
    container[BlobStore].ensure_root()

    logger.info("app_ready", url=settings.base_url, data_dir=str(settings.data_dir))

    yield

    logger.info("app_stopped")


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    app = FastAPI(
        title=settings.app_name,
        description="Local emulator of the Cloud Storage JSON API",
        version="1.0.0",
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["*"],
    )
    app.middleware("http")(log_requests)

    register_exception_handlers(app)

    # Include routers
    app.include_router(bucket_router)
    app.include_router(object_router)

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


# Create app instance
app = create_app()


def run() -> None:
    """Serve the emulator with uvicorn on the configured host and port."""
    uvicorn.run(app, host=settings.api_host, port=settings.api_port, log_config=None)


if __name__ == "__main__":
    run()
