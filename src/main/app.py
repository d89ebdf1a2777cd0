"""
HTTP Application - Main Layer

Builds the FastAPI application that exposes the bridge: device snapshots,
command dispatch, scenes and engine health. The sync engine itself is started
and unloaded by the application lifespan.

Run with: uvicorn src.main.app:app
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.main.config import AppSettings, get_settings
from src.main.container import app_lifespan, init_container
from src.presentation.controllers import devices_router, scenes_router, system_router
from src.shared import configure_logging, get_logger, update_logging_from_settings

# Bootstrap logging from env vars until the settings object exists
configure_logging()

settings = get_settings()
update_logging_from_settings(settings)

logger = get_logger(__name__)

ROUTERS = (devices_router, scenes_router, system_router)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Start the engine with the server and unload it on server shutdown."""
    app.state.started_at = datetime.now(timezone.utc)
    logger.info("app.starting", started_at=app.state.started_at.isoformat())

    async with app_lifespan() as container:
        app.state.container = container
        yield

    logger.info("app.stopped")


def _allow_any_origin(app: FastAPI) -> None:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def create_app(app_settings: AppSettings | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_settings: Settings to build the container from; loaded from the
            environment when omitted

    Returns:
        FastAPI: The configured FastAPI application
    """
    app_settings = app_settings or get_settings()
    init_container(app_settings)

    app = FastAPI(
        title=app_settings.app.title,
        description=app_settings.app.description,
        version=app_settings.app.version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    _allow_any_origin(app)

    for router in ROUTERS:
        app.include_router(router)

    return app


app = create_app(settings)
