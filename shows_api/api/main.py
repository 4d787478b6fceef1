"""FastAPI application entry point.

Creates and configures the Shows REST API: shows resource, static image
serving, Prometheus metrics and health check.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from sqlalchemy import literal, select

from shows_api.api.routers import shows
from shows_api.api.schemas import DatabaseComponentHealth, HealthComponents, HealthResponse
from shows_api.database.connection import DatabaseConnection
from shows_api.database.repositories.show import ShowRepository
from shows_api.database.store import Store
from shows_api.errors import StoreError
from shows_api.monitoring.middleware import PrometheusMiddleware, mount_metrics
from shows_api.services.shows import ShowService
from shows_api.settings import Settings, get_masked_settings, settings
from shows_api.storage.images import ImageStorage
from shows_api.utils.logger import setup_logger

logger = setup_logger("shows_api.api.main")

# =============================================================================
# LIFESPAN
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Opens the database and bootstraps the shows table unless a store was
    injected into ``create_app``; disposes the pool on shutdown.

    Args:
        app: FastAPI application instance.

    Yields:
        None after startup tasks complete.
    """
    db: DatabaseConnection | None = None
    if getattr(app.state, "show_service", None) is None:
        app_settings: Settings = app.state.settings
        db = DatabaseConnection(app_settings.database)
        await db.create_tables()
        _attach_service(app, db.store)
        logger.info("Shows store opened")
    try:
        yield
    finally:
        if db is not None:
            await db.dispose()
            app.state.show_service = None
            app.state.store = None
            logger.info("Shows store closed")


# =============================================================================
# APPLICATION FACTORY
# =============================================================================


def create_app(app_settings: Settings | None = None, store: Store | None = None) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        app_settings: Settings to use. Defaults to the singleton.
        store: Store to run statements against. When omitted the lifespan
            opens one from ``DATABASE_URL``.

    Returns:
        Configured FastAPI instance.
    """
    app_settings = app_settings or settings
    app = FastAPI(
        title=app_settings.api.title,
        version=app_settings.api.version,
        description="REST API for shows with image uploads",
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.images = ImageStorage.from_settings(app_settings.uploads)
    app.state.show_service = None
    if store is not None:
        _attach_service(app, store)

    _configure_cors(app, app_settings)
    app.add_middleware(PrometheusMiddleware)
    mount_metrics(app)
    _register_routes(app, app_settings)
    _mount_uploads(app)
    logger.debug(f"Application configured: {get_masked_settings(app_settings)}")
    return app


def _attach_service(app: FastAPI, store: Store) -> None:
    """Build the show service around ``store`` and publish it on app.state."""
    app.state.store = store
    app.state.show_service = ShowService(ShowRepository(store), app.state.images)


def _configure_cors(app: FastAPI, app_settings: Settings) -> None:
    """Configure CORS middleware.

    Args:
        app: FastAPI application instance.
        app_settings: Application settings.
    """
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors.origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type"],
    )


def _register_routes(app: FastAPI, app_settings: Settings) -> None:
    """Register the shows router and the health check.

    Args:
        app: FastAPI application instance.
        app_settings: Application settings.
    """
    app.include_router(shows.router, prefix=app_settings.api.prefix)
    app.add_api_route(
        "/health",
        health_check,
        methods=["GET"],
        response_model=HealthResponse,
        tags=["Health"],
        summary="Health check",
        description="Verify API is running and the store answers.",
    )


def _mount_uploads(app: FastAPI) -> None:
    """Serve stored images read-only under their public prefix.

    Mounted last so it doesn't shadow API routes.

    Args:
        app: FastAPI application instance.
    """
    images: ImageStorage = app.state.images
    app.mount(
        images.url_prefix,
        StaticFiles(directory=str(images.directory)),
        name="uploads",
    )


# =============================================================================
# HEALTH
# =============================================================================


async def health_check(request: Request) -> HealthResponse:
    """Health check endpoint.

    Returns:
        API health status with version and store status.
    """
    app_settings: Settings = request.app.state.settings
    return HealthResponse(
        status="healthy",
        version=app_settings.api.version,
        components=HealthComponents(database=await _check_database(request.app)),
    )


async def _check_database(app: FastAPI) -> DatabaseComponentHealth:
    """Run a trivial read through the store."""
    store: Store | None = getattr(app.state, "store", None)
    if store is None:
        return DatabaseComponentHealth(connected=False)
    try:
        await store.query_all(select(literal(1).label("ok")))
    except StoreError:
        return DatabaseComponentHealth(connected=False)
    return DatabaseComponentHealth(connected=True)

