"""FastAPI application factory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from rolegate import __version__
from rolegate.api import api_router
from rolegate.config import Settings, get_settings
from rolegate.core.database import create_engine, create_session_factory, create_tables
from rolegate.core.errors import register_exception_handlers
from rolegate.core.logging import RequestLoggingMiddleware, configure_logging
from rolegate.core.rbac import AccessControl
from rolegate.modules.tasks import (
    InMemoryTaskStore,
    SqlTaskRepository,
    TaskService,
    TaskStore,
)


logger = structlog.get_logger()


def load_access_control(settings: Settings) -> AccessControl:
    """Build the engine from the configured bootstrap file, or empty."""
    if settings.bootstrap_path is None:
        logger.warning("bootstrap_missing", detail="starting with an empty role graph")
        return AccessControl(max_depth=settings.max_hierarchy_depth)
    return AccessControl.from_file(
        settings.bootstrap_path, max_depth=settings.max_hierarchy_depth
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler.

    Opens the SQL task store when one is configured and no store was
    supplied to ``create_app``.
    """
    settings: Settings = app.state.settings
    engine = None

    logger.info(
        "application_startup",
        app_name=settings.app_name,
        environment=settings.environment,
    )

    if getattr(app.state, "task_service", None) is None and settings.database_url:
        engine = create_engine(settings.database_url, echo=settings.database_echo)
        await create_tables(engine)
        store = SqlTaskRepository(create_session_factory(engine))
        app.state.task_service = TaskService(
            app.state.access.resolver, store, owner_source=settings.owner_source
        )
        logger.info("database_connected")

    yield

    logger.info("application_shutdown")
    if engine is not None:
        await engine.dispose()
        logger.info("database_closed")


def create_app(
    settings: Settings | None = None,
    access: AccessControl | None = None,
    store: TaskStore | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to use (defaults to the cached environment settings)
        access: Prebuilt RBAC engine (defaults to one loaded from settings)
        store: Task store (defaults to SQL when a database URL is set,
            otherwise in memory)

    Returns:
        Configured FastAPI application instance.
    """
    settings = settings or get_settings()
    configure_logging(settings)

    if access is None:
        access = load_access_control(settings)

    app = FastAPI(
        title=settings.app_name,
        description="Hierarchical role-based access control for tasks",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
        openapi_url="/openapi.json" if not settings.is_production else None,
    )

    app.state.settings = settings
    app.state.access = access

    if store is None and not settings.database_url:
        store = InMemoryTaskStore()
    if store is not None:
        app.state.task_service = TaskService(
            access.resolver, store, owner_source=settings.owner_source
        )

    app.add_middleware(RequestLoggingMiddleware)

    # Register exception handlers for RFC 7807 error responses
    register_exception_handlers(app)

    app.include_router(api_router)

    return app
