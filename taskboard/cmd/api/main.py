"""
FastAPI Service - Main entry point for the Taskboard API.
- Routes are separated into modules
- Storage backend (SQLite or MongoDB) selected by configuration
- Storage handle built here and injected through the container
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from taskboard.core.config import Settings, get_settings
from taskboard.core.container import bootstrap_container, build_repository
from taskboard.core.database import DatabaseManager, create_database
from taskboard.core.logger import logger
from taskboard.internal.api.error_handlers import register_exception_handlers
from taskboard.internal.api.routes import create_health_routes, create_task_routes
from taskboard.ports.repository import TaskRepositoryPort


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan - startup and shutdown.
    Connects the storage backend on startup and releases it on shutdown.
    """
    settings: Settings = app.state.settings
    database: Optional[DatabaseManager] = app.state.database

    logger.info(
        f"========== Starting {settings.app_name} v{settings.app_version} API service =========="
    )
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"API: {settings.api_host}:{settings.api_port}{settings.api_prefix}")

    if database is not None:
        logger.info(f"Initializing {database.name} storage backend...")
        await database.connect()
        await database.init_schema()
        if await database.health_check():
            logger.info("Storage health check passed")
        else:
            logger.warning("Storage health check failed")
    else:
        logger.info("Using injected task repository; no database to connect")

    logger.info(f"========== {settings.app_name} API service started ==========")

    try:
        yield
    finally:
        logger.info("========== Shutting down API service ==========")
        if database is not None:
            await database.disconnect()
        logger.info("========== API service stopped ==========")


def create_app(
    settings: Optional[Settings] = None,
    repository: Optional[TaskRepositoryPort] = None,
) -> FastAPI:
    """
    Factory function to create and configure the FastAPI application.

    Args:
        settings: Settings to use, defaults to get_settings()
        repository: Task repository to inject; when omitted one is built for
            the configured storage backend and connected during lifespan

    Returns:
        FastAPI: Configured application instance
    """
    settings = settings or get_settings()
    logger.info("Creating FastAPI application...")

    database: Optional[DatabaseManager] = None
    if repository is None:
        database = create_database(settings)
        repository = build_repository(database)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Minimal task-tracking API: create, list, update and delete tasks.",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "Tasks", "description": "Task CRUD operations."},
            {"name": "Health", "description": "Service and storage health."},
        ],
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    app.state.settings = settings
    app.state.database = database
    app.state.container = bootstrap_container(repository)

    origins = settings.cors_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(create_health_routes(), prefix=settings.api_prefix)
    app.include_router(create_task_routes(), prefix=settings.api_prefix)
    logger.debug(f"Routes registered under {settings.api_prefix or '/'}")

    register_exception_handlers(app)

    logger.info("FastAPI application created successfully")
    return app


def main() -> None:
    """Run the API with Uvicorn."""
    import uvicorn

    settings = get_settings()
    logger.info("========== Starting Uvicorn Server ==========")
    logger.info(f"Host: {settings.api_host}")
    logger.info(f"Port: {settings.api_port}")
    logger.info(f"Reload: {settings.api_reload}")

    uvicorn.run(
        "taskboard.cmd.api.main:create_app",
        factory=True,
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
        log_level="info" if settings.debug else "warning",
    )


# Run with: uvicorn taskboard.cmd.api.main:create_app --factory --port 4000
if __name__ == "__main__":
    main()
