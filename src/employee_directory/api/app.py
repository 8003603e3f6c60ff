"""
Main FastAPI application for the Employee Directory backend
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..config import settings
from ..database.connection import MongoPool
from ..logging import configure_logging, get_logger
from ..middleware import LoggingContextMiddleware
from ..performance import monitor

# Configure logging before creating logger
configure_logging(debug=settings.debug and not settings.is_production)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager.

    uvicorn turns SIGINT/SIGTERM into lifespan shutdown, so the pool is
    always closed on process termination.
    """
    pool: MongoPool = app.state.pool
    logger.info("Starting Employee Directory API...", database=pool.db_name)

    # Warm up the pool; requests reconnect on demand if this fails
    success, error_message = await pool.test_connection()
    if success:
        logger.info("Database connection established")
    else:
        logger.error(
            "Database unavailable at startup",
            error=error_message,
            note="Requests will retry the connection",
        )

    yield

    logger.info("Shutting down Employee Directory API...")
    await pool.close()


def create_app(pool: MongoPool | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="Employee Directory API",
        description="Employee and department records over GraphQL",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug and not settings.is_production,
    )
    app.state.pool = pool or MongoPool.from_settings(settings)

    app.add_middleware(LoggingContextMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check(request: Request):  # pyright: ignore [reportUnusedFunction]
        """Health check endpoint."""
        database_ok = await request.app.state.pool.health_check()
        return {
            "status": "healthy" if database_ok else "degraded",
            "database": database_ok,
            "version": __version__,
        }

    @app.get("/api/stats")
    async def performance_stats():  # pyright: ignore [reportUnusedFunction]
        """Request counts and operation timings since startup."""
        return monitor.get_stats()

    from ..graphql.schema import create_graphql_router, validate_schema

    logger.info("Validating GraphQL schema...")
    validate_schema()

    app.include_router(create_graphql_router(), prefix="")
    logger.info("GraphQL endpoint initialized successfully", endpoint="/graphql")

    return app


# Create the main application instance
app = create_app()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "employee_directory.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
        log_level=settings.log_level.lower(),
    )
