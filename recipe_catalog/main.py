"""Main application entry point with FastAPI and startup catalog seeding."""

import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from pydantic import ValidationError

from . import database
from .config import get_settings
from .seeder import seed_catalog

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def validate_environment():
    """Validate all environment variables on startup."""
    try:
        settings = get_settings()
        logger.info("Environment variables validated successfully")
        return settings
    except ValidationError as e:
        logger.error("ERROR: Invalid environment variables:")
        logger.error(str(e))
        sys.exit(1)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown."""
    # Startup
    logger.info("Starting Recipe Catalog...")

    settings = validate_environment()
    logging.getLogger().setLevel(settings.log_level)

    if settings.auto_create_tables:
        database.init_db()

    tables = database.list_tables()
    logger.info(f"Tables in database: {tables}")

    if settings.seed_on_startup:
        app.state.seed_result = seed_catalog(settings, database.SessionLocal)
    else:
        logger.info("Catalog seeding disabled (SEED_ON_STARTUP=false)")
        app.state.seed_result = None

    logger.info("Recipe Catalog started successfully")

    yield

    # Shutdown
    logger.info("Shutting down Recipe Catalog...")
    database.dispose_engine()
    logger.info("Recipe Catalog shutdown complete")


# Create FastAPI app
app = FastAPI(
    title="Recipe Catalog",
    description="Read-only recipe catalog seeded from a bundled dataset",
    version="1.0.0",
    lifespan=lifespan,
)


@app.get("/health")
async def health_check():
    """Health check endpoint.

    Verifies database connection and returns status.
    """
    db_healthy = database.check_database_health()

    if db_healthy:
        return {
            "status": "healthy",
            "database": "connected",
        }
    else:
        return {
            "status": "unhealthy",
            "database": "disconnected",
        }


@app.get("/")
async def root():
    """Root endpoint."""
    seed_result = getattr(app.state, "seed_result", None)
    return {
        "name": "Recipe Catalog",
        "status": "running",
        "version": "1.0.0",
        "seed": seed_result.state.value if seed_result else None,
    }
