# File: chariot/core/events.py

import logging

from fastapi import FastAPI

from chariot.core.config import settings
from chariot.db.session import engine, init_db

logger = logging.getLogger(__name__)


def setup_event_handlers(app: FastAPI) -> None:
    """
    Set up FastAPI lifecycle event handlers.

    Args:
        app: FastAPI application instance

    Note:
        This function should be called during application initialization
        to properly handle startup and shutdown events.
    """

    @app.on_event("startup")
    async def startup_event():
        logger.info(f"{settings.PROJECT_NAME} starting up ({settings.ENVIRONMENT})")
        if settings.INIT_DB_ON_STARTUP and not init_db():
            logger.error("Database initialization failed during startup")

    @app.on_event("shutdown")
    async def shutdown_event():
        logger.info("Application shutting down")
        engine.dispose()
        logger.info("Database connections released")
