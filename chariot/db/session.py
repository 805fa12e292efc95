"""
Database session management for Chariot.

This module provides the SQLAlchemy engine, the session factory, the
FastAPI session dependency and schema initialization.

Usage:
    from chariot.db.session import get_db

    # In FastAPI dependency
    def some_endpoint(db: Session = Depends(get_db)):
        # Use db for database operations
        ...
"""

import logging
from typing import Generator

from sqlalchemy import create_engine, event, inspect, text
from sqlalchemy.orm import Session, sessionmaker

from chariot.core.config import settings
from chariot.db.models import Base

# Configure module logger
logger = logging.getLogger(__name__)

_is_sqlite = settings.DATABASE_URL.startswith("sqlite")

logger.info(f"Creating SQLAlchemy engine for {settings.DATABASE_URL}")
engine = create_engine(
    settings.DATABASE_URL,
    connect_args={"check_same_thread": False} if _is_sqlite else {},
    pool_pre_ping=True,
    echo=settings.DEBUG,
)

if _is_sqlite:

    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON;")
        cursor.close()


# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


# -----------------------------------------------------------------------------
# FastAPI Dependency
# -----------------------------------------------------------------------------


def get_db() -> Generator[Session, None, None]:
    """
    Get a database session with proper resource management.

    Returns:
        SQLAlchemy Session for database operations
    """
    db = SessionLocal()
    logger.debug("Opened DB session")
    try:
        yield db
    except Exception as e:
        logger.error(f"Error in get_db: {e}")
        raise
    finally:
        db.close()
        logger.debug("Closed DB session")


# -----------------------------------------------------------------------------
# Database Verification and Initialization
# -----------------------------------------------------------------------------


def verify_db_connection() -> bool:
    """
    Verify that we can connect to the database.

    Returns:
        True if connection succeeds, False otherwise
    """
    try:
        with engine.connect() as connection:
            result = connection.execute(text("SELECT 1")).scalar()
            logger.info(f"Database connection verified: {result}")
            return True
    except Exception as e:
        logger.error(f"Database connection verification failed: {e}")
        return False


def init_db(reset: bool = False) -> bool:
    """
    Initialize the database schema.

    Args:
        reset: Whether to reset (drop and recreate) the database

    Returns:
        True if initialization succeeds, False otherwise
    """
    logger.info("Initializing database schema...")

    try:
        if not verify_db_connection():
            logger.error("Engine connection test failed before create_all")
            return False

        if reset:
            logger.info("Dropping all tables for reset...")
            Base.metadata.drop_all(bind=engine)
            logger.info("Tables dropped successfully")

        logger.info("Creating tables via SQLAlchemy...")
        Base.metadata.create_all(bind=engine)

        table_names = inspect(engine).get_table_names()
        logger.info(f"Database schema initialized with {len(table_names)} tables: {table_names}")
        return True
    except Exception as e:
        logger.error(f"Database schema initialization failed: {str(e)}")
        logger.exception("Database initialization error details:")
        return False
