"""
Database Configuration Module

This module sets up SQLAlchemy 2.0 for the Library API.

Session Management Pattern
==========================
We use the "session per request" pattern:
1. Request arrives -> create a new session
2. Use session for all database operations in that request
3. Commit on success, rollback on failure
4. Close session when request ends

The GraphQL context getter depends on get_db(), so HTTP requests and
websocket subscriptions both get a session scoped to their lifetime.
A websocket session is closed between operations so an idle
subscription never holds a pooled connection.
"""

import logging
from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine, text
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from library_api.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()


def _engine_options() -> dict[str, Any]:
    """
    Build create_engine() keyword arguments for the configured URL.

    SQLite does not use a QueuePool, so pool sizing only applies to
    server databases.
    """
    if settings.is_sqlite:
        return {"connect_args": {"check_same_thread": False}}

    return {
        "pool_size": settings.db_pool_size,
        "max_overflow": settings.db_max_overflow,
        "pool_pre_ping": True,  # Verify connections are alive before using
    }


# =============================================================================
# Database Engine
# =============================================================================
engine = create_engine(
    settings.database_url,
    echo=settings.debug,  # Log SQL in debug mode
    **_engine_options(),
)


# =============================================================================
# Session Factory
# =============================================================================
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Alembic uses Base.metadata to discover tables for migrations.
    """
    pass


# =============================================================================
# Dependency Injection
# =============================================================================
def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI.

    Creates a session, yields it to the caller and closes it when the
    request (or websocket connection) ends.

    Yields:
        SQLAlchemy Session instance
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# =============================================================================
# Utility Functions
# =============================================================================
def verify_connection() -> None:
    """
    Open a connection and run a trivial query.

    Raises:
        SQLAlchemyError: If the database is unreachable
    """
    with engine.connect() as connection:
        connection.execute(text("SELECT 1"))
    logger.info("Connected to the database")


def is_database_healthy() -> bool:
    """Return True if the database answers a trivial query."""
    try:
        verify_connection()
    except Exception as e:
        logger.warning(f"Database health check failed: {e}")
        return False
    return True


def create_tables() -> None:
    """
    Create all database tables.

    WARNING: In production, use Alembic migrations instead!
    """
    Base.metadata.create_all(bind=engine)

