"""Database connection and session management."""

import logging
from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from .config import get_settings
from .models import Base

logger = logging.getLogger(__name__)


def create_db_engine(database_url: str | None = None) -> Engine:
    """Create SQLAlchemy engine with connection pooling.

    SQLite gets a single shared connection when in-memory, since each new
    connection to ``:memory:`` would otherwise see an empty database.
    """
    if database_url is None:
        database_url = get_settings().database_url

    if database_url.startswith("sqlite"):
        if ":memory:" in database_url or database_url == "sqlite://":
            return create_engine(
                database_url,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
                echo=False,
            )
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            echo=False,
        )

    engine = create_engine(
        database_url,
        pool_size=5,
        max_overflow=10,
        pool_pre_ping=True,  # Verify connections before using
        echo=False,  # Set to True for SQL debugging
    )
    return engine


# Create engine and session factory
engine = create_db_engine()
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@contextmanager
def get_db_session() -> Generator[Session, None, None]:
    """Context manager for database sessions.

    Usage:
        with get_db_session() as db:
            db.query(...)
    """
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


@contextmanager
def catalog_transaction(session_factory: sessionmaker | None = None) -> Generator[Session, None, None]:
    """Open one explicit transaction spanning a whole ingestion run.

    Everything written through the yielded session, including rows flushed
    mid-run, is committed together when the block exits normally and rolled
    back together when it raises.

    Args:
        session_factory: Session factory to use. Defaults to ``SessionLocal``.
    """
    factory = session_factory or SessionLocal
    db = factory()
    transaction = db.begin()
    try:
        yield db
        transaction.commit()
        logger.debug("Catalog transaction committed")
    except Exception:
        transaction.rollback()
        logger.warning("Catalog transaction rolled back")
        raise
    finally:
        db.close()


def init_db(bind: Engine | None = None) -> None:
    """Create all catalog tables that do not exist yet."""
    Base.metadata.create_all(bind or engine)
    logger.info("Database tables initialized")


def check_database_health() -> bool:
    """Verify database connection is working.

    Returns:
        True if database is healthy, False otherwise.
    """
    try:
        with get_db_session() as db:
            db.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        return False


def dispose_engine() -> None:
    """Dispose of the engine and all connections.

    Call this during graceful shutdown.
    """
    engine.dispose()


def list_tables() -> list[str]:
    """List all tables in the database.

    Returns:
        List of table names.
    """
    try:
        return inspect(engine).get_table_names()
    except SQLAlchemyError as e:
        logger.error(f"Failed to list tables: {e}")
        return []
