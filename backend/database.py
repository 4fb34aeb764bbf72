"""Database connection pool and per-request connection handling.

The pool is a SQLAlchemy engine created once by `init_db()`. Route handlers
work with raw DBAPI connections checked out of it, so stored procedures and
OUT binds go straight through the oracledb driver.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy.engine import Engine
from sqlmodel import create_engine

from .config import DatabaseConfig, LibraryApiConfig
from .errors import DatabaseOperationError
from .logging_config import get_logger

logger = get_logger(__name__)

engine: Optional[Engine] = None


def _build_engine(db_config: DatabaseConfig) -> Engine:
    return create_engine(
        db_config.engine_url,
        connect_args=db_config.connect_args,
        pool_pre_ping=True,
    )


def init_db(config: LibraryApiConfig) -> Engine:
    """Create the connection pool and check that one connection can be opened.

    Raises whatever the driver raises when the database is unreachable; the
    server must not start listening in that case.
    """
    global engine
    new_engine = _build_engine(config.database)
    with new_engine.connect():
        pass
    engine = new_engine
    logger.info("Database connection pool ready")
    return engine


def dispose_db() -> None:
    """Close every pooled connection and forget the engine."""
    global engine
    if engine is not None:
        engine.dispose()
        engine = None


def get_engine() -> Engine:
    """Return the global engine instance."""
    if engine is None:
        raise RuntimeError("Database not initialized")
    return engine


def get_connection():
    """Check a raw DBAPI connection out of the pool. close() returns it."""
    return get_engine().raw_connection()


def release_connection(conn) -> None:
    """Return a connection to the pool; failures here are ignored."""
    try:
        conn.close()
    except Exception as exc:
        logger.debug(f"Ignoring connection release failure: {exc}")


@contextmanager
def db_connection() -> Iterator:
    """Context manager for pooled connections. Auto-releases on exit."""
    conn = get_connection()
    try:
        yield conn
    finally:
        release_connection(conn)


@contextmanager
def db_operation(error_message: str) -> Iterator:
    """Run one request's database work on a pooled connection.

    Any failure (including failing to acquire the connection) is logged and
    re-raised as DatabaseOperationError(error_message). The connection is
    released exactly once whether the body succeeds or not.
    """
    conn = None
    try:
        conn = get_connection()
        yield conn
    except Exception as exc:
        logger.error(f"{error_message}: {exc}")
        raise DatabaseOperationError(error_message) from exc
    finally:
        if conn is not None:
            release_connection(conn)


def check_connection() -> bool:
    """True when a connection can be checked out and released."""
    try:
        with db_connection():
            return True
    except Exception as exc:
        logger.error(f"Database health check failed: {exc}")
        return False
