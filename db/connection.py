"""
db/connection.py
----------------
Builds the PostgreSQL connection pool.
Uses psycopg2's ThreadedConnectionPool so one pool can be shared by
concurrent callers. The pool is created once at startup and handed to
the repositories explicitly; this module keeps no pool of its own.
"""

import psycopg2
from psycopg2 import pool

from config import DATABASE_URL, DB_POOL_MAX, DB_POOL_MIN
from utils.logger import get_logger

logger = get_logger(__name__)


def create_pool(
    dsn: str = DATABASE_URL,
    min_conn: int = DB_POOL_MIN,
    max_conn: int = DB_POOL_MAX,
) -> pool.ThreadedConnectionPool:
    """
    Create the database connection pool.

    Args:
        dsn: libpq connection string or URL.
        min_conn: Minimum number of connections to keep open.
        max_conn: Maximum number of connections allowed.

    Returns:
        A ready ThreadedConnectionPool.

    Raises:
        psycopg2.OperationalError: If the database is unreachable.
    """
    try:
        db_pool = pool.ThreadedConnectionPool(min_conn, max_conn, dsn)
    except psycopg2.OperationalError as e:
        logger.error(f"Failed to initialize database pool: {e}")
        raise
    logger.info("Database connection pool initialized successfully.")
    return db_pool


def ping(db_pool: pool.AbstractConnectionPool) -> bool:
    """
    Check that the database answers a trivial query.

    Returns:
        True when ``SELECT 1`` succeeds. Driver errors propagate.
    """
    conn = db_pool.getconn()
    try:
        with conn.cursor() as cur:
            cur.execute("SELECT 1;")
            cur.fetchone()
        conn.rollback()
        return True
    except psycopg2.Error as e:
        logger.error(f"Database ping failed: {e}")
        raise
    finally:
        db_pool.putconn(conn, close=bool(conn.closed))


def close_pool(db_pool: pool.AbstractConnectionPool) -> None:
    """Close all connections in the pool."""
    db_pool.closeall()
    logger.info("Database connection pool closed.")
