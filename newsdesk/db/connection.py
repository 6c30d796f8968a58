"""PostgreSQL connection handle for the story store."""

import logging
import os
import threading
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional

from psycopg2.extras import RealDictCursor
from psycopg2.pool import ThreadedConnectionPool

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).parent / "schema.sql"


def get_connection_string() -> str:
    """Get database connection string from environment."""
    return os.getenv(
        "DATABASE_URL",
        "postgresql://localhost:5432/newsdesk"
    )


class DatabaseHandle:
    """
    Process-wide owner of the connection pool.

    The pool is created lazily on the first connect() and reused by every
    later call. A failed attempt leaves nothing cached, so the next call
    retries instead of replaying the failure.

    Usage:
        handle = DatabaseHandle()
        with handle.connection() as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT 1")
    """

    def __init__(
        self,
        dsn: Optional[str] = None,
        min_connections: Optional[int] = None,
        max_connections: Optional[int] = None,
    ):
        self.dsn = dsn or get_connection_string()
        self.min_connections = min_connections or int(os.getenv("DB_POOL_MIN_CONN", "1"))
        self.max_connections = max_connections or int(os.getenv("DB_POOL_MAX_CONN", "10"))
        self._pool: Optional[ThreadedConnectionPool] = None
        self._lock = threading.Lock()
        # getconn() raises PoolError when exhausted; borrowers queue here instead
        self._slots = threading.BoundedSemaphore(self.max_connections)

    @property
    def is_connected(self) -> bool:
        return self._pool is not None and not self._pool.closed

    def connect(self) -> ThreadedConnectionPool:
        """Return the live pool, creating it on first use."""
        if self.is_connected:
            return self._pool

        with self._lock:
            if not self.is_connected:
                pool = ThreadedConnectionPool(
                    self.min_connections,
                    self.max_connections,
                    self.dsn,
                    cursor_factory=RealDictCursor,
                )
                self._pool = pool
                logger.info(
                    f"Database pool ready ({self.min_connections}-{self.max_connections} connections)"
                )
            return self._pool

    @contextmanager
    def connection(self) -> Generator:
        """
        Borrow a pooled connection.

        Waits for a free connection when all max_connections are borrowed.
        Commits on success, rolls back on error, and always returns the
        connection to the pool (discarding it if the server closed it).
        """
        pool = self.connect()
        self._slots.acquire()
        try:
            conn = pool.getconn()
            try:
                yield conn
                conn.commit()
            except Exception:
                if not conn.closed:
                    conn.rollback()
                raise
            finally:
                pool.putconn(conn, close=bool(conn.closed))
        finally:
            self._slots.release()

    def close(self) -> None:
        """Close every pooled connection. A later connect() starts a new pool."""
        with self._lock:
            if self._pool is not None and not self._pool.closed:
                self._pool.closeall()
                logger.info("Database pool closed")
            self._pool = None

    def ping(self) -> float:
        """Round-trip a trivial query. Returns latency in milliseconds."""
        start = time.time()
        with self.connection() as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT 1")
                cur.fetchone()
        return (time.time() - start) * 1000

    def init_schema(self) -> None:
        """Apply schema.sql (idempotent DDL)."""
        schema_sql = SCHEMA_PATH.read_text()
        with self.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(schema_sql)
        logger.info("Story schema applied")
