# notes_shared/pool.py
"""
Process-wide PostgreSQL connection pool.

A warm Lambda container keeps module state between invocations, so the pool
is built once, on first demand, and reused until the container is recycled.
The build (secret lookup + pool construction) is single-flight: concurrent
first callers wait on the lock and share the one result.
"""
import logging
import threading
from contextlib import contextmanager

from psycopg.rows import dict_row
from psycopg_pool import ConnectionPool, PoolTimeout

from notes_shared.config import get_settings
from notes_shared.credentials import resolve_credentials
from notes_shared.errors import ConnectionTimeout

logger = logging.getLogger(__name__)


class PoolManager:
    def __init__(self, settings, resolver=resolve_credentials, pool_factory=ConnectionPool):
        self.settings = settings
        self._resolver = resolver
        self._pool_factory = pool_factory
        self._lock = threading.Lock()
        self._pool = None

    def get_pool(self):
        pool = self._pool
        if pool is not None:
            return pool
        with self._lock:
            # a racing caller may have finished the build while we waited
            if self._pool is None:
                self._pool = self._build()
            return self._pool

    def _build(self):
        settings = self.settings
        credentials = self._resolver(settings.db_secret_arn)
        logger.info(
            "Creating DB pool: max=%s, idle_timeout=%ss, connect_timeout=%ss",
            settings.pool_max_size, settings.pool_idle_timeout, settings.db_connect_timeout,
        )
        return self._pool_factory(
            conninfo=credentials.conninfo(settings.db_connect_timeout),
            kwargs={"row_factory": dict_row},
            min_size=0,
            max_size=settings.pool_max_size,
            max_idle=settings.pool_idle_timeout,
            timeout=settings.db_connect_timeout,
            name="notes",
            open=True,
        )

    def reset(self):
        """Close and forget the pool. Deployed handlers never call this."""
        with self._lock:
            pool, self._pool = self._pool, None
        if pool is not None:
            pool.close()


_default_manager = None
_default_lock = threading.Lock()


def default_manager():
    global _default_manager
    if _default_manager is None:
        with _default_lock:
            if _default_manager is None:
                _default_manager = PoolManager(get_settings())
    return _default_manager


def get_pool():
    """Return this process's pool, building it on the first call."""
    return default_manager().get_pool()


@contextmanager
def checkout(pool):
    """Borrow a connection; the block's transaction commits on a clean exit."""
    try:
        with pool.connection() as conn:
            yield conn
    except PoolTimeout as e:
        raise ConnectionTimeout(f"Timed out waiting for a database connection: {e}") from e
