import logging
from typing import Iterator

from psycopg import Connection
from psycopg_pool import ConnectionPool

from .settings import settings

logger = logging.getLogger(__name__)

# Opened by the app lifespan, not at import time.
pool = ConnectionPool(
    conninfo=settings.DATABASE_URL,
    min_size=settings.DB_POOL_MIN_SIZE,
    max_size=settings.DB_POOL_MAX_SIZE,
    open=False,
)

def get_conn() -> Iterator[Connection]:
    with pool.connection() as conn:
        yield conn

def db_ok() -> bool:
    try:
        with pool.connection() as conn, conn.cursor() as cur:
            cur.execute('select 1;')
            cur.fetchone()
        return True
    except Exception:
        logger.warning("database health probe failed", exc_info=True)
        return False
