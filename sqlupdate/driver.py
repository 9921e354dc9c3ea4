from __future__ import annotations
import logging
from contextlib import contextmanager

import mysql.connector

from sqlupdate.config import PoolConfig
from sqlupdate.errors import SQLUpdateError

log = logging.getLogger(__name__)


class DBConnectionError(SQLUpdateError):
    """Raised when no connection can be obtained from the named pool."""


class CommitError(SQLUpdateError):
    """Raised when the work done on a non‑autocommit connection cannot be committed."""


def acquire(cfg: PoolConfig):
    """
    Return a connection taken from the pool named after *cfg*.

    mysql‑connector creates the pool on first use and hands out pooled
    connections afterwards; closing one returns it to the pool.
    """
    try:
        return mysql.connector.connect(
            pool_name=cfg.name,
            pool_size=cfg.pool_size,
            autocommit=cfg.autocommit,
            **cfg.dsn(),
        )
    # Illegal pool names are reported by mysql‑connector as AttributeError
    except (mysql.connector.Error, AttributeError) as err:
        raise DBConnectionError(f"Unable to get a connection from pool {cfg.name!r}: {err}") from err


def release(conn, logger: logging.Logger | None = None) -> None:
    """Give *conn* back to its pool.  Failures are logged, never raised."""
    logger = logger or log
    try:
        conn.close()
    except mysql.connector.Error as err:
        logger.warning("Error releasing connection: %s", err, exc_info=True)


@contextmanager
def connection(cfg: PoolConfig, logger: logging.Logger | None = None):
    """
    Context‑manager that yields a pooled connection and releases it exactly
    once, whether or not the body raised.  Outside autocommit mode the work
    is committed only when the body completed.
    """
    conn = acquire(cfg)
    try:
        yield conn
        if not cfg.autocommit:
            try:
                conn.commit()
            except mysql.connector.Error as err:
                raise CommitError(f"Commit on pool {cfg.name!r} failed: {err}") from err
    finally:
        release(conn, logger)
