from __future__ import annotations
import logging
import pathlib
import time
import typing as t

import mysql.connector
from mysql.connector import errorcode

from sqlupdate.config import PoolConfig
from sqlupdate.driver import connection
from sqlupdate.errors import SQLUpdateError
from sqlupdate.loader import load_text
from sqlupdate.splitter import split_sql

log = logging.getLogger(__name__)


class ExecutionError(SQLUpdateError):
    """A single statement was rejected by the database."""

    def __init__(self, sql: str, index: int, err: Exception) -> None:
        super().__init__(f"Statement #{index} failed: {err}")
        self.sql: str = sql
        self.index: int = index


class StatementRunner:
    """
    Issues SQL statements, one at a time and in order, through a single
    cursor of an already‑open connection.  The connection itself is owned by
    the caller (see :func:`sqlupdate.driver.connection`); the runner only
    closes the cursor it created.
    """

    def __init__(self, conn, *, logger: logging.Logger | None = None) -> None:
        if conn is None:
            raise ValueError("Please specify a valid connection")
        self.conn = conn
        self.logger: logging.Logger = logger or log
        self.cursor = conn.cursor(buffered=True)
        self.executed: int = 0

    def __enter__(self) -> StatementRunner:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        try:
            self.cursor.close()
        except mysql.connector.Error as err:
            self.logger.warning("Error closing cursor: %s", err, exc_info=True)

    def execute(self, sql: str) -> None:
        """Issue *sql*; any driver error is logged and re‑raised as ExecutionError."""
        index = self.executed + 1
        self.logger.debug(sql)
        try:
            # mysql‑connector skips an empty operation without a round trip
            if not sql:
                raise mysql.connector.errors.ProgrammingError(
                    msg="Query was empty", errno=errorcode.ER_EMPTY_QUERY
                )
            self.cursor.execute(sql)
        except mysql.connector.Error as err:
            self.logger.info("%s", err, exc_info=True)
            raise ExecutionError(sql, index, err) from err
        self.executed = index

    def run(self, statements: t.Iterable[str]) -> int:
        """Execute *statements* in order, stopping at the first failure."""
        for sql in statements:
            self.execute(sql)
        return self.executed


def run_file(
    cfg: PoolConfig,
    path: pathlib.Path | str,
    separator: str | None = None,
    *,
    encoding: str = "utf-8",
    logger: logging.Logger | None = None,
) -> int:
    """
    Load *path*, split it into statements and issue them against a
    connection from the pool described by *cfg*.  Returns the number of
    statements executed.
    """
    logger = logger or log
    statements = split_sql(load_text(path, encoding), separator)
    logger.info("Loaded %d statement(s) from %s", len(statements), path)

    start = time.perf_counter()
    with connection(cfg, logger) as conn, StatementRunner(conn, logger=logger) as runner:
        count = runner.run(statements)
    duration_ms = int((time.perf_counter() - start) * 1000)
    logger.info("Executed %d statement(s) in %d ms", count, duration_ms)
    return count
