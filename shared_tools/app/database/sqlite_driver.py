"""SQLite driver backed by the stdlib sqlite3 module."""

from __future__ import annotations

import logging
import os
import sqlite3

from .driver import BaseDriver

logger = logging.getLogger(__name__)

DATABASE_PATH = os.getenv("DATABASE_PATH", ":memory:")


class SqliteDriver(BaseDriver):
    """Executes statements on one SQLite connection in autocommit mode.

    Row-returning statements produce a list of rows (each a list); other
    statements produce an affected-row message. SQLite errors are reported
    as ``{"status": "error", "result": <message>}``.
    """

    def __init__(self, database: str | None = None, connection: sqlite3.Connection | None = None):
        self.database = database or DATABASE_PATH
        self._conn = connection
        self._closed = False

    @property
    def connection(self) -> sqlite3.Connection:
        if self._closed:
            raise sqlite3.ProgrammingError("Cannot operate on a closed database.")
        if self._conn is None:
            # the router serves requests from a thread pool
            self._conn = sqlite3.connect(self.database, isolation_level=None, check_same_thread=False)
            logger.info("Opened SQLite database %s", self.database)
        return self._conn

    def perform(self, statement: str) -> dict:
        try:
            cursor = self.connection.execute(statement)
            if cursor.description is not None:
                rows = [list(row) for row in cursor.fetchall()]
                return {"status": "ok", "result": rows}
            count = max(cursor.rowcount, 0)
            return {"status": "ok", "result": f"{count} row(s) affected"}
        except sqlite3.Error as e:
            logger.warning("SQLite statement failed: %s", e)
            return {"status": "error", "result": str(e)}

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._conn is not None:
            self._conn.close()
            self._conn = None
            logger.info("Closed SQLite database %s", self.database)
