"""Database facade: run SQL statements sequentially.

Example:

    tool = DatabaseTool(driver=SqliteDriver("./db.sqlite"))
    tool.execute(statements=[
        "CREATE TABLE people (id INTEGER PRIMARY KEY, name TEXT NOT NULL)",
        "INSERT INTO people (name) VALUES ('John')",
        "SELECT * FROM people",
    ])

returns one ``{"status", "statement", "result"}`` record per statement that
ran. Execution stops at the first statement whose status is ``error``;
statements that already succeeded are not rolled back.
"""

from __future__ import annotations

import json
import logging
from enum import Enum

from .authorizer import Authorizer
from .base_tool import BaseTool
from .database.driver import BaseDriver
from .database.sqlite_driver import SqliteDriver
from .errors import ParameterError, ToolError

_READ_ONLY_PREFIXES = ("select", "explain")

STATUS_OK = "ok"
STATUS_ERROR = "error"


def _is_read_only(statement: str) -> bool:
    return statement.lstrip().lower().startswith(_READ_ONLY_PREFIXES)


def _statement_list(statements) -> list | None:
    if isinstance(statements, str):
        return [statements]
    if isinstance(statements, (list, tuple)):
        return list(statements)
    return None


class DatabaseTool(BaseTool):
    name = "database_tool"
    description = "Executes SQL commands (INSERT / UPDATE / SELECT / etc) on a database."

    class Action(str, Enum):
        EXECUTE = "execute"

    HANDLERS = {Action.EXECUTE: "_execute_statements"}
    REQUIRED = {Action.EXECUTE: ("statements",)}
    DEFAULT_ACTION = Action.EXECUTE

    def __init__(
        self,
        driver: BaseDriver | None = None,
        logger: logging.Logger | None = None,
        authorizer: Authorizer | None = None,
    ):
        super().__init__(logger=logger, authorizer=authorizer)
        self.driver = driver if driver is not None else SqliteDriver()

    def is_sensitive(self, action, params):
        statements = _statement_list(params.get("statements"))
        if statements is None:
            return False  # rejected by the handler
        return any(not _is_read_only(str(s)) for s in statements)

    def describe(self, action, params):
        statements = _statement_list(params.get("statements")) or []
        return "Run the following SQL statements:\n" + "\n".join(f"  {s}" for s in statements)

    def _execute_statements(self, statements):
        statements = _statement_list(statements)
        if statements is None:
            raise ParameterError(self.name, self.Action.EXECUTE.value, "statements", "must be a list of SQL strings")

        executions = []
        for statement in statements:
            execution = self.perform(statement)
            execution["statement"] = statement
            executions.append(execution)
            if execution["status"] != STATUS_OK:
                break
        return executions

    def perform(self, statement: str) -> dict:
        """Run one statement, converting driver exceptions into an error record."""
        self.logger.info("%s#perform statement=%r", self.name, statement)
        try:
            result = dict(self.driver.perform(statement=statement))
        except ToolError:
            raise
        except Exception as e:
            self.logger.error("%s#perform statement=%r raised: %s", self.name, statement, e)
            result = {"status": STATUS_ERROR, "result": str(e)}
        self.logger.debug(json.dumps(result, default=str))
        return result
