"""Database driver interface."""

from __future__ import annotations

from ..errors import DriverNotImplementedError


class BaseDriver:
    """Runs one SQL statement at a time.

    ``perform`` returns ``{"status": "ok" | "error", "result": ...}``. The
    driver alone decides how a statement's result is shaped.
    """

    def perform(self, statement: str) -> dict:
        raise DriverNotImplementedError(type(self).__name__, "perform")

    def close(self) -> None:
        """Release the connection. Safe to call more than once."""
