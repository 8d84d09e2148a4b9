"""Browser driver interface."""

from __future__ import annotations

from typing import Any

from ..errors import DriverNotImplementedError


class BaseDriver:
    """Capability set a browser backend must provide.

    Methods that a concrete driver does not override raise
    DriverNotImplementedError naming the driver class and the method.
    """

    def _missing(self, method: str):
        return DriverNotImplementedError(type(self).__name__, method)

    def goto(self, url: str) -> Any:
        raise self._missing("goto")

    def html(self) -> str:
        raise self._missing("html")

    def title(self) -> str:
        raise self._missing("title")

    def url(self) -> str:
        raise self._missing("url")

    def click(self, selector: str) -> Any:
        raise self._missing("click")

    def fill_in(self, selector: str, text: str) -> Any:
        raise self._missing("fill_in")

    def screenshot(self) -> bytes:
        raise self._missing("screenshot")

    def close(self) -> None:
        """Nothing to release by default."""
