"""Computer (mouse / keyboard) driver interface.

Coordinates are ``{"x": int, "y": int}`` dicts; buttons are "left",
"middle" or "right"; scroll directions are "up", "down", "left", "right".
"""

from __future__ import annotations

from typing import Any

from ..errors import DriverNotImplementedError


class BaseDriver:
    def _missing(self, method: str):
        return DriverNotImplementedError(type(self).__name__, method)

    def key(self, text: str) -> Any:
        raise self._missing("key")

    def hold_key(self, text: str, duration: float) -> Any:
        raise self._missing("hold_key")

    def mouse_position(self) -> dict:
        raise self._missing("mouse_position")

    def mouse_move(self, coordinate: dict) -> Any:
        raise self._missing("mouse_move")

    def mouse_click(self, coordinate: dict, button: str = "left") -> Any:
        raise self._missing("mouse_click")

    def mouse_double_click(self, coordinate: dict, button: str = "left") -> Any:
        raise self._missing("mouse_double_click")

    def mouse_triple_click(self, coordinate: dict, button: str = "left") -> Any:
        raise self._missing("mouse_triple_click")

    def mouse_down(self, coordinate: dict, button: str = "left") -> Any:
        raise self._missing("mouse_down")

    def mouse_up(self, coordinate: dict, button: str = "left") -> Any:
        raise self._missing("mouse_up")

    def mouse_drag(self, coordinate: dict, button: str = "left") -> Any:
        raise self._missing("mouse_drag")

    def type(self, text: str) -> Any:
        raise self._missing("type")

    def scroll(self, direction: str, amount: int) -> Any:
        raise self._missing("scroll")

    def wait(self, duration: float) -> Any:
        raise self._missing("wait")

    def close(self) -> None:
        """Nothing to release by default."""
