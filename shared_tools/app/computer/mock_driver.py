"""Computer driver test double that records calls and tracks the cursor."""

from __future__ import annotations

from .driver import BaseDriver


class MockDriver(BaseDriver):
    def __init__(self, position: dict | None = None):
        self.position = dict(position or {"x": 0, "y": 0})
        self.calls: list[tuple[str, dict]] = []
        self.typed: list[str] = []

    def _record(self, method: str, **kwargs) -> dict:
        self.calls.append((method, kwargs))
        return {"method": method, **kwargs}

    def key(self, text):
        return self._record("key", text=text)

    def hold_key(self, text, duration):
        return self._record("hold_key", text=text, duration=duration)

    def mouse_position(self):
        self.calls.append(("mouse_position", {}))
        return dict(self.position)

    def mouse_move(self, coordinate):
        self.position = dict(coordinate)
        return self._record("mouse_move", coordinate=coordinate)

    def mouse_click(self, coordinate, button="left"):
        self.position = dict(coordinate)
        return self._record("mouse_click", coordinate=coordinate, button=button)

    def mouse_double_click(self, coordinate, button="left"):
        self.position = dict(coordinate)
        return self._record("mouse_double_click", coordinate=coordinate, button=button)

    def mouse_triple_click(self, coordinate, button="left"):
        self.position = dict(coordinate)
        return self._record("mouse_triple_click", coordinate=coordinate, button=button)

    def mouse_down(self, coordinate, button="left"):
        self.position = dict(coordinate)
        return self._record("mouse_down", coordinate=coordinate, button=button)

    def mouse_up(self, coordinate, button="left"):
        self.position = dict(coordinate)
        return self._record("mouse_up", coordinate=coordinate, button=button)

    def mouse_drag(self, coordinate, button="left"):
        self.position = dict(coordinate)
        return self._record("mouse_drag", coordinate=coordinate, button=button)

    def type(self, text):
        self.typed.append(text)
        return self._record("type", text=text)

    def scroll(self, direction, amount):
        return self._record("scroll", direction=direction, amount=amount)

    def wait(self, duration):
        return self._record("wait", duration=duration)
