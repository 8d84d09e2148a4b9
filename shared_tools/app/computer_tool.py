"""Computer facade: keyboard and mouse control.

Be careful using it, it acts on your computer. Keystrokes, typing and
mouse button actions go through the authorizer; reading the cursor
position, moving, scrolling and waiting do not.
"""

from __future__ import annotations

import logging
from enum import Enum

from .authorizer import Authorizer
from .base_tool import BaseTool
from .computer.driver import BaseDriver
from .errors import ParameterError


class MouseButton(str, Enum):
    LEFT = "left"
    MIDDLE = "middle"
    RIGHT = "right"


class ScrollDirection(str, Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


class ComputerTool(BaseTool):
    name = "computer_tool"
    description = "A tool for interacting with a computer."

    class Action(str, Enum):
        KEY = "key"                                 # press a key / key combination
        HOLD_KEY = "hold_key"                       # hold a key for `duration` seconds
        MOUSE_POSITION = "mouse_position"           # current (x, y) of the cursor
        MOUSE_MOVE = "mouse_move"
        MOUSE_CLICK = "mouse_click"
        MOUSE_DOUBLE_CLICK = "mouse_double_click"
        MOUSE_TRIPLE_CLICK = "mouse_triple_click"
        MOUSE_DOWN = "mouse_down"
        MOUSE_UP = "mouse_up"
        MOUSE_DRAG = "mouse_drag"                   # drag from the cursor to `coordinate`
        TYPE = "type"
        SCROLL = "scroll"
        WAIT = "wait"

    HANDLERS = {
        Action.KEY: "_key",
        Action.HOLD_KEY: "_hold_key",
        Action.MOUSE_POSITION: "_mouse_position",
        Action.MOUSE_MOVE: "_mouse_move",
        Action.MOUSE_CLICK: "_mouse_click",
        Action.MOUSE_DOUBLE_CLICK: "_mouse_double_click",
        Action.MOUSE_TRIPLE_CLICK: "_mouse_triple_click",
        Action.MOUSE_DOWN: "_mouse_down",
        Action.MOUSE_UP: "_mouse_up",
        Action.MOUSE_DRAG: "_mouse_drag",
        Action.TYPE: "_type",
        Action.SCROLL: "_scroll",
        Action.WAIT: "_wait",
    }

    REQUIRED = {
        Action.KEY: ("text",),
        Action.HOLD_KEY: ("text", "duration"),
        Action.MOUSE_MOVE: ("coordinate",),
        Action.MOUSE_CLICK: ("coordinate",),
        Action.MOUSE_DOUBLE_CLICK: ("coordinate",),
        Action.MOUSE_TRIPLE_CLICK: ("coordinate",),
        Action.MOUSE_DOWN: ("coordinate",),
        Action.MOUSE_UP: ("coordinate",),
        Action.MOUSE_DRAG: ("coordinate",),
        Action.TYPE: ("text",),
        Action.SCROLL: ("scroll_direction", "scroll_amount"),
        Action.WAIT: ("duration",),
    }

    SENSITIVE = frozenset({
        Action.KEY,
        Action.HOLD_KEY,
        Action.MOUSE_CLICK,
        Action.MOUSE_DOUBLE_CLICK,
        Action.MOUSE_TRIPLE_CLICK,
        Action.MOUSE_DOWN,
        Action.MOUSE_UP,
        Action.MOUSE_DRAG,
        Action.TYPE,
    })

    def __init__(
        self,
        driver: BaseDriver | None = None,
        logger: logging.Logger | None = None,
        authorizer: Authorizer | None = None,
    ):
        super().__init__(logger=logger, authorizer=authorizer)
        if driver is None:
            from .computer.xdotool_driver import XdotoolDriver
            driver = XdotoolDriver()
        self.driver = driver

    # ---- parameter coercion ----

    def _coordinate(self, action: Action, coordinate) -> dict:
        if isinstance(coordinate, (list, tuple)) and len(coordinate) == 2:
            coordinate = {"x": coordinate[0], "y": coordinate[1]}
        if not isinstance(coordinate, dict) or "x" not in coordinate or "y" not in coordinate:
            raise ParameterError(self.name, action.value, "coordinate", "expected {\"x\": int, \"y\": int}")
        try:
            return {"x": int(coordinate["x"]), "y": int(coordinate["y"])}
        except (TypeError, ValueError):
            raise ParameterError(self.name, action.value, "coordinate", "x and y must be integers") from None

    def _button(self, action: Action, mouse_button) -> str:
        try:
            return MouseButton(str(mouse_button or MouseButton.LEFT.value).lower()).value
        except ValueError:
            valid = ", ".join(b.value for b in MouseButton)
            raise ParameterError(self.name, action.value, "mouse_button", f"must be one of {valid}") from None

    def _number(self, action: Action, param: str, value) -> float:
        try:
            number = float(value)
        except (TypeError, ValueError):
            raise ParameterError(self.name, action.value, param, "must be a number") from None
        if number < 0:
            raise ParameterError(self.name, action.value, param, "must not be negative")
        return number

    # ---- handlers ----

    def _key(self, text):
        return self.driver.key(text=text)

    def _hold_key(self, text, duration):
        return self.driver.hold_key(text=text, duration=self._number(self.Action.HOLD_KEY, "duration", duration))

    def _mouse_position(self):
        return self.driver.mouse_position()

    def _mouse_move(self, coordinate):
        return self.driver.mouse_move(coordinate=self._coordinate(self.Action.MOUSE_MOVE, coordinate))

    def _button_action(self, action: Action, coordinate, mouse_button):
        method = getattr(self.driver, action.value)
        return method(
            coordinate=self._coordinate(action, coordinate),
            button=self._button(action, mouse_button),
        )

    def _mouse_click(self, coordinate, mouse_button=None):
        return self._button_action(self.Action.MOUSE_CLICK, coordinate, mouse_button)

    def _mouse_double_click(self, coordinate, mouse_button=None):
        return self._button_action(self.Action.MOUSE_DOUBLE_CLICK, coordinate, mouse_button)

    def _mouse_triple_click(self, coordinate, mouse_button=None):
        return self._button_action(self.Action.MOUSE_TRIPLE_CLICK, coordinate, mouse_button)

    def _mouse_down(self, coordinate, mouse_button=None):
        return self._button_action(self.Action.MOUSE_DOWN, coordinate, mouse_button)

    def _mouse_up(self, coordinate, mouse_button=None):
        return self._button_action(self.Action.MOUSE_UP, coordinate, mouse_button)

    def _mouse_drag(self, coordinate, mouse_button=None):
        return self._button_action(self.Action.MOUSE_DRAG, coordinate, mouse_button)

    def _type(self, text):
        return self.driver.type(text=text)

    def _scroll(self, scroll_direction, scroll_amount):
        action = self.Action.SCROLL
        try:
            direction = ScrollDirection(str(scroll_direction).lower()).value
        except ValueError:
            valid = ", ".join(d.value for d in ScrollDirection)
            raise ParameterError(self.name, action.value, "scroll_direction", f"must be one of {valid}") from None
        amount = int(self._number(action, "scroll_amount", scroll_amount))
        return self.driver.scroll(direction=direction, amount=amount)

    def _wait(self, duration):
        return self.driver.wait(duration=self._number(self.Action.WAIT, "duration", duration))
