"""X11 driver that shells out to ``xdotool``."""

from __future__ import annotations

import logging
import os
import re
import shutil
import subprocess
import time

from ..errors import MissingDependencyError
from .driver import BaseDriver

logger = logging.getLogger(__name__)

XDOTOOL_TIMEOUT_SEC = int(os.getenv("XDOTOOL_TIMEOUT_SEC", "30"))

_BUTTONS = {"left": "1", "middle": "2", "right": "3"}
# X11 maps the scroll wheel to buttons 4-7
_SCROLL_BUTTONS = {"up": "4", "down": "5", "left": "6", "right": "7"}


class XdotoolDriver(BaseDriver):
    def __init__(self, binary: str = "xdotool"):
        path = shutil.which(binary)
        if path is None:
            raise MissingDependencyError(
                "ComputerTool requires 'xdotool' on PATH (apt install xdotool) or a driver"
            )
        self.binary = path

    def _run(self, *args: str) -> str:
        cmd = [self.binary, *args]
        logger.debug("Running %s", cmd)
        p = subprocess.run(
            cmd, stdout=subprocess.PIPE, stderr=subprocess.PIPE, text=True,
            timeout=XDOTOOL_TIMEOUT_SEC, check=False,
        )
        if p.returncode != 0:
            raise RuntimeError(f"xdotool {' '.join(args)} failed ({p.returncode}): {p.stderr.strip()}")
        return p.stdout

    @staticmethod
    def _xy(coordinate: dict) -> tuple[str, str]:
        return str(int(coordinate["x"])), str(int(coordinate["y"]))

    def key(self, text: str) -> dict:
        self._run("key", "--", text)
        return {"key": text}

    def hold_key(self, text: str, duration: float) -> dict:
        self._run("keydown", "--", text)
        try:
            time.sleep(float(duration))
        finally:
            self._run("keyup", "--", text)
        return {"key": text, "duration": duration}

    def mouse_position(self) -> dict:
        out = self._run("getmouselocation", "--shell")
        x = re.search(r"^X=(\d+)", out, re.MULTILINE)
        y = re.search(r"^Y=(\d+)", out, re.MULTILINE)
        if not (x and y):
            raise RuntimeError(f"unexpected xdotool output: {out!r}")
        return {"x": int(x.group(1)), "y": int(y.group(1))}

    def mouse_move(self, coordinate: dict) -> dict:
        self._run("mousemove", *self._xy(coordinate))
        return {"moved_to": coordinate}

    def _click(self, coordinate: dict, button: str, repeat: int) -> dict:
        self._run("mousemove", *self._xy(coordinate), "click", "--repeat", str(repeat), _BUTTONS[button])
        return {"clicked": coordinate, "button": button, "clicks": repeat}

    def mouse_click(self, coordinate: dict, button: str = "left") -> dict:
        return self._click(coordinate, button, 1)

    def mouse_double_click(self, coordinate: dict, button: str = "left") -> dict:
        return self._click(coordinate, button, 2)

    def mouse_triple_click(self, coordinate: dict, button: str = "left") -> dict:
        return self._click(coordinate, button, 3)

    def mouse_down(self, coordinate: dict, button: str = "left") -> dict:
        self._run("mousemove", *self._xy(coordinate), "mousedown", _BUTTONS[button])
        return {"down": coordinate, "button": button}

    def mouse_up(self, coordinate: dict, button: str = "left") -> dict:
        self._run("mousemove", *self._xy(coordinate), "mouseup", _BUTTONS[button])
        return {"up": coordinate, "button": button}

    def mouse_drag(self, coordinate: dict, button: str = "left") -> dict:
        b = _BUTTONS[button]
        self._run("mousedown", b, "mousemove", *self._xy(coordinate), "mouseup", b)
        return {"dragged_to": coordinate, "button": button}

    def type(self, text: str) -> dict:
        self._run("type", "--", text)
        return {"typed": text}

    def scroll(self, direction: str, amount: int) -> dict:
        self._run("click", "--repeat", str(int(amount)), _SCROLL_BUTTONS[direction])
        return {"direction": direction, "amount": amount}

    def wait(self, duration: float) -> dict:
        time.sleep(float(duration))
        return {"waited": duration}
