"""Human-in-the-loop gate for sensitive actions.

Two policies:
  - auto: every request is approved without any I/O
  - ask:  the actor and a description are printed and a single keystroke
          is read from stdin; only "y"/"Y" approves

The module-level instance holds process-wide state. ``set_policy`` is
last-write-wins for every thread in the process; the lock only makes each
read and write atomic, it does not scope a policy to a caller. Assumes a
single writer (one operator driving one CLI or router process). Callers
that need isolation pass their own ``Authorizer`` to a facade.

In ask mode ``authorize`` blocks until the operator answers. There is no
timeout.
"""

from __future__ import annotations

import logging
import os
import sys
import threading
from typing import Callable, TextIO

logger = logging.getLogger(__name__)

AUTO_EXECUTE = os.getenv("SHARED_TOOLS_AUTO_EXECUTE", "true").lower() in ("1", "true", "yes")

_RULE = "=" * 42


def _read_char(stream: TextIO) -> str:
    """Read exactly one character, raw when the stream is a terminal."""
    try:
        fd = stream.fileno()
    except (AttributeError, OSError, ValueError):
        return stream.read(1)

    if not os.isatty(fd):
        return stream.read(1)

    import termios
    import tty

    old = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        return stream.read(1)
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)


class Authorizer:
    """Approve or prompt before sensitive actions run."""

    def __init__(
        self,
        auto_execute: bool = True,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        read_char: Callable[[TextIO], str] = _read_char,
    ):
        self._auto_execute = auto_execute
        self._lock = threading.Lock()
        self._stdin = stdin
        self._stdout = stdout
        self._read_char = read_char

    @property
    def auto_execute(self) -> bool:
        with self._lock:
            return self._auto_execute

    def set_policy(self, auto_execute: bool) -> None:
        with self._lock:
            self._auto_execute = bool(auto_execute)
        logger.info("Authorization policy set: auto_execute=%s", bool(auto_execute))

    def authorize(self, actor: str = "unknown", description: str = "") -> bool:
        if self.auto_execute:
            return True

        stdin = self._stdin or sys.stdin
        stdout = self._stdout or sys.stdout

        stdout.write(f"\n\nThe AI (tool: {actor}) wants to do the following ...\n")
        stdout.write(_RULE + "\n")
        stdout.write((description or "unknown strange and mysterious things") + "\n")
        stdout.write(_RULE + "\n")
        stdout.write("\nIs it okay to proceed? (y/N) ")
        stdout.flush()

        try:
            answer = self._read_char(stdin)
        except (EOFError, KeyboardInterrupt):
            answer = ""

        stdout.write("\n")
        stdout.flush()

        allowed = answer in ("y", "Y")
        if not allowed:
            logger.warning("Operator declined %s: %r", actor, answer)
        return allowed


_default = Authorizer(auto_execute=AUTO_EXECUTE)


def default_authorizer() -> Authorizer:
    """Return the process-wide authorizer."""
    return _default


def set_policy(auto_execute: bool) -> None:
    _default.set_policy(auto_execute)


def get_policy() -> bool:
    return _default.auto_execute


def authorize(actor: str = "unknown", description: str = "") -> bool:
    return _default.authorize(actor=actor, description=description)
