"""Facade dispatcher shared by every tool.

A facade declares:
  - ``name``:          tool name exposed to the LLM
  - ``Action``:        a str Enum of the supported actions
  - ``HANDLERS``:      Action -> method name
  - ``REQUIRED``:      Action -> parameter names that must be non-None
  - ``SENSITIVE``:     actions that go through the authorizer
  - ``DEFAULT_ACTION``: used when the caller omits ``action``

``execute`` normalizes the action, validates required parameters,
authorizes sensitive actions, then calls the handler with only the
parameters its signature accepts. A subclass whose ``HANDLERS`` misses an
Action member is rejected when the class is defined.
"""

from __future__ import annotations

import inspect
import logging
from enum import Enum
from typing import Any, ClassVar

from .authorizer import Authorizer, default_authorizer
from .errors import AuthorizationDeclined, ParameterError, UnsupportedActionError

_MAX_LOGGED_VALUE = 200


def _short(value: Any) -> str:
    text = repr(value)
    if len(text) > _MAX_LOGGED_VALUE:
        text = text[:_MAX_LOGGED_VALUE] + "..."
    return text


class BaseTool:
    name: ClassVar[str] = "tool"
    description: ClassVar[str] = ""

    Action: ClassVar[type[Enum]]
    HANDLERS: ClassVar[dict] = {}
    REQUIRED: ClassVar[dict] = {}
    SENSITIVE: ClassVar[frozenset] = frozenset()
    DEFAULT_ACTION: ClassVar[Enum | None] = None

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        actions = cls.__dict__.get("Action")
        if actions is None:
            return
        missing = [a.value for a in actions if a not in cls.HANDLERS]
        if missing:
            raise TypeError(f"{cls.__name__} has no handler for actions: {', '.join(missing)}")
        for action, method in cls.HANDLERS.items():
            if not callable(getattr(cls, method, None)):
                raise TypeError(f"{cls.__name__}.{method} (handler for {action.value!r}) is not defined")

    def __init__(self, logger: logging.Logger | None = None, authorizer: Authorizer | None = None):
        self.logger = logger or logging.getLogger(type(self).__module__)
        self.authorizer = authorizer or default_authorizer()

    # ------------------------------------------------------------------
    # Public surface
    # ------------------------------------------------------------------

    @classmethod
    def actions(cls) -> list[str]:
        return [a.value for a in cls.Action]

    def execute(self, action: str | Enum | None = None, **params: Any) -> Any:
        try:
            resolved = self._resolve_action(action)
            self.logger.info(self._format_call(resolved, params))
            self._require(resolved, params)
            self._authorize(resolved, params)
            handler = getattr(self, self.HANDLERS[resolved])
            result = handler(**self._accepted(handler, params))
        except Exception as e:
            self.logger.error("%s#execute action=%s failed: %s", self.name, action, e)
            raise
        self.logger.debug("%s#execute action=%s result=%s", self.name, resolved.value, _short(result))
        return result

    def is_sensitive(self, action: Enum, params: dict) -> bool:
        return action in self.SENSITIVE

    def describe(self, action: Enum, params: dict) -> str:
        """Human-readable text shown to the operator before a sensitive action."""
        lines = [f"action: {action.value}"]
        for key, value in params.items():
            if value is not None:
                lines.append(f"{key}: {value}")
        return "\n".join(lines)

    def close(self) -> None:
        driver = getattr(self, "driver", None)
        if driver is not None:
            driver.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    # ------------------------------------------------------------------
    # Dispatch steps
    # ------------------------------------------------------------------

    def _resolve_action(self, action: str | Enum | None) -> Enum:
        if action is None:
            if self.DEFAULT_ACTION is None:
                raise ParameterError(self.name, "(none)", "action")
            return self.DEFAULT_ACTION
        if isinstance(action, self.Action):
            return action
        key = action.value if isinstance(action, Enum) else str(action)
        try:
            return self.Action(key.strip().lower())
        except ValueError:
            raise UnsupportedActionError(self.name, action, self.actions()) from None

    def _require(self, action: Enum, params: dict) -> None:
        for param in self.REQUIRED.get(action, ()):
            if params.get(param) is None:
                raise ParameterError(self.name, action.value, param)

    def _authorize(self, action: Enum, params: dict) -> None:
        if not self.is_sensitive(action, params):
            return
        if not self.authorizer.authorize(actor=self.name, description=self.describe(action, params)):
            self.logger.warning("%s: user declined action '%s'", self.name, action.value)
            raise AuthorizationDeclined(self.name, action.value)

    @staticmethod
    def _accepted(handler, params: dict) -> dict:
        signature = inspect.signature(handler)
        if any(p.kind is p.VAR_KEYWORD for p in signature.parameters.values()):
            return params
        return {k: v for k, v in params.items() if k in signature.parameters and v is not None}

    def _format_call(self, action: Enum, params: dict) -> str:
        parts = [f"{k}={_short(v)}" for k, v in params.items() if v is not None]
        return " ".join([f"{self.name}#execute action={action.value}", *parts])
