"""Error taxonomy shared by facades, sub-tools and drivers.

Every error carries an ``error_code`` so the router can return a stable
structured payload without inspecting messages:

  - ParameterError            MISSING_PARAMETER / INVALID_PARAMETER
  - UnsupportedActionError    UNSUPPORTED_ACTION
  - AuthorizationDeclined     DECLINED
  - DriverNotImplementedError NOT_IMPLEMENTED
  - SecurityError             SECURITY_VIOLATION
  - MissingDependencyError    MISSING_DEPENDENCY

Backend failures (FileNotFoundError, sqlite3.Error, ...) are not wrapped.
"""

from __future__ import annotations

from typing import Iterable


class ToolError(Exception):
    """Base class for errors raised by the tool layer itself."""

    error_code = "TOOL_ERROR"


class ParameterError(ToolError, ValueError):
    """A parameter required by an action is missing, None, or invalid."""

    error_code = "MISSING_PARAMETER"

    def __init__(self, tool: str, action: str, param: str, reason: str | None = None):
        self.tool = tool
        self.action = action
        self.param = param
        if reason:
            self.error_code = "INVALID_PARAMETER"
            message = f"{tool}: '{param}' is invalid for action '{action}': {reason}"
        else:
            message = f"{tool}: '{param}' param is required for action '{action}'"
        super().__init__(message)


class UnsupportedActionError(ToolError, ValueError):
    """The action string is not one of the facade's actions."""

    error_code = "UNSUPPORTED_ACTION"

    def __init__(self, tool: str, action: object, valid_actions: Iterable[str]):
        self.tool = tool
        self.action = action
        self.valid_actions = list(valid_actions)
        super().__init__(
            f"{tool}: unsupported action: {action!r}. "
            f"Supported actions are: {', '.join(self.valid_actions)}"
        )


class AuthorizationDeclined(ToolError):
    """The authorizer refused a sensitive action."""

    error_code = "DECLINED"

    def __init__(self, tool: str, action: str):
        self.tool = tool
        self.action = action
        super().__init__(f"{tool}: user declined to execute action '{action}'")


class DriverNotImplementedError(ToolError, NotImplementedError):
    """A driver does not implement one of its capability methods."""

    error_code = "NOT_IMPLEMENTED"

    def __init__(self, driver: str, method: str):
        self.driver = driver
        self.method = method
        super().__init__(f"{driver}#{method} is not implemented")


class SecurityError(ToolError, PermissionError):
    """A path (or similar input) tries to escape its sandbox."""

    error_code = "SECURITY_VIOLATION"


class MissingDependencyError(ToolError, ImportError):
    """A default driver needs a package or binary that is not available."""

    error_code = "MISSING_DEPENDENCY"
