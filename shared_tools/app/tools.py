import logging
import threading
import time

from jsonschema import Draft202012Validator

from .audit_log import log_tool_call
from .browser_tool import BrowserTool
from .computer_tool import ComputerTool
from .database_tool import DatabaseTool
from .disk_tool import DiskTool
from .doc_tool import DocTool
from .errors import ToolError, UnsupportedActionError
from .eval_tool import EvalTool
from .tool_schemas import TOOLS

logger = logging.getLogger(__name__)

TOOL_MAP = {
    "browser_tool": BrowserTool,
    "disk_tool": DiskTool,
    "database_tool": DatabaseTool,
    "eval_tool": EvalTool,
    "doc_tool": DocTool,
    "computer_tool": ComputerTool,
}

_VALIDATORS = {
    t["function"]["name"]: Draft202012Validator(t["function"]["parameters"])
    for t in TOOLS
}

# Facades are created on first call and reused; each owns its driver.
_tools: dict = {}
_tools_lock = threading.Lock()

# One call at a time per facade; drivers are not safe for concurrent use.
_call_locks = {name: threading.Lock() for name in TOOL_MAP}


def get_tool(name: str):
    with _tools_lock:
        tool = _tools.get(name)
        if tool is None:
            tool = TOOL_MAP[name]()
            _tools[name] = tool
        return tool


def close_tools() -> None:
    """Release every facade's driver."""
    with _tools_lock:
        tools = list(_tools.items())
        _tools.clear()
    for name, tool in tools:
        try:
            tool.close()
        except Exception as e:
            logger.warning("Failed to close %s: %s", name, e)


def _validate_arguments(tool_name: str, arguments: dict) -> str | None:
    """Return a readable message for the first schema violation, or None."""
    errors = sorted(_VALIDATORS[tool_name].iter_errors(arguments), key=lambda e: [str(p) for p in e.path])
    if not errors:
        return None
    err = errors[0]
    where = ".".join(str(p) for p in err.path) or "arguments"
    return f"{where}: {err.message}"


# ---------------------------------------------------------------------------
# Structured error helpers: never expose raw Python tracebacks
# ---------------------------------------------------------------------------

_ERROR_MAP = {
    "FileNotFoundError": "FILE_NOT_FOUND",
    "PermissionError": "PERMISSION_DENIED",
    "TimeoutError": "TIMEOUT",
    "TimeoutExpired": "TIMEOUT",
    "NotImplementedError": "NOT_IMPLEMENTED",
    "ValueError": "INVALID_INPUT",
    "TypeError": "INVALID_INPUT",
    "KeyError": "MISSING_FIELD",
    "IndexError": "INDEX_OUT_OF_RANGE",
    "ConnectionError": "CONNECTION_ERROR",
    "OSError": "IO_ERROR",
    "RuntimeError": "RUNTIME_ERROR",
}


def _classify_error(exc: Exception) -> str:
    """Map a Python exception to a structured error code."""
    if isinstance(exc, ToolError):
        return exc.error_code
    for cls in type(exc).__mro__:
        code = _ERROR_MAP.get(cls.__name__)
        if code:
            return code
    return "INTERNAL_ERROR"


def _structured_error(tool_name: str, error_code: str, message: str) -> dict:
    """Build a structured error response with a consistent shape."""
    return {
        "ok": False,
        "error_code": error_code,
        "message": message,
        "tool": tool_name,
    }


def _action_name(tool_name: str, action) -> str | None:
    if action is not None:
        return str(action).strip().lower()
    default = TOOL_MAP[tool_name].DEFAULT_ACTION
    return default.value if default is not None else None


def dispatch_tool_call(name: str, arguments: dict):
    if name not in TOOL_MAP:
        return _structured_error(name, "UNKNOWN_TOOL", f"Unknown tool: {name}")

    arguments = dict(arguments or {})
    if isinstance(arguments.get("action"), str):
        arguments["action"] = arguments["action"].strip().lower()
        if arguments["action"] not in TOOL_MAP[name].actions():
            e = UnsupportedActionError(name, arguments["action"], TOOL_MAP[name].actions())
            log_tool_call(tool_name=name, action=arguments["action"], ok=False, error_code=e.error_code)
            return _structured_error(name, e.error_code, str(e))

    problem = _validate_arguments(name, arguments)
    if problem:
        log_tool_call(tool_name=name, action=arguments.get("action"), ok=False, error_code="INVALID_ARGUMENTS")
        return _structured_error(name, "INVALID_ARGUMENTS", f"{name}: {problem}")

    action = arguments.pop("action", None)
    action_name = _action_name(name, action)

    t0 = time.monotonic()
    try:
        with _call_locks[name]:
            result = get_tool(name).execute(action, **arguments)
    except Exception as e:
        duration_ms = (time.monotonic() - t0) * 1000
        error_code = _classify_error(e)
        log_tool_call(tool_name=name, action=action_name, ok=False, error_code=error_code, duration_ms=duration_ms)
        return _structured_error(name, error_code, str(e))

    duration_ms = (time.monotonic() - t0) * 1000
    log_tool_call(tool_name=name, action=action_name, ok=True, duration_ms=duration_ms)
    return {"ok": True, "tool": name, "action": action_name, "result": result}
