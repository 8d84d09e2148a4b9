"""Append-only JSONL audit log of tool calls made through the router.

Every call appends one line to AUDIT_LOG_DIR/tool_calls.jsonl. Failing to
write the log never fails the tool call.

Thread-safe via a module-level lock.
"""

from __future__ import annotations

import json
import logging
import os
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

_LOG_DIR = Path(os.getenv("AUDIT_LOG_DIR", "/logs"))
_LOG_FILE = _LOG_DIR / "tool_calls.jsonl"
_lock = threading.Lock()


def _ensure_log_dir() -> bool:
    """Create the log directory if it doesn't exist. Returns True on success."""
    try:
        _LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
        return True
    except OSError as e:
        logger.error("Cannot create audit log directory %s: %s", _LOG_FILE.parent, e)
        return False


def log_tool_call(
    *,
    tool_name: str,
    ok: bool,
    action: str | None = None,
    error_code: str | None = None,
    duration_ms: float | None = None,
    extra: dict[str, Any] | None = None,
) -> None:
    """Append a tool-call audit record."""
    record = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "tool_name": tool_name,
        "action": action,
        "ok": ok,
    }
    if error_code:
        record["error_code"] = error_code
    if duration_ms is not None:
        record["duration_ms"] = round(duration_ms, 2)
    if extra:
        record["extra"] = extra

    line = json.dumps(record, separators=(",", ":"), default=str)

    with _lock:
        if not _ensure_log_dir():
            return
        try:
            with open(_LOG_FILE, "a") as f:
                f.write(line + "\n")
        except OSError as e:
            logger.error("Failed to write audit log: %s", e)
