"""Acceptance tests for the HTTP tool router.

Validates:
  - /health, /tools and /policy endpoints
  - wrapped and flat /tool payloads dispatch to the facades
  - schema violations, facade errors and unknown tools come back as
    structured errors, never raw tracebacks
  - every call appends a JSONL audit record
  - optional router token
"""

import importlib
import io
import json
import subprocess
import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest
from fastapi.testclient import TestClient

from shared_tools.app.authorizer import Authorizer
from shared_tools.app.browser.mock_driver import MockDriver as BrowserMockDriver
from shared_tools.app.browser_tool import BrowserTool
from shared_tools.app.database.mock_driver import MockDriver
from shared_tools.app.database_tool import DatabaseTool
from shared_tools.app.disk.local_driver import LocalDriver
from shared_tools.app.disk_tool import DiskTool
from shared_tools.app.errors import ParameterError, SecurityError


@pytest.fixture(autouse=True)
def _router(tmp_path, monkeypatch):
    """Fresh router modules with the audit log under tmp_path."""
    monkeypatch.setenv("AUDIT_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setenv("ROUTER_AUTH_TOKEN", "")  # disable auth for tests

    from shared_tools.app import audit_log, tools, main
    importlib.reload(audit_log)
    importlib.reload(tools)
    importlib.reload(main)

    root = tmp_path / "root"
    root.mkdir()
    tools._tools["disk_tool"] = DiskTool(
        driver=LocalDriver(root=str(root)), authorizer=Authorizer(auto_execute=True),
    )
    yield root
    tools.close_tools()


@pytest.fixture()
def client():
    from shared_tools.app.main import app
    return TestClient(app, raise_server_exceptions=False)


def _call(client, name, arguments, flat=False, headers=None):
    body = {"name": name, "arguments": arguments} if flat else {"tool_call": {"name": name, "arguments": arguments}}
    resp = client.post("/tool", json=body, headers=headers or {})
    assert resp.status_code == 200
    return resp.json()


def _audit_records(tmp_path):
    with open(tmp_path / "logs" / "tool_calls.jsonl") as f:
        return [json.loads(line) for line in f]


# =====================================================================
# Discovery endpoints
# =====================================================================

class TestDiscovery:
    def test_health(self, client):
        body = client.get("/health").json()
        assert body["ok"] is True
        assert isinstance(body["auto_execute"], bool)

    def test_tools_lists_every_facade(self, client):
        names = {t["function"]["name"] for t in client.get("/tools").json()["tools"]}
        assert names == {"browser_tool", "disk_tool", "database_tool", "eval_tool", "doc_tool", "computer_tool"}

    def test_policy_round_trip(self, client, restore_policy):
        assert client.post("/policy", json={"auto_execute": False}).json() == {"auto_execute": False}
        assert client.get("/policy").json() == {"auto_execute": False}
        assert client.get("/health").json()["auto_execute"] is False
        client.post("/policy", json={"auto_execute": True})
        assert client.get("/policy").json() == {"auto_execute": True}


# =====================================================================
# Dispatch
# =====================================================================

class TestDispatch:
    def test_wrapped_payload(self, client, _router):
        body = _call(client, "disk_tool", {"action": "file_write", "path": "a.txt", "text": "hi"})
        assert body == {"ok": True, "tool": "disk_tool", "action": "file_write", "result": {"path": "a.txt", "bytes": 2}}
        assert (_router / "a.txt").read_text() == "hi"

    def test_flat_payload(self, client, _router):
        (_router / "b.txt").write_text("flat")
        body = _call(client, "disk_tool", {"action": "file_read", "path": "b.txt"}, flat=True)
        assert body["result"] == "flat"

    def test_database_default_action(self, client):
        body = _call(client, "database_tool", {"statements": ["SELECT 1"]})
        assert body["ok"] is True
        assert body["action"] == "execute"
        assert body["result"] == [{"status": "ok", "statement": "SELECT 1", "result": [[1]]}]

    def test_action_is_case_insensitive(self, client, _router):
        (_router / "c.txt").write_text("upper")
        body = _call(client, "disk_tool", {"action": "  FILE_READ ", "path": "c.txt"})
        assert body["ok"] is True
        assert body["action"] == "file_read"
        assert body["result"] == "upper"

    def test_empty_request_is_400(self, client):
        assert client.post("/tool", json={}).status_code == 400


# =====================================================================
# Structured errors
# =====================================================================

class TestStructuredErrors:
    def test_unknown_tool(self, client):
        body = _call(client, "teleport_tool", {})
        assert body == {"ok": False, "error_code": "UNKNOWN_TOOL", "message": "Unknown tool: teleport_tool", "tool": "teleport_tool"}

    def test_unsupported_action(self, client, tmp_path):
        body = _call(client, "disk_tool", {"action": "file_shred", "path": "a.txt"})
        assert body["ok"] is False
        assert body["error_code"] == "UNSUPPORTED_ACTION"
        assert "unsupported action: 'file_shred'" in body["message"]
        assert _audit_records(tmp_path)[-1]["error_code"] == "UNSUPPORTED_ACTION"

    def test_wrong_argument_type(self, client):
        body = _call(client, "database_tool", {"statements": 5})
        assert body["error_code"] == "INVALID_ARGUMENTS"
        assert body["message"].startswith("database_tool: statements:")

    def test_missing_parameter(self, client):
        body = _call(client, "disk_tool", {"action": "file_read"})
        assert body["error_code"] == "MISSING_PARAMETER"
        assert "'path' param is required for action 'file_read'" in body["message"]

    def test_path_traversal(self, client):
        body = _call(client, "disk_tool", {"action": "file_read", "path": "../../etc/passwd"})
        assert body["error_code"] == "SECURITY_VIOLATION"

    def test_file_not_found(self, client):
        body = _call(client, "disk_tool", {"action": "file_read", "path": "missing.txt"})
        assert body["error_code"] == "FILE_NOT_FOUND"

    def test_declined(self, client, _router):
        from shared_tools.app import tools
        declining = Authorizer(auto_execute=False, stdout=io.StringIO(), read_char=lambda s: "n")
        tools._tools["disk_tool"] = DiskTool(driver=LocalDriver(root=str(_router)), authorizer=declining)
        (_router / "keep.txt").write_text("k")
        body = _call(client, "disk_tool", {"action": "file_delete", "path": "keep.txt"})
        assert body["error_code"] == "DECLINED"
        assert (_router / "keep.txt").exists()

    def test_missing_backend(self, client, monkeypatch):
        from shared_tools.app.browser import playwright_driver
        monkeypatch.setattr(playwright_driver, "sync_playwright", None)
        body = _call(client, "browser_tool", {"action": "visit", "url": "https://example.com"})
        assert body["error_code"] == "MISSING_DEPENDENCY"


class TestConcurrency:
    def test_calls_to_one_facade_never_overlap(self):
        from shared_tools.app import tools

        class SlowDriver(BrowserMockDriver):
            def __init__(self):
                super().__init__()
                self.lock = threading.Lock()
                self.in_flight = 0
                self.max_in_flight = 0

            def goto(self, url):
                with self.lock:
                    self.in_flight += 1
                    self.max_in_flight = max(self.max_in_flight, self.in_flight)
                time.sleep(0.01)
                with self.lock:
                    self.in_flight -= 1
                return super().goto(url)

        driver = SlowDriver()
        tools._tools["browser_tool"] = BrowserTool(driver=driver)
        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(
                lambda i: tools.dispatch_tool_call("browser_tool", {"action": "visit", "url": f"https://example.com/{i}"}),
                range(16),
            ))
        assert all(r["ok"] for r in results)
        assert len(driver.calls) == 16
        assert driver.max_in_flight == 1


class TestClassifyError:
    def test_codes(self):
        from shared_tools.app.tools import _classify_error
        assert _classify_error(ParameterError("t", "a", "p")) == "MISSING_PARAMETER"
        assert _classify_error(ParameterError("t", "a", "p", "bad")) == "INVALID_PARAMETER"
        assert _classify_error(SecurityError("x")) == "SECURITY_VIOLATION"
        assert _classify_error(FileNotFoundError("x")) == "FILE_NOT_FOUND"
        assert _classify_error(IsADirectoryError("x")) == "IO_ERROR"
        assert _classify_error(subprocess.TimeoutExpired("sleep", 1)) == "TIMEOUT"
        assert _classify_error(LookupError("x")) == "INTERNAL_ERROR"


# =====================================================================
# Audit log and auth
# =====================================================================

class TestAuditLog:
    def test_records_success_and_failure(self, client, tmp_path):
        _call(client, "disk_tool", {"action": "directory_list"})
        _call(client, "disk_tool", {"action": "file_read", "path": "missing.txt"})
        records = _audit_records(tmp_path)
        assert [r["ok"] for r in records] == [True, False]
        assert records[0]["tool_name"] == "disk_tool"
        assert records[0]["action"] == "directory_list"
        assert "duration_ms" in records[0]
        assert records[1]["error_code"] == "FILE_NOT_FOUND"


class TestAuth:
    def test_token_required_when_configured(self, client, monkeypatch):
        from shared_tools.app import main
        monkeypatch.setattr(main, "ROUTER_AUTH_TOKEN", "s3cret")
        body = {"tool_call": {"name": "disk_tool", "arguments": {"action": "directory_list"}}}
        assert client.post("/tool", json=body).status_code == 401
        assert client.post("/tool", json=body, headers={"X-Router-Token": "wrong"}).status_code == 401
        assert client.post("/tool", json=body, headers={"X-Router-Token": "s3cret"}).status_code == 200
        assert client.post("/policy", json={"auto_execute": True}).status_code == 401


class TestCloseTools:
    def test_closes_and_forgets_facades(self):
        from shared_tools.app import tools
        driver = MockDriver()
        tools._tools["database_tool"] = DatabaseTool(driver=driver)
        tools.close_tools()
        assert driver.closed == 1
        assert tools._tools == {}
