"""Code evaluation sub-tools: Python (in-process), Ruby and shell (subprocess).

These run arbitrary code. They never authorize on their own; EvalTool asks
the authorizer before calling them.
"""

from __future__ import annotations

import ast
import contextlib
import io
import json
import logging
import os
import shutil
import subprocess

from ..errors import MissingDependencyError

EVAL_TIMEOUT_SEC = int(os.getenv("EVAL_TIMEOUT_SEC", "60"))
EVAL_MAX_OUTPUT = int(os.getenv("EVAL_MAX_OUTPUT", "20000"))

_RESULT_MARKER = "__SHARED_TOOLS_RESULT__:"

_RUBY_WRAPPER = f"""
$stdout.sync = true
code = $stdin.read
result = eval(code, TOPLEVEL_BINDING, "(eval)")
print "\\n{_RESULT_MARKER}" + result.inspect
"""


def _tail(text: str) -> str:
    return text[-EVAL_MAX_OUTPUT:]


def _display(output: str, result_repr: str | None) -> str:
    if not output:
        return result_repr or ""
    return output + ("" if result_repr is None else f"\n=> {result_repr}")


class PythonEvalTool:
    """Execute Python source and return its output and last expression value."""

    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or logging.getLogger(__name__)

    def execute(self, code: str) -> dict:
        if not code.strip():
            self.logger.error("Python code cannot be empty")
            return {"error": "Python code cannot be empty"}

        self.logger.info("Executing Python code")
        captured = io.StringIO()
        namespace: dict = {"__name__": "__eval__"}
        try:
            tree = ast.parse(code, mode="exec")
            last = None
            if tree.body and isinstance(tree.body[-1], ast.Expr):
                last = ast.Expression(tree.body.pop().value)
            with contextlib.redirect_stdout(captured):
                exec(compile(tree, "<eval>", "exec"), namespace)
                result = eval(compile(last, "<eval>", "eval"), namespace) if last else None
        except Exception as e:
            self.logger.error("Python code execution failed: %s", e)
            return {
                "error": f"{type(e).__name__}: {e}",
                "output": _tail(captured.getvalue()) or None,
                "success": False,
            }

        output = _tail(captured.getvalue())
        try:
            json.dumps(result)
            serializable = result
        except (TypeError, ValueError):
            serializable = repr(result)

        self.logger.debug("Python code execution completed successfully")
        return {
            "result": serializable,
            "output": output or None,
            "python_type": type(result).__name__,
            "display": _display(output, None if result is None else repr(result)),
            "success": True,
        }


class RubyEvalTool:
    """Execute Ruby source with the ``ruby`` interpreter."""

    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or logging.getLogger(__name__)

    def execute(self, code: str) -> dict:
        if not code.strip():
            self.logger.error("Ruby code cannot be empty")
            return {"error": "Ruby code cannot be empty"}

        ruby = shutil.which("ruby")
        if ruby is None:
            raise MissingDependencyError("The ruby action requires a 'ruby' interpreter on PATH")

        self.logger.info("Executing Ruby code")
        try:
            p = subprocess.run(
                [ruby, "-e", _RUBY_WRAPPER], input=code,
                stdout=subprocess.PIPE, stderr=subprocess.PIPE, text=True,
                timeout=EVAL_TIMEOUT_SEC,
            )
        except subprocess.TimeoutExpired:
            return {"error": f"timeout after {EVAL_TIMEOUT_SEC}s", "success": False}

        if p.returncode != 0:
            self.logger.error("Ruby code execution failed: %s", p.stderr.strip())
            return {"error": _tail(p.stderr.strip()), "success": False}

        output, _, result = p.stdout.rpartition("\n" + _RESULT_MARKER)
        output = _tail(output)
        return {
            "result": result,
            "output": output or None,
            "display": _display(output, result),
            "success": True,
        }


class ShellEvalTool:
    """Execute a shell command and capture its output."""

    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or logging.getLogger(__name__)

    def execute(self, command: str) -> dict:
        if not command.strip():
            self.logger.error("Command cannot be empty")
            return {"error": "Command cannot be empty"}

        self.logger.info("Executing command: %r", command)
        try:
            p = subprocess.run(
                command, shell=True,
                stdout=subprocess.PIPE, stderr=subprocess.PIPE, text=True,
                timeout=EVAL_TIMEOUT_SEC,
            )
        except subprocess.TimeoutExpired:
            return {"error": f"timeout after {EVAL_TIMEOUT_SEC}s"}

        if p.returncode == 0:
            self.logger.debug("Command completed with %d bytes of output", len(p.stdout))
            return {"stdout": _tail(p.stdout), "exit_status": p.returncode}

        self.logger.warning("Command failed with exit code %d: %s", p.returncode, p.stderr.strip())
        return {
            "error": f"Command failed with exit code {p.returncode}",
            "stderr": _tail(p.stderr),
            "exit_status": p.returncode,
        }
