"""Eval facade: run Python, Ruby or shell code.

Every action goes through the authorizer and the operator sees the exact
code before it runs.
"""

from __future__ import annotations

import logging
from enum import Enum

from .authorizer import Authorizer
from .base_tool import BaseTool
from .eval.eval_tools import PythonEvalTool, RubyEvalTool, ShellEvalTool


class EvalTool(BaseTool):
    name = "eval_tool"
    description = "A tool for evaluating code in different programming languages."

    class Action(str, Enum):
        PYTHON = "python"
        RUBY = "ruby"
        SHELL = "shell"

    HANDLERS = {
        Action.PYTHON: "_python",
        Action.RUBY: "_ruby",
        Action.SHELL: "_shell",
    }

    REQUIRED = {
        Action.PYTHON: ("code",),
        Action.RUBY: ("code",),
        Action.SHELL: ("command",),
    }

    SENSITIVE = frozenset(Action)

    def __init__(self, logger: logging.Logger | None = None, authorizer: Authorizer | None = None):
        super().__init__(logger=logger, authorizer=authorizer)
        self._sub_tools: dict[type, object] = {}

    def sub_tool(self, cls):
        tool = self._sub_tools.get(cls)
        if tool is None:
            tool = cls(logger=self.logger)
            self._sub_tools[cls] = tool
        return tool

    def describe(self, action, params):
        if action is self.Action.SHELL:
            return f"Run this shell command:\n\n{params.get('command')}"
        return f"Run this {action.value.capitalize()} code:\n\n{params.get('code')}"

    def _python(self, code):
        return self.sub_tool(PythonEvalTool).execute(code=code)

    def _ruby(self, code):
        return self.sub_tool(RubyEvalTool).execute(code=code)

    def _shell(self, command):
        return self.sub_tool(ShellEvalTool).execute(command=command)
