"""Scripted database driver used as a test double."""

from __future__ import annotations

from .driver import BaseDriver


class MockDriver(BaseDriver):
    """Returns canned results and records every statement it receives.

    ``results`` maps a statement to its ``{"status", "result"}`` dict, or to
    an exception instance to raise. Unknown statements succeed with
    ``"0 row(s) affected"``.
    """

    def __init__(self, results: dict | None = None):
        self.results = dict(results or {})
        self.statements: list[str] = []
        self.closed = 0

    def perform(self, statement: str) -> dict:
        self.statements.append(statement)
        outcome = self.results.get(statement, {"status": "ok", "result": "0 row(s) affected"})
        if isinstance(outcome, Exception):
            raise outcome
        return dict(outcome)

    def close(self) -> None:
        self.closed += 1
