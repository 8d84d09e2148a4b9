"""Disk driver interface."""

from __future__ import annotations

from typing import Any

from ..errors import DriverNotImplementedError


class BaseDriver:
    """Capability set for file and directory operations.

    Paths are relative to the driver's root. Every method not overridden
    raises DriverNotImplementedError.
    """

    def _missing(self, method: str):
        return DriverNotImplementedError(type(self).__name__, method)

    def file_read(self, path: str) -> str:
        raise self._missing("file_read")

    def file_write(self, path: str, text: str) -> Any:
        raise self._missing("file_write")

    def file_create(self, path: str) -> Any:
        raise self._missing("file_create")

    def file_delete(self, path: str) -> Any:
        raise self._missing("file_delete")

    def file_move(self, path: str, destination: str) -> Any:
        raise self._missing("file_move")

    def file_replace(self, path: str, old_text: str, new_text: str) -> Any:
        raise self._missing("file_replace")

    def directory_create(self, path: str) -> Any:
        raise self._missing("directory_create")

    def directory_delete(self, path: str) -> Any:
        raise self._missing("directory_delete")

    def directory_move(self, path: str, destination: str) -> Any:
        raise self._missing("directory_move")

    def directory_list(self, path: str = ".") -> list[dict]:
        raise self._missing("directory_list")

    def close(self) -> None:
        """Nothing to release for most disk drivers."""
