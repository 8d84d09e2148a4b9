"""Disk facade: list, create, delete, move and modify files and directories.

Be careful using it, it acts on your computer. The default driver is a
LocalDriver rooted at DISK_ROOT (or the current directory); no path can
escape that root.
"""

from __future__ import annotations

import logging
from enum import Enum

from .authorizer import Authorizer
from .base_tool import BaseTool
from .disk.driver import BaseDriver
from .disk.local_driver import LocalDriver


class DiskTool(BaseTool):
    name = "disk_tool"
    description = (
        "A tool for interacting with a system. It is able to list, create, "
        "delete, move and modify directories and files."
    )

    class Action(str, Enum):
        DIRECTORY_CREATE = "directory_create"
        DIRECTORY_DELETE = "directory_delete"
        DIRECTORY_MOVE = "directory_move"
        DIRECTORY_LIST = "directory_list"
        FILE_CREATE = "file_create"
        FILE_DELETE = "file_delete"
        FILE_MOVE = "file_move"
        FILE_READ = "file_read"
        FILE_WRITE = "file_write"
        FILE_REPLACE = "file_replace"

    HANDLERS = {
        Action.DIRECTORY_CREATE: "_directory_create",
        Action.DIRECTORY_DELETE: "_directory_delete",
        Action.DIRECTORY_MOVE: "_directory_move",
        Action.DIRECTORY_LIST: "_directory_list",
        Action.FILE_CREATE: "_file_create",
        Action.FILE_DELETE: "_file_delete",
        Action.FILE_MOVE: "_file_move",
        Action.FILE_READ: "_file_read",
        Action.FILE_WRITE: "_file_write",
        Action.FILE_REPLACE: "_file_replace",
    }

    REQUIRED = {
        Action.DIRECTORY_CREATE: ("path",),
        Action.DIRECTORY_DELETE: ("path",),
        Action.DIRECTORY_MOVE: ("path", "destination"),
        Action.DIRECTORY_LIST: (),
        Action.FILE_CREATE: ("path",),
        Action.FILE_DELETE: ("path",),
        Action.FILE_MOVE: ("path", "destination"),
        Action.FILE_READ: ("path",),
        Action.FILE_WRITE: ("path", "text"),
        Action.FILE_REPLACE: ("path", "old_text", "new_text"),
    }

    SENSITIVE = frozenset({Action.FILE_DELETE, Action.DIRECTORY_DELETE})

    def __init__(
        self,
        driver: BaseDriver | None = None,
        logger: logging.Logger | None = None,
        authorizer: Authorizer | None = None,
    ):
        super().__init__(logger=logger, authorizer=authorizer)
        self.driver = driver if driver is not None else LocalDriver()

    def describe(self, action, params):
        target = params.get("path")
        if action is self.Action.DIRECTORY_DELETE:
            return f"Delete the directory '{target}' and everything inside it"
        return f"Delete the file '{target}'"

    def _directory_create(self, path):
        return self.driver.directory_create(path=path)

    def _directory_delete(self, path):
        return self.driver.directory_delete(path=path)

    def _directory_move(self, path, destination):
        return self.driver.directory_move(path=path, destination=destination)

    def _directory_list(self, path="."):
        return self.driver.directory_list(path=path)

    def _file_create(self, path):
        return self.driver.file_create(path=path)

    def _file_delete(self, path):
        return self.driver.file_delete(path=path)

    def _file_move(self, path, destination):
        return self.driver.file_move(path=path, destination=destination)

    def _file_read(self, path):
        return self.driver.file_read(path=path)

    def _file_write(self, path, text):
        return self.driver.file_write(path=path, text=text)

    def _file_replace(self, path, old_text, new_text):
        return self.driver.file_replace(path=path, old_text=old_text, new_text=new_text)
