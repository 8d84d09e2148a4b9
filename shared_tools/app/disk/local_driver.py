"""Local filesystem driver jailed to a root directory."""

from __future__ import annotations

import logging
import os
import shutil

from ..errors import SecurityError
from .driver import BaseDriver

logger = logging.getLogger(__name__)

DISK_ROOT = os.getenv("DISK_ROOT", "")


class LocalDriver(BaseDriver):
    """Reads and writes real files under ``root``.

    Every path is resolved (symlinks included) before any I/O. A path that
    lands outside ``root`` raises SecurityError.
    """

    def __init__(self, root: str | None = None):
        self.root = os.path.realpath(root or DISK_ROOT or os.getcwd())

    def _abs(self, path: str) -> str:
        """Resolve a root-relative path with traversal protection."""
        full = os.path.realpath(os.path.join(self.root, path))
        if full != self.root and not full.startswith(self.root + os.sep):
            logger.error("Path traversal blocked: %r (root=%s)", path, self.root)
            raise SecurityError(f"Path '{path}' resolves outside of the root directory")
        return full

    # ---- files ----

    def file_read(self, path: str) -> str:
        full = self._abs(path)
        with open(full, encoding="utf-8") as f:
            return f.read()

    def file_write(self, path: str, text: str) -> dict:
        full = self._abs(path)
        with open(full, "w", encoding="utf-8") as f:
            f.write(text)
        return {"path": path, "bytes": len(text.encode("utf-8"))}

    def file_create(self, path: str) -> dict:
        full = self._abs(path)
        os.makedirs(os.path.dirname(full), exist_ok=True)
        with open(full, "a", encoding="utf-8"):
            pass
        return {"path": path, "created": True}

    def file_delete(self, path: str) -> dict:
        full = self._abs(path)
        os.remove(full)
        return {"path": path, "deleted": True}

    def file_move(self, path: str, destination: str) -> dict:
        src = self._abs(path)
        dst = self._abs(destination)
        if not os.path.isfile(src):
            raise FileNotFoundError(f"file not found: {path}")
        os.makedirs(os.path.dirname(dst), exist_ok=True)
        shutil.move(src, dst)
        return {"path": path, "destination": destination}

    def file_replace(self, path: str, old_text: str, new_text: str) -> dict:
        full = self._abs(path)
        with open(full, encoding="utf-8") as f:
            content = f.read()
        count = content.count(old_text)
        if count == 0:
            raise ValueError(f"old_text not found in {path}")
        with open(full, "w", encoding="utf-8") as f:
            f.write(content.replace(old_text, new_text))
        return {"path": path, "replacements": count}

    # ---- directories ----

    def directory_create(self, path: str) -> dict:
        full = self._abs(path)
        os.makedirs(full, exist_ok=True)
        return {"path": path, "created": True}

    def directory_delete(self, path: str) -> dict:
        full = self._abs(path)
        if full == self.root:
            raise SecurityError("Refusing to delete the root directory")
        shutil.rmtree(full)
        return {"path": path, "deleted": True}

    def directory_move(self, path: str, destination: str) -> dict:
        src = self._abs(path)
        dst = self._abs(destination)
        if src == self.root:
            raise SecurityError("Refusing to move the root directory")
        if not os.path.isdir(src):
            raise FileNotFoundError(f"directory not found: {path}")
        shutil.move(src, dst)
        return {"path": path, "destination": destination}

    def directory_list(self, path: str = ".") -> list[dict]:
        full = self._abs(path)
        items = []
        for name in sorted(os.listdir(full)):
            p = os.path.join(full, name)
            items.append({
                "name": name,
                "is_dir": os.path.isdir(p),
                "size": os.path.getsize(p) if os.path.isfile(p) else None,
            })
        return items
