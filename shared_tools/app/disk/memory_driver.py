"""In-memory disk driver used as a test double."""

from __future__ import annotations

import posixpath

from ..errors import SecurityError
from .driver import BaseDriver


class MemoryDriver(BaseDriver):
    """Dict-backed filesystem with the same root rules as LocalDriver.

    Every call is appended to ``calls`` as ``(method, kwargs)``.
    """

    def __init__(self, files: dict[str, str] | None = None):
        self.files: dict[str, str] = {}
        self.directories: set[str] = {"."}
        self.calls: list[tuple[str, dict]] = []
        for path, text in (files or {}).items():
            key = self._key(path)
            self.files[key] = text
            self._add_parents(key)

    @staticmethod
    def _key(path: str) -> str:
        if posixpath.isabs(path):
            raise SecurityError(f"Path '{path}' resolves outside of the root directory")
        key = posixpath.normpath(path)
        if key == ".." or key.startswith("../"):
            raise SecurityError(f"Path '{path}' resolves outside of the root directory")
        return key

    def _add_parents(self, key: str) -> None:
        parent = posixpath.dirname(key)
        while parent:
            self.directories.add(parent)
            parent = posixpath.dirname(parent)

    def _record(self, method: str, **kwargs) -> None:
        self.calls.append((method, kwargs))

    def file_read(self, path: str) -> str:
        self._record("file_read", path=path)
        key = self._key(path)
        if key not in self.files:
            raise FileNotFoundError(f"file not found: {path}")
        return self.files[key]

    def file_write(self, path: str, text: str) -> dict:
        self._record("file_write", path=path, text=text)
        key = self._key(path)
        self.files[key] = text
        self._add_parents(key)
        return {"path": path, "bytes": len(text.encode("utf-8"))}

    def file_create(self, path: str) -> dict:
        self._record("file_create", path=path)
        key = self._key(path)
        self.files.setdefault(key, "")
        self._add_parents(key)
        return {"path": path, "created": True}

    def file_delete(self, path: str) -> dict:
        self._record("file_delete", path=path)
        key = self._key(path)
        if self.files.pop(key, None) is None:
            raise FileNotFoundError(f"file not found: {path}")
        return {"path": path, "deleted": True}

    def file_move(self, path: str, destination: str) -> dict:
        self._record("file_move", path=path, destination=destination)
        src, dst = self._key(path), self._key(destination)
        if src not in self.files:
            raise FileNotFoundError(f"file not found: {path}")
        self.files[dst] = self.files.pop(src)
        self._add_parents(dst)
        return {"path": path, "destination": destination}

    def file_replace(self, path: str, old_text: str, new_text: str) -> dict:
        self._record("file_replace", path=path, old_text=old_text, new_text=new_text)
        key = self._key(path)
        if key not in self.files:
            raise FileNotFoundError(f"file not found: {path}")
        count = self.files[key].count(old_text)
        if count == 0:
            raise ValueError(f"old_text not found in {path}")
        self.files[key] = self.files[key].replace(old_text, new_text)
        return {"path": path, "replacements": count}

    def directory_create(self, path: str) -> dict:
        self._record("directory_create", path=path)
        key = self._key(path)
        self.directories.add(key)
        self._add_parents(key)
        return {"path": path, "created": True}

    def directory_delete(self, path: str) -> dict:
        self._record("directory_delete", path=path)
        key = self._key(path)
        if key == ".":
            raise SecurityError("Refusing to delete the root directory")
        if key not in self.directories:
            raise FileNotFoundError(f"directory not found: {path}")
        prefix = key + "/"
        self.directories = {d for d in self.directories if d != key and not d.startswith(prefix)}
        self.files = {f: t for f, t in self.files.items() if not f.startswith(prefix)}
        return {"path": path, "deleted": True}

    def directory_move(self, path: str, destination: str) -> dict:
        self._record("directory_move", path=path, destination=destination)
        src, dst = self._key(path), self._key(destination)
        if src not in self.directories or src == ".":
            raise FileNotFoundError(f"directory not found: {path}")
        prefix = src + "/"
        self.directories = {
            dst + d[len(src):] if d == src or d.startswith(prefix) else d
            for d in self.directories
        }
        self.files = {
            (dst + f[len(src):] if f.startswith(prefix) else f): t
            for f, t in self.files.items()
        }
        self._add_parents(dst)
        return {"path": path, "destination": destination}

    def directory_list(self, path: str = ".") -> list[dict]:
        self._record("directory_list", path=path)
        key = self._key(path)
        if key not in self.directories:
            raise FileNotFoundError(f"directory not found: {path}")
        items = {}
        for d in self.directories:
            if d != "." and d != key and posixpath.dirname(d) == ("" if key == "." else key):
                items[posixpath.basename(d)] = {"name": posixpath.basename(d), "is_dir": True, "size": None}
        for f, text in self.files.items():
            if posixpath.dirname(f) == ("" if key == "." else key):
                name = posixpath.basename(f)
                items[name] = {"name": name, "is_dir": False, "size": len(text.encode("utf-8"))}
        return [items[name] for name in sorted(items)]
