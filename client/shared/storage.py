"""
Persistent key-value storage for client state.

Mirrors the browser's localStorage contract: string keys, string values,
individual key writes are atomic, writes to the same key follow last-write-wins.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Protocol, Union, runtime_checkable

from filelock import FileLock

logger = logging.getLogger(__name__)


@runtime_checkable
class KeyValueStorage(Protocol):
    """String-to-string storage with per-key atomic writes."""

    def get_item(self, key: str) -> Optional[str]:
        """Return the stored value, or None if the key is absent."""
        ...

    def set_item(self, key: str, value: str) -> None:
        """Store a value, replacing any previous one."""
        ...

    def remove_item(self, key: str) -> None:
        """Remove a key. Removing an absent key is a no-op."""
        ...


class InMemoryStorage:
    """Process-local storage. State is lost when the process exits."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._items


class JsonFileStorage:
    """
    Storage backed by a single JSON file.

    Every write rewrites the whole file through a temporary file and
    os.replace, so readers in other processes never see a partial file.
    Writers hold a sibling lock file for the whole read-modify-write, so
    concurrent writes to different keys never drop each other. Writes to
    the same key follow last-write-wins.
    """

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path).expanduser()
        self._lock = FileLock(str(self._path.with_name(self._path.name + ".lock")))

    @property
    def path(self) -> Path:
        return self._path

    def get_item(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with self._lock:
            items = self._read()
            items[key] = value
            self._write(items)

    def remove_item(self, key: str) -> None:
        if not self._path.exists():
            return
        with self._lock:
            items = self._read()
            if key in items:
                del items[key]
                self._write(items)

    def _read(self) -> dict[str, str]:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning(f"Ignoring corrupt storage file {self._path}")
            return {}
        if not isinstance(data, dict):
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _write(self, items: dict[str, str]) -> None:
        fd, tmp_name = tempfile.mkstemp(dir=self._path.parent, prefix=".storage-")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(items, fh)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise


def create_storage(path: Optional[str] = None) -> KeyValueStorage:
    """
    Create the storage backend for a configured path.

    Args:
        path: JSON file path. None selects in-memory storage.
    """
    if path:
        return JsonFileStorage(path)
    return InMemoryStorage()
