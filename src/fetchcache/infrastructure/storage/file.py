"""File-backed storage medium."""

import base64
import json
import os
from collections.abc import Iterable
from pathlib import Path

from fetchcache.core.errors import PersistenceError


class FileStorage:
    """Storage medium persisted as a single JSON document on disk.

    Values are base64 encoded inside the document. The whole file is
    rewritten on every change through a temporary file and an atomic
    rename, so a crash never leaves a half-written document behind.
    Suitable for small caches that must survive process restarts.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        """Initialize the storage.

        Args:
            path: Location of the JSON document. Created on first write.
        """
        self._path = Path(path).expanduser()
        self._items: dict[str, str] | None = None

    def get_item(self, key: str) -> bytes | None:
        encoded = self._load().get(key)
        if encoded is None:
            return None
        return base64.b64decode(encoded)

    def set_item(self, key: str, value: bytes) -> None:
        items = self._load()
        items[key] = base64.b64encode(value).decode("ascii")
        self._flush(items)

    def remove_item(self, key: str) -> None:
        items = self._load()
        if items.pop(key, None) is not None:
            self._flush(items)

    def keys(self) -> Iterable[str]:
        return list(self._load())

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, str]:
        if self._items is not None:
            return self._items
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            self._items = {}
            return self._items
        except OSError as e:
            raise PersistenceError(f"Failed to read {self._path}: {e}") from e
        try:
            loaded = json.loads(raw)
        except json.JSONDecodeError as e:
            raise PersistenceError(f"Corrupt storage file {self._path}: {e}") from e
        if not isinstance(loaded, dict):
            raise PersistenceError(f"Corrupt storage file {self._path}")
        self._items = loaded
        return self._items

    def _flush(self, items: dict[str, str]) -> None:
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(items), encoding="utf-8")
            os.replace(tmp_path, self._path)
        except OSError as e:
            raise PersistenceError(f"Failed to write {self._path}: {e}") from e
