from __future__ import annotations

import json
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Optional

from ..core.exceptions import StorageError
from .base import KeyValueStorage


class JsonFileStorage(KeyValueStorage):
    """All keys live in one JSON object on disk.

    Writes go to a temp file in the same directory and are renamed over the
    target, so a crash never leaves a half-written file behind. A file that
    exists but is not a JSON object raises StorageError on every access and
    is left untouched.

    Writers within one process are serialized; separate processes sharing
    the file are not.
    """

    def __init__(self, path: str | Path):
        self._path = Path(path)
        self._lock = threading.Lock()

    def _load(self) -> dict[str, Any]:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Could not read storage file {self._path}") from e

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise StorageError(f"Storage file {self._path} is not valid JSON") from e
        if not isinstance(data, dict):
            raise StorageError(f"Storage file {self._path}: top-level value is not an object")
        return data

    def get_item(self, key: str) -> Optional[str]:
        value = self._load().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            items = self._load()
            items[key] = value

            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=self._path.name, suffix=".tmp", dir=self._path.parent)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(items, fh, ensure_ascii=False)
                os.replace(tmp_name, self._path)
            except BaseException:
                try:
                    os.unlink(tmp_name)
                except FileNotFoundError:
                    pass
                raise
