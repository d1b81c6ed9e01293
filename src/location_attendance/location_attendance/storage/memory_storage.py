from __future__ import annotations

from typing import Optional

from .base import KeyValueStorage


class InMemoryStorage(KeyValueStorage):
    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value
