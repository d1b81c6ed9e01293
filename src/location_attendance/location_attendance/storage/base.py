from __future__ import annotations

from typing import Optional, Protocol


class KeyValueStorage(Protocol):
    """String-to-string storage that survives restarts (except the memory backend)."""

    def get_item(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set_item(self, key: str, value: str) -> None:
        raise NotImplementedError
