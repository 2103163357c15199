# src/taskboard/storage/memory_storage.py

from __future__ import annotations


class MemoryStorage:
    """Process-local key-value storage (nothing survives the process)."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def read(self, key: str) -> str | None:
        return self._data.get(key)

    def write(self, key: str, value: str) -> None:
        self._data[key] = value

    def close(self) -> None:
        return
