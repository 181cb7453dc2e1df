"""
Persistence store contract and the in-memory implementation.

A store holds opaque strings under string keys. It performs no validation;
the autosave manager owns the blob format.
"""
from __future__ import annotations

from typing import Dict, Optional, Protocol


class PersistenceStore(Protocol):
    """Durable string-keyed blob storage."""

    def get(self, key: str) -> Optional[str]:
        """Return the blob stored under ``key``, or None if absent."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous blob."""
        ...

    def delete(self, key: str) -> None:
        """Remove ``key``. Deleting a missing key is not an error."""
        ...


class MemoryStore:
    """Dict-backed store (swap for FileStore when state must survive a restart)."""

    def __init__(self) -> None:
        self._data: Dict[str, str] = {}
        self.writes = 0

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value
        self.writes += 1

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)
