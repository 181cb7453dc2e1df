"""
Module: storage.file_store

Purpose:
    File-backed persistence store. One file per key inside a directory,
    guarded by a cross-platform lock so a write never interleaves with a
    read of the same key.

Key Classes:
    - FileStore: PersistenceStore backed by a directory

Key Functions:
    - locked_file: Context manager for locked file access

Dependencies:
    - portalocker: Cross-platform file locking

Used By:
    - engine.session (via the PersistenceStore protocol)
    - cli: inspect/clear persisted attempts
"""

from __future__ import annotations

import hashlib
import logging
import re
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional

import portalocker

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


@contextmanager
def locked_file(
    path: Path,
    mode: str = 'a',
    lock_type: int = portalocker.LOCK_EX,
) -> Generator:
    """
    Context manager for cross-platform locked file access.

    Args:
        path: Path to file.
        mode: File open mode ('r', 'w', 'a', etc.).
        lock_type: Lock type (LOCK_EX for exclusive, LOCK_SH for shared).

    Yields:
        Open file handle with lock held.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    # Ensure file exists for read modes
    if 'r' in mode and not path.exists():
        path.touch()

    with open(path, mode, encoding='utf-8') as f:
        portalocker.lock(f, lock_type)
        try:
            yield f
        finally:
            portalocker.unlock(f)


class FileStore:
    """
    Directory-backed store.

    Keys are opaque strings (e.g. "attempt_paper.pdf-1712345678"), so each
    key maps to a sanitized file name plus a short hash that keeps distinct
    keys from colliding after sanitization. Writes go to a temp file that
    atomically replaces the target.

    Attributes:
        directory: Where blob files live
    """

    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        """File that holds the blob for ``key``."""
        digest = hashlib.sha1(key.encode("utf-8")).hexdigest()[:10]
        stem = _UNSAFE_CHARS.sub("_", key).strip("._")[:80] or "blob"
        return self.directory / f"{stem}-{digest}.json"

    def _lock_path(self, key: str) -> Path:
        return self.path_for(key).with_suffix(".lock")

    def get(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        with locked_file(self._lock_path(key), 'a', portalocker.LOCK_SH):
            if not path.exists():
                return None
            return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        """
        Write ``value`` with atomic replacement.

        Raises:
            OSError: If the blob cannot be written
        """
        path = self.path_for(key)
        temp_path = path.with_suffix(".tmp")
        with locked_file(self._lock_path(key), 'a', portalocker.LOCK_EX):
            try:
                temp_path.write_text(value, encoding="utf-8")
                temp_path.replace(path)
            except OSError:
                if temp_path.exists():
                    temp_path.unlink()
                raise
        logger.debug(f"Stored {len(value)} chars under {key!r}")

    def delete(self, key: str) -> None:
        with locked_file(self._lock_path(key), 'a', portalocker.LOCK_EX):
            self.path_for(key).unlink(missing_ok=True)
        logger.debug(f"Deleted {key!r}")
