"""
Storage Package

Persistence stores for in-progress attempts.
"""

from .base import MemoryStore, PersistenceStore
from .file_store import FileStore

__all__ = ["FileStore", "MemoryStore", "PersistenceStore"]
