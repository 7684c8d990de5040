"""Record store — read access to figure records."""

from figurevault.store.base import RecordStore
from figurevault.store.memory import InMemoryRecordStore

__all__ = ["InMemoryRecordStore", "RecordStore"]
