"""Store selection from settings."""

from __future__ import annotations

from pathlib import Path

from agenda.core.settings import Settings
from agenda.storage.kv import InMemoryKeyValueStore, KeyValueStore
from agenda.storage.sqlite_store import SQLiteKeyValueStore


def database_path(settings: Settings) -> Path:
    return settings.data_dir / "agenda.db"


def open_store(settings: Settings) -> KeyValueStore:
    if settings.store_backend == "memory":
        return InMemoryKeyValueStore()
    return SQLiteKeyValueStore(database_path(settings), prefs=settings.prefs_name)
