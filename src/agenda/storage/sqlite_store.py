"""SQLite-backed key-value store.

Each store is a named preference group inside one database file. A key holds
either a string or a set of strings; sets are kept as a sorted JSON array.
"""

from __future__ import annotations

import json
import sqlite3
from collections.abc import Iterable
from pathlib import Path

from agenda.storage.db import connect, initialize_db
from agenda.storage.kv import ValueKind, ValueTypeError


class SQLiteKeyValueStore:
    def __init__(self, db_path: Path, prefs: str = "notes_prefs") -> None:
        self._db_path = db_path
        self._prefs = prefs
        initialize_db(db_path)

    def get_string(self, key: str) -> str | None:
        row = self._get(key)
        if row is None:
            return None
        if row["kind"] != "string":
            raise ValueTypeError(key, "string", row["kind"])
        return row["value"]

    def get_string_set(self, key: str) -> frozenset[str] | None:
        row = self._get(key)
        if row is None:
            return None
        if row["kind"] != "string_set":
            raise ValueTypeError(key, "string_set", row["kind"])
        return frozenset(json.loads(row["value"]))

    def put_string(self, key: str, value: str) -> None:
        self._put(key, "string", value)

    def put_string_set(self, key: str, values: Iterable[str]) -> None:
        self._put(key, "string_set", json.dumps(sorted(set(values))))

    def contains(self, key: str) -> bool:
        return self._get(key) is not None

    def remove(self, key: str) -> None:
        with connect(self._db_path) as conn:
            conn.execute(
                "DELETE FROM preferences WHERE prefs = ? AND key = ?",
                (self._prefs, key),
            )
        # sqlite3's context manager commits but does not close.
        conn.close()

    def clear(self) -> None:
        with connect(self._db_path) as conn:
            conn.execute("DELETE FROM preferences WHERE prefs = ?", (self._prefs,))
        conn.close()

    def _get(self, key: str) -> sqlite3.Row | None:
        conn = connect(self._db_path)
        try:
            return conn.execute(
                "SELECT kind, value FROM preferences WHERE prefs = ? AND key = ?",
                (self._prefs, key),
            ).fetchone()
        finally:
            conn.close()

    def _put(self, key: str, kind: ValueKind, value: str) -> None:
        with connect(self._db_path) as conn:
            conn.execute(
                "INSERT INTO preferences (prefs, key, kind, value) "
                "VALUES (?, ?, ?, ?) "
                "ON CONFLICT (prefs, key) DO UPDATE SET "
                "kind = excluded.kind, value = excluded.value",
                (self._prefs, key, kind, value),
            )
        conn.close()
