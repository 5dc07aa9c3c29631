"""SQLite database helpers."""

from __future__ import annotations

import sqlite3
from pathlib import Path

MIGRATIONS_DIR = Path(__file__).resolve().parent / "migrations"


def connect(db_path: Path) -> sqlite3.Connection:
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


def initialize_db(db_path: Path, migrations_dir: Path = MIGRATIONS_DIR) -> list[str]:
    """Create the database file and apply pending schema scripts.

    Scripts run in file-name order and each runs once per database; the names
    applied by this call are returned.
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = connect(db_path)
    try:
        return _apply_migrations(conn, migrations_dir)
    finally:
        conn.close()


def _apply_migrations(conn: sqlite3.Connection, migrations_dir: Path) -> list[str]:
    conn.execute(
        "CREATE TABLE IF NOT EXISTS schema_migrations (name TEXT PRIMARY KEY)"
    )
    done = {row["name"] for row in conn.execute("SELECT name FROM schema_migrations")}
    applied = []
    if migrations_dir.exists():
        for migration in sorted(migrations_dir.glob("*.sql")):
            if migration.name in done:
                continue
            conn.executescript(migration.read_text(encoding="utf-8"))
            conn.execute(
                "INSERT INTO schema_migrations (name) VALUES (?)", (migration.name,)
            )
            applied.append(migration.name)
    conn.commit()
    return applied
