from __future__ import annotations

from agenda.storage.db import connect, initialize_db


def test_migrations_apply_once(tmp_path) -> None:
    db_file = tmp_path / "nested" / "agenda.db"
    assert initialize_db(db_file) == ["001_preferences.sql"]
    assert initialize_db(db_file) == []
    conn = connect(db_file)
    try:
        tables = {
            row["name"]
            for row in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")
        }
    finally:
        conn.close()
    assert {"preferences", "schema_migrations"} <= tables


def test_custom_migrations_dir(tmp_path) -> None:
    migrations = tmp_path / "migrations"
    migrations.mkdir()
    (migrations / "002_extra.sql").write_text(
        "CREATE TABLE extra (id INTEGER);", encoding="utf-8"
    )
    (migrations / "001_base.sql").write_text(
        "CREATE TABLE base (id INTEGER);", encoding="utf-8"
    )
    applied = initialize_db(tmp_path / "agenda.db", migrations)
    assert applied == ["001_base.sql", "002_extra.sql"]
