"""Additive, idempotent schema upgrades for SQLite databases."""

from __future__ import annotations

from typing import Iterable

from sqlalchemy import text
from sqlalchemy.engine import Engine

# Columns added after the first release. ``create_all`` never alters an
# existing table, so older databases pick these up here.
SUBMISSION_COLUMNS: dict[str, str] = {
    "metadata": "TEXT",
    "source": "TEXT",
    "ip_address": "TEXT",
    "user_agent": "TEXT",
}

FORM_COLUMNS: dict[str, str] = {
    "description": "TEXT",
    "is_published": "INTEGER DEFAULT 0 NOT NULL",
}


def _table_columns(engine: Engine, table: str) -> list[dict[str, object]]:
    """Fetch SQLite's description of a table; empty when the table is absent."""

    with engine.connect() as conn:
        return conn.execute(text(f"PRAGMA table_info({table})")).mappings().all()


def _column_names(engine: Engine, table: str) -> set[str]:
    return {record["name"] for record in _table_columns(engine, table)}


def _add_column_sqlite(engine: Engine, table: str, col_def: str) -> None:
    with engine.begin() as conn:
        conn.execute(text(f"ALTER TABLE {table} ADD COLUMN {col_def}"))


def _create_index_if_not_exists(engine: Engine, table: str, name: str, cols: Iterable[str], unique: bool = False) -> None:
    cols_sql = ", ".join(cols)
    unique_sql = "UNIQUE " if unique else ""
    with engine.begin() as conn:
        conn.execute(text(f"CREATE {unique_sql}INDEX IF NOT EXISTS {name} ON {table} ({cols_sql})"))


def _ensure_columns(engine: Engine, table: str, needed: dict[str, str]) -> list[str]:
    existing = _column_names(engine, table)
    if not existing:
        return []
    added: list[str] = []
    for name, dtype in needed.items():
        if name not in existing:
            _add_column_sqlite(engine, table, f"{name} {dtype}")
            added.append(name)
    return added


def run_migrations(engine: Engine) -> list[str]:
    """Bring an SQLite schema up to date and return the ``table.column`` names added."""

    if engine.dialect.name != "sqlite":
        return []

    added = [f"forms.{name}" for name in _ensure_columns(engine, "forms", FORM_COLUMNS)]
    added += [f"submissions.{name}" for name in _ensure_columns(engine, "submissions", SUBMISSION_COLUMNS)]

    if _column_names(engine, "submissions"):
        with engine.begin() as conn:
            conn.execute(text("UPDATE submissions SET source = 'DIRECT' WHERE source IS NULL"))
        _create_index_if_not_exists(engine, "submissions", "ix_submissions_form_status", ["form_id", "status"])
    return added
