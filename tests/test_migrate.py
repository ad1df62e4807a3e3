from sqlalchemy import create_engine, text

from formintake.db.migrate import run_migrations


def _columns(engine, table):
    with engine.connect() as conn:
        return {row["name"] for row in conn.execute(text(f"PRAGMA table_info({table})")).mappings()}


def test_legacy_submissions_table_gains_metadata_columns(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'legacy.db'}")
    with engine.begin() as conn:
        conn.execute(text("CREATE TABLE forms (id TEXT PRIMARY KEY, user_id TEXT, title TEXT, created_at TEXT, updated_at TEXT)"))
        conn.execute(
            text("CREATE TABLE submissions (id TEXT PRIMARY KEY, form_id TEXT, data TEXT, status TEXT, submitted_at TEXT)")
        )
        conn.execute(text("INSERT INTO submissions VALUES ('s1', 'f1', '{}', 'PENDING', '2024-01-01T00:00:00Z')"))

    added = run_migrations(engine)

    assert "submissions.metadata" in added
    assert "forms.is_published" in added
    assert {"metadata", "source", "ip_address", "user_agent"} <= _columns(engine, "submissions")
    with engine.connect() as conn:
        assert conn.execute(text("SELECT source FROM submissions WHERE id = 's1'")).scalar_one() == "DIRECT"

    # Second run is a no-op.
    assert run_migrations(engine) == []


def test_migrations_skip_missing_tables():
    engine = create_engine("sqlite://")
    assert run_migrations(engine) == []
