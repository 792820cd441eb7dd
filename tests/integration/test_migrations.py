"""Alembic migrations build the same schema the repositories use."""

from pathlib import Path

from sqlalchemy import create_engine, inspect

from annos.infrastructure.persistence.migrate import run_migrations, to_sync_url
from annos.infrastructure.persistence.tables import metadata


class TestMigrations:
    def test_to_sync_url(self):
        assert to_sync_url("sqlite+aiosqlite:////tmp/a.db") == "sqlite:////tmp/a.db"
        assert to_sync_url("postgresql+asyncpg://u:p@h/db") == "postgresql://u:p@h/db"

    def test_upgrade_head_creates_all_tables(self, tmp_path: Path):
        db_file = tmp_path / "nested" / "annos.db"

        run_migrations(f"sqlite+aiosqlite:///{db_file}")

        engine = create_engine(f"sqlite:///{db_file}")
        try:
            tables = set(inspect(engine).get_table_names())
        finally:
            engine.dispose()
        assert set(metadata.tables) <= tables
        assert "alembic_version" in tables
