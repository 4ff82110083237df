"""Tests for migration discovery and DB wiring (no database needed)."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from chamabot.db.migrate import MIGRATIONS_DIR, list_migration_files, main
from chamabot.db.pool import create_pool


def test_migrations_are_sql_files_in_lexicographic_order() -> None:
    files = list_migration_files()

    assert files
    assert [f.name for f in files] == sorted(f.name for f in files)
    assert all(f.parent == MIGRATIONS_DIR and f.suffix == ".sql" for f in files)


def test_members_table_is_created() -> None:
    sql_text = list_migration_files()[0].read_text(encoding="utf-8")

    assert "CREATE TABLE IF NOT EXISTS chama_members" in sql_text
    for column in (
            "member_key",
            "monthly_goal",
            "current_period_contributions",
            "total_contributions",
            "joined_at",
    ):
        assert column in sql_text


def test_migrate_cli_requires_database_url(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.setattr(sys, "argv", ["migrate"])

    with pytest.raises(SystemExit, match="DATABASE_URL"):
        main()


async def test_pool_is_created_closed_with_requested_size() -> None:
    pool = create_pool("postgresql://chama@localhost/chama", max_size=3)

    assert pool.closed
    assert pool.min_size == 1
    assert pool.max_size == 3
    assert pool.conninfo == "postgresql://chama@localhost/chama"
