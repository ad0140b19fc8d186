import unittest.mock
from pathlib import Path

import pytest

from partnerfinder.infra import migrate


def test_bundled_migrations_are_found():
    names = [path.name for path in sorted(migrate.MIGRATIONS_DIR.glob("*.sql"))]
    assert "0001_partner_matching.sql" in names


def test_partial_unique_index_is_declared():
    sql = (migrate.MIGRATIONS_DIR / "0001_partner_matching.sql").read_text(encoding="utf-8")
    assert "CREATE UNIQUE INDEX" in sql
    assert "WHERE status = 'pending'" in sql


def test_pending_migrations_skip_applied_versions():
    paths = [Path("0002_b.sql"), Path("0001_a.sql"), Path("0003_c.sql")]
    assert [p.name for p in migrate.pending_migrations(paths, ["0002"])] == ["0001_a.sql", "0003_c.sql"]


@pytest.mark.asyncio
async def test_apply_migrations_records_versions(tmp_path):
    (tmp_path / "0001_init.sql").write_text("SELECT 1;", encoding="utf-8")
    (tmp_path / "0002_more.sql").write_text("SELECT 2;", encoding="utf-8")
    conn = unittest.mock.AsyncMock()
    conn.fetch.return_value = [{"version": "0001"}]
    conn.transaction = unittest.mock.MagicMock()

    applied = await migrate.apply_migrations(conn, tmp_path)

    assert applied == ["0002"]
    executed = [call.args[0] for call in conn.execute.await_args_list]
    assert "SELECT 2;" in executed
    assert "SELECT 1;" not in executed


@pytest.mark.asyncio
async def test_apply_migrations_requires_files(tmp_path):
    with pytest.raises(RuntimeError):
        await migrate.apply_migrations(unittest.mock.AsyncMock(), tmp_path)
