import pytest
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm.exc import StaleDataError

from rallyrank.db import engine_options, normalize_database_url
from rallyrank.db_errors import is_concurrency_conflict


class _PgError(Exception):
    def __init__(self, sqlstate):
        super().__init__(f"sqlstate {sqlstate}")
        self.sqlstate = sqlstate


def test_stale_data_is_a_conflict():
    assert is_concurrency_conflict(StaleDataError("version mismatch"))


@pytest.mark.parametrize("sqlstate", ["40001", "40P01", "55P03"])
def test_postgres_conflict_codes(sqlstate):
    exc = OperationalError("UPDATE player", {}, _PgError(sqlstate))
    assert is_concurrency_conflict(exc)


def test_sqlite_lock_is_a_conflict():
    exc = OperationalError("UPDATE player", {}, Exception("database is locked"))
    assert is_concurrency_conflict(exc)


def test_other_errors_are_not_conflicts():
    assert not is_concurrency_conflict(
        IntegrityError("INSERT", {}, _PgError("23505"))
    )
    assert not is_concurrency_conflict(
        OperationalError("SELECT", {}, Exception("no such table: player"))
    )


def test_normalize_database_url():
    assert (
        normalize_database_url("postgresql://u:p@db/rank")
        == "postgresql+asyncpg://u:p@db/rank"
    )
    assert normalize_database_url("sqlite+aiosqlite:///x.db") == "sqlite+aiosqlite:///x.db"


def test_engine_options_per_backend():
    from sqlalchemy.pool import NullPool, StaticPool

    assert engine_options("sqlite+aiosqlite:///:memory:")["poolclass"] is StaticPool
    assert engine_options("sqlite+aiosqlite:///./x.db")["poolclass"] is NullPool
    assert engine_options("postgresql+asyncpg://u:p@db/rank")["pool_pre_ping"] is True
