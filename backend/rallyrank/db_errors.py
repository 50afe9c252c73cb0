"""Helpers for classifying database/SQLAlchemy errors."""

from __future__ import annotations

from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.orm.exc import StaleDataError

# serialization_failure, deadlock_detected
_CONFLICT_SQLSTATES = {"40001", "40P01"}
_LOCK_NOT_AVAILABLE_SQLSTATES = {"55P03"}
_SQLITE_CONFLICT_MESSAGES = ("database is locked", "database table is locked")


def _sqlstate(exc: SQLAlchemyError) -> str | None:
    orig = getattr(exc, "orig", None)
    if orig is None:
        return None
    # asyncpg exposes ``sqlstate``; psycopg exposes ``pgcode``.
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


def is_concurrency_conflict(exc: SQLAlchemyError) -> bool:
    """Return ``True`` if ``exc`` means a concurrent writer won a race.

    Covers optimistic version mismatches raised by the ORM during flush as
    well as serialization failures, deadlocks and lock timeouts reported by
    the database driver. Such errors are safe for the caller to retry after
    re-reading.
    """

    if isinstance(exc, StaleDataError):
        return True
    if not isinstance(exc, DBAPIError):
        return False

    sqlstate = _sqlstate(exc)
    if sqlstate in _CONFLICT_SQLSTATES or sqlstate in _LOCK_NOT_AVAILABLE_SQLSTATES:
        return True

    message = str(getattr(exc, "orig", exc)).lower()
    return any(fragment in message for fragment in _SQLITE_CONFLICT_MESSAGES)
