"""Base repository over a SQLAlchemy ``Connection``.

Provides :class:`BaseRepository` so domain repositories can write portable
SQL with named ``:param`` placeholders, and never see a driver exception.

Architecture::

    ┌────────────────────────────────────────────────────────────────────┐
    │                       BaseRepository                               │
    │                                                                    │
    │   conn: sqlalchemy.engine.Connection  (caller owns the txn)        │
    │                                                                    │
    │   execute(sql, params)     → CursorResult                          │
    │   query(sql, params)       → list[dict]                            │
    │   query_one(sql, params)   → dict | None                           │
    │   scalar(sql, params)      → Any                                   │
    └────────────────────────────────────────────────────────────────────┘

SQLAlchemy exceptions are translated at this boundary:

* ``sqlalchemy.exc.IntegrityError``     → :class:`IntegrityError`
* ``sqlalchemy.exc.OperationalError``   → :class:`DatabaseConnectionError`
* any other ``SQLAlchemyError``         → :class:`DatabaseError`

Usage:
    >>> class MyRepo(BaseRepository):
    ...     def get(self, category: str):
    ...         return self.query_one(
    ...             "SELECT * FROM seq_counters WHERE category = :category",
    ...             {"category": category},
    ...         )

Tags:
    repository, database, abstraction, portability
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import exc as sa_exc
from sqlalchemy import text
from sqlalchemy.engine import Connection, CursorResult

from seqspine.core.errors import DatabaseConnectionError, DatabaseError, IntegrityError


class BaseRepository:
    """Portable SQL helpers bound to one connection.

    The repository never begins or commits; transaction boundaries belong
    to the caller that opened the connection.
    """

    def __init__(self, conn: Connection) -> None:
        self.conn = conn

    # -- Query helpers -----------------------------------------------------

    def execute(self, sql: str, params: dict[str, Any] | None = None) -> CursorResult[Any]:
        """Execute a statement and return the SQLAlchemy result."""
        try:
            return self.conn.execute(text(sql), params or {})
        except sa_exc.IntegrityError as exc:
            raise IntegrityError(f"Constraint violation: {exc.orig}", cause=exc) from exc
        except sa_exc.OperationalError as exc:
            raise DatabaseConnectionError(f"Storage unavailable: {exc.orig}", cause=exc) from exc
        except sa_exc.SQLAlchemyError as exc:
            raise DatabaseError(f"Query failed: {exc}", cause=exc) from exc

    def query(self, sql: str, params: dict[str, Any] | None = None) -> list[dict[str, Any]]:
        """Execute a SELECT and return rows as dicts."""
        return [dict(row) for row in self.execute(sql, params).mappings()]

    def query_one(self, sql: str, params: dict[str, Any] | None = None) -> dict[str, Any] | None:
        """Execute a SELECT and return the first row as a dict (or None)."""
        row = self.execute(sql, params).mappings().first()
        return dict(row) if row is not None else None

    def scalar(self, sql: str, params: dict[str, Any] | None = None) -> Any:
        """Execute a statement and return the first column of the first row."""
        return self.execute(sql, params).scalar()


__all__ = ["BaseRepository"]
