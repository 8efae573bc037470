"""SQLAlchemy engine factory.

Manifesto:
    Allocation correctness leans on the storage engine: the counter upsert
    must take the writer lock of its row before the mapping existence is
    re-checked.  PostgreSQL does this with the row lock taken by
    ``INSERT ... ON CONFLICT DO UPDATE``.  SQLite needs its transactions
    opened with ``BEGIN IMMEDIATE``, which pysqlite does not emit on its
    own, so the engine takes over transaction control from the driver.
    Only writers ask for it; readers open a deferred transaction and, in WAL
    mode, never wait on an in-flight allocation.

This module provides:

* ``create_seq_engine`` -- Create a SA engine from a URL with SQLite
  pragmas, busy timeout and driver-independent transactions.
* ``writer`` -- Engine view whose transactions take the write lock up front.

Tags:
    seq-spine, orm, sqlalchemy, engine, sqlite, transactions

Doc-Types:
    api-reference
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import create_engine as _sa_create_engine
from sqlalchemy import event
from sqlalchemy.engine import Engine

IMMEDIATE_OPTION = "sqlite_immediate"


def create_seq_engine(
    url: str = "sqlite:///seq_spine.db",
    *,
    echo: bool = False,
    busy_timeout_s: float = 30.0,
    pool_size: int | None = None,
    max_overflow: int | None = None,
    **kwargs: Any,
) -> Engine:
    """Create a SQLAlchemy engine with sane defaults.

    Parameters
    ----------
    url:
        Database URL (``sqlite:///…``, ``postgresql+psycopg://…``)
    echo:
        If ``True``, log all SQL.
    busy_timeout_s:
        Seconds a SQLite connection waits on a locked database.
    pool_size, max_overflow:
        Connection pool parameters (ignored for SQLite).
    **kwargs:
        Extra arguments forwarded to ``sqlalchemy.create_engine``.
    """

    if url.startswith("sqlite"):
        connect_args = kwargs.setdefault("connect_args", {})
        connect_args.setdefault("check_same_thread", False)
        connect_args.setdefault("timeout", busy_timeout_s)

        engine = _sa_create_engine(url, echo=echo, **kwargs)

        @event.listens_for(engine, "connect")
        def _set_sqlite_pragma(dbapi_connection: Any, _rec: Any) -> None:
            # Hand BEGIN/COMMIT to SQLAlchemy instead of the pysqlite driver
            dbapi_connection.isolation_level = None
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA journal_mode=WAL")
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.execute(f"PRAGMA busy_timeout={int(busy_timeout_s * 1000)}")
            cursor.close()

        @event.listens_for(engine, "begin")
        def _begin(conn: Any) -> None:
            if conn.get_execution_options().get(IMMEDIATE_OPTION):
                conn.exec_driver_sql("BEGIN IMMEDIATE")
            else:
                conn.exec_driver_sql("BEGIN")

        return engine

    pool_kwargs: dict[str, Any] = {"pool_pre_ping": True}
    if pool_size is not None:
        pool_kwargs["pool_size"] = pool_size
    if max_overflow is not None:
        pool_kwargs["max_overflow"] = max_overflow

    return _sa_create_engine(url, echo=echo, **pool_kwargs, **kwargs)


def writer(engine: Engine) -> Engine:
    """Return *engine* with ``BEGIN IMMEDIATE`` transactions on SQLite.

    Shares the pool and listeners of *engine*.  Other backends ignore the
    option.
    """
    return engine.execution_options(**{IMMEDIATE_OPTION: True})


__all__ = ["IMMEDIATE_OPTION", "create_seq_engine", "writer"]
