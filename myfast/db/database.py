"""
Storage contract for the domain layer and its SQLite implementation.

Everything above this module talks to a ``Database``: four synchronous calls,
positional ``?`` placeholders, rows returned as plain dicts. ``SqlDatabase``
backs it with one long-lived SQLAlchemy connection to an embedded SQLite file
(or ``:memory:`` for tests).
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Protocol, Sequence, TypeVar

from loguru import logger
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Connection, CursorResult, Engine
from sqlalchemy.pool import StaticPool

from myfast.config import settings

T = TypeVar("T")

MEMORY_URL = "sqlite+pysqlite:///:memory:"


class Database(Protocol):
    def run(self, sql: str, params: Sequence[Any] = ()) -> None:
        """Execute a write statement (INSERT, UPDATE, DELETE, CREATE, ...)."""

    def get(self, sql: str, params: Sequence[Any] = ()) -> dict[str, Any] | None:
        """Return the first matching row, or None."""

    def all(self, sql: str, params: Sequence[Any] = ()) -> list[dict[str, Any]]:
        """Return all matching rows."""

    def transaction(self, fn: Callable[[], T]) -> T:
        """Run ``fn`` atomically. Any exception rolls back and is re-raised."""


def build_database_url(sqlite_path: str | None = None) -> str:
    raw = settings.sqlite_path if sqlite_path is None else sqlite_path
    if raw == ":memory:":
        return MEMORY_URL
    db_path = Path(raw)
    if not db_path.is_absolute():
        db_path = Path.cwd() / db_path
    db_path = db_path.resolve()
    db_path.parent.mkdir(parents=True, exist_ok=True)
    return f"sqlite+pysqlite:///{db_path.as_posix()}"


def _install_sqlite_hooks(engine: Engine) -> None:
    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, _connection_record) -> None:
        # pysqlite never emits BEGIN before DDL; let SQLAlchemy own the transaction boundaries.
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _emit_begin(conn: Connection) -> None:
        conn.exec_driver_sql("BEGIN")


def create_db_engine(url: str) -> Engine:
    if ":memory:" in url:
        engine = create_engine(
            url,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    else:
        engine = create_engine(url)
    _install_sqlite_hooks(engine)
    return engine


class SqlDatabase:
    """``Database`` over a single SQLAlchemy connection.

    Statements issued outside ``transaction()`` are committed one by one.
    ``transaction()`` calls nest through SAVEPOINTs.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        self._conn = engine.connect()
        self._depth = 0

    @property
    def url(self) -> str:
        return str(self._engine.url)

    @property
    def in_transaction(self) -> bool:
        return self._depth > 0

    def _execute(self, sql: str, params: Sequence[Any]) -> CursorResult:
        if params:
            return self._conn.exec_driver_sql(sql, tuple(params))
        return self._conn.exec_driver_sql(sql)

    def _autocommit(self, work: Callable[[], T]) -> T:
        if self._depth:
            return work()
        try:
            value = work()
        except Exception:
            self._conn.rollback()
            raise
        self._conn.commit()
        return value

    def run(self, sql: str, params: Sequence[Any] = ()) -> None:
        self._autocommit(lambda: self._execute(sql, params).close())

    def get(self, sql: str, params: Sequence[Any] = ()) -> dict[str, Any] | None:
        def _first() -> dict[str, Any] | None:
            row = self._execute(sql, params).mappings().first()
            return dict(row) if row is not None else None

        return self._autocommit(_first)

    def all(self, sql: str, params: Sequence[Any] = ()) -> list[dict[str, Any]]:
        return self._autocommit(lambda: [dict(r) for r in self._execute(sql, params).mappings().all()])

    def transaction(self, fn: Callable[[], T]) -> T:
        if self._depth == 0:
            if self._conn.in_transaction():
                self._conn.commit()
            tx = self._conn.begin()
        else:
            tx = self._conn.begin_nested()

        self._depth += 1
        try:
            with tx:
                return fn()
        except Exception as exc:
            logger.warning("transaction_rolled_back depth={} err={}", self._depth, type(exc).__name__)
            raise
        finally:
            self._depth -= 1

    def close(self) -> None:
        self._conn.close()
        self._engine.dispose()

    def __enter__(self) -> SqlDatabase:
        return self

    def __exit__(self, *_exc) -> None:
        self.close()


def open_database(url: str | None = None) -> SqlDatabase:
    db_url = url or build_database_url()
    logger.debug("database_open url={}", db_url)
    return SqlDatabase(create_db_engine(db_url))
