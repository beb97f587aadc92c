"""SQLite audit trail for order activity."""
from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from functools import lru_cache

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine

from .paths import DB_PATH, ensure_storage_dirs


@lru_cache(maxsize=1)
def _engine() -> Engine:
    ensure_storage_dirs()
    engine = create_engine(
        f"sqlite:///{DB_PATH.as_posix()}",
        connect_args={"check_same_thread": False},
    )
    event.listen(engine, "connect", _apply_pragmas)
    return engine


def _apply_pragmas(dbapi_conn, _):  # pragma: no cover - exercised via runtime
    dbapi_conn.row_factory = sqlite3.Row
    cursor = dbapi_conn.cursor()
    try:
        cursor.execute("PRAGMA journal_mode=WAL;")
        cursor.execute("PRAGMA synchronous=NORMAL;")
        cursor.execute("PRAGMA temp_store=MEMORY;")
    finally:
        cursor.close()


def get_conn():
    conn = _engine().raw_connection()
    conn.dbapi_connection.isolation_level = None  # explicit transactions via BEGIN
    return conn


@contextmanager
def db_transaction(begin_stmt: str = "BEGIN IMMEDIATE"):
    conn = get_conn()
    try:
        conn.execute(begin_stmt)
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def close_engine() -> None:
    if _engine.cache_info().currsize:
        _engine().dispose()
    _engine.cache_clear()


def init_db() -> None:
    conn = get_conn()
    try:
        conn.execute(
            """CREATE TABLE IF NOT EXISTS audit_log(
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    ts TEXT NOT NULL,
                    action TEXT NOT NULL,
                    table_id INTEGER,
                    item_id INTEGER,
                    old_value TEXT,
                    new_value TEXT,
                    extra TEXT
                )"""
        )
        conn.execute("CREATE INDEX IF NOT EXISTS idx_audit_ts ON audit_log(ts)")
    finally:
        conn.close()


def log_action(action, table_id=None, item_id=None, old_value=None, new_value=None, extra=None):
    with db_transaction() as conn:
        conn.execute(
            """INSERT INTO audit_log(ts,action,table_id,item_id,old_value,new_value,extra)
                   VALUES(?,?,?,?,?,?,?)""",
            (
                datetime.now(timezone.utc).isoformat(),
                action,
                table_id,
                item_id,
                None if old_value is None else str(old_value),
                None if new_value is None else str(new_value),
                extra,
            ),
        )
