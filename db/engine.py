"""
db.engine - Engine bootstrap and session factory for the catalog database.

The legacy shop runs on MySQL; local imports and the test suite use
SQLite.  Only config.DB_URL differs between the two.

SQLite notes: the pysqlite driver opens transactions lazily and never
emits BEGIN before a SAVEPOINT, which breaks Session.begin_nested().
The connection is put in autocommit mode and SQLAlchemy emits BEGIN
itself, so the savepoint around each article link behaves the same as
on MySQL.
"""

from __future__ import annotations

from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker

from db.models import Base

_engine = None
_SessionLocal: sessionmaker | None = None


def _install_sqlite_hooks(engine) -> None:
    @event.listens_for(engine, "connect")
    def _sqlite_connect(dbapi_conn, _rec):
        dbapi_conn.isolation_level = None
        cur = dbapi_conn.cursor()
        cur.execute("PRAGMA journal_mode=WAL")
        cur.execute("PRAGMA foreign_keys=ON")
        cur.execute("PRAGMA synchronous=NORMAL")
        cur.close()

    @event.listens_for(engine, "begin")
    def _sqlite_begin(conn):
        conn.exec_driver_sql("BEGIN")


def init_db(db_url: str) -> None:
    """(Re)create the engine and emit CREATE TABLE for the s_* tables."""
    global _engine, _SessionLocal

    if _engine is not None:
        _engine.dispose()

    _engine = create_engine(db_url, echo=False, future=True)
    if _engine.dialect.name == "sqlite":
        _install_sqlite_hooks(_engine)

    Base.metadata.create_all(_engine)
    _SessionLocal = sessionmaker(bind=_engine, expire_on_commit=False)


def get_session() -> Session:
    """Open a session on the catalog database.  Caller closes it."""
    if _SessionLocal is None:
        raise RuntimeError("Database not initialised - call init_db() first")
    return _SessionLocal()
