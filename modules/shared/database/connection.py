"""
modules/shared/database/connection.py
Database Connection Manager - PostgreSQL via SQLAlchemy Engine (echtes Pooling).

Kein globaler Engine-Cache: ein Database-Handle wird beim Prozessstart
explizit erzeugt, an Services übergeben und am Ende mit close() freigegeben.
"""

from contextlib import contextmanager
from typing import Optional
from urllib.parse import quote_plus

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, Connection, RootTransaction

from config.settings import (
    POSTGRES_HOST, POSTGRES_PORT, POSTGRES_DB,
    POSTGRES_USER, POSTGRES_PASSWORD, DATABASE_URL
)


def build_connection_url(
    host: str = POSTGRES_HOST,
    port: str = POSTGRES_PORT,
    database: str = POSTGRES_DB,
    username: str = POSTGRES_USER,
    password: str = POSTGRES_PASSWORD
) -> str:
    """Build SQLAlchemy URL for psycopg (PostgreSQL)."""
    return (
        f"postgresql+psycopg://{quote_plus(username)}:{quote_plus(password)}"
        f"@{host}:{port}/{database}"
    )


def default_connection_url() -> str:
    """DATABASE_URL aus .env, sonst aus den POSTGRES_* Werten gebaut."""
    return DATABASE_URL or build_connection_url()


def _enable_sqlite_savepoints(engine: Engine) -> None:
    """pysqlite: BEGIN selbst senden, damit SAVEPOINT/ROLLBACK zuverlässig greifen."""

    @event.listens_for(engine, "connect")
    def _do_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _do_begin(conn):
        conn.exec_driver_sql("BEGIN")


def _create_engine(url: str) -> Engine:
    if url.startswith('sqlite'):
        engine = create_engine(url, future=True)
        _enable_sqlite_savepoints(engine)
        return engine

    return create_engine(
        url,
        pool_size=5,
        max_overflow=5,
        pool_pre_ping=True,
        future=True,
    )


class Database:
    """
    Persistenz-Handle mit eigenem Engine.

    Verwendung:
        with Database(url) as db:
            with db.transaction() as conn:
                ...
    """

    def __init__(self, url: Optional[str] = None, engine: Optional[Engine] = None):
        self.url = url or default_connection_url()
        self._engine = engine or _create_engine(self.url)

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise RuntimeError("Database handle is closed")
        return self._engine

    @property
    def dialect_name(self) -> str:
        return self.engine.dialect.name

    @contextmanager
    def transaction(self):
        """Yields a Connection inside one transaction: commit on success, rollback on error."""
        conn: Connection = self.engine.connect()
        trans = conn.begin()
        try:
            yield conn
            self._commit(trans)
        except Exception:
            if trans.is_active:
                trans.rollback()
            raise
        finally:
            conn.close()

    @contextmanager
    def connect(self):
        """Read-only Connection ohne explizite Transaktion (Statistiken, Lookups)."""
        conn: Connection = self.engine.connect()
        try:
            yield conn
        finally:
            conn.close()

    def _commit(self, trans: RootTransaction) -> None:
        trans.commit()

    def close(self) -> None:
        """Dispose engine and close pooled connections (e.g., on shutdown)."""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None

    def __enter__(self) -> 'Database':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
