from __future__ import annotations

from collections.abc import Generator
from typing import Annotated

from fastapi import Depends
from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from helpdesk.core.config import settings

_IN_MEMORY_URLS = {"sqlite://", "sqlite:///:memory:"}


def _configure_sqlite(engine: Engine) -> None:
    """Enforce foreign keys and take the write lock when a transaction begins.

    Deferred SQLite transactions can fail with "database is locked" when two
    writers try to upgrade at once; ``BEGIN IMMEDIATE`` makes them queue on
    the busy timeout instead. Every transaction takes the lock, read-only
    ones included, so on SQLite requests are serialized and a reader waits
    (up to the driver's busy timeout) for an open write to commit. That is
    accepted for the single-node SQLite deployment; Postgres is unaffected.
    """

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(connection):
        connection.exec_driver_sql("BEGIN IMMEDIATE")


def build_engine(url: str) -> Engine:
    if not url.startswith("sqlite"):
        return create_engine(url, pool_pre_ping=True)

    kwargs = {"connect_args": {"check_same_thread": False}}
    if url in _IN_MEMORY_URLS:
        kwargs["poolclass"] = StaticPool
    engine = create_engine(url, **kwargs)
    _configure_sqlite(engine)
    return engine


engine = build_engine(settings.DATABASE_URL)


def init_db(bind: Engine | None = None) -> None:
    """Create database tables in environments without migrations."""
    # Register every table on the metadata before creating it.
    import helpdesk.models  # noqa: F401

    SQLModel.metadata.create_all(bind=bind or engine)


def get_session() -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


SessionDep = Annotated[Session, Depends(get_session)]
