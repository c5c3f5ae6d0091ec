from __future__ import annotations

import logging
import sqlite3
from pathlib import Path

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from .core.text import trigram_similarity
from .settings import settings

logger = logging.getLogger("recipebox.db")


class Base(DeclarativeBase):
    pass


_engine = None
_SessionLocal = None


@event.listens_for(Engine, "connect")
def _on_sqlite_connect(dbapi_connection, connection_record):
    """SQLite has no pg_trgm; register a compatible similarity() and enable FKs.

    pysqlite's own transaction handling is switched off so that SAVEPOINTs
    behave; BEGIN is emitted from the "begin" hook below instead.
    """
    if not isinstance(dbapi_connection, sqlite3.Connection):
        return
    dbapi_connection.isolation_level = None
    dbapi_connection.create_function("similarity", 2, trigram_similarity, deterministic=True)
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@event.listens_for(Engine, "begin")
def _on_sqlite_begin(conn):
    if conn.dialect.name != "sqlite":
        return
    # a StaticPool hands the same connection to every session
    if not conn.connection.driver_connection.in_transaction:
        conn.exec_driver_sql("BEGIN")


def init_engine(database_url: str | None = None):
    global _engine, _SessionLocal
    url = database_url or settings.database_url
    _engine = create_engine(url, pool_pre_ping=True)
    _SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=_engine)
    return _engine


def get_engine():
    global _engine
    if _engine is None:
        init_engine()
    return _engine


def SessionLocal():
    global _SessionLocal
    if _SessionLocal is None:
        init_engine()
    return _SessionLocal


def get_db():
    db = SessionLocal()()
    try:
        yield db
    finally:
        db.close()


def run_migrations(database_url: str | None = None) -> None:
    """Upgrade the database to the latest Alembic revision."""
    from alembic import command
    from alembic.config import Config

    root = Path(__file__).resolve().parents[1]
    cfg = Config(str(root / "alembic.ini"))
    cfg.set_main_option("script_location", str(root / "alembic"))
    cfg.set_main_option("sqlalchemy.url", database_url or settings.database_url)

    logger.info("Applying migrations")
    command.upgrade(cfg, "head")
