"""Database session management.

Builds engines and session factories from a SQLAlchemy URL. Nothing is
module-global: the application factory constructs a session factory and
injects it, so tests can substitute an in-memory database.
"""

from __future__ import annotations

from pathlib import Path

from sqlalchemy import Engine, create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from cinevault.db.schema import Base


def _is_memory_sqlite(database_url: str) -> bool:
    url = make_url(database_url)
    return url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:")


def create_db_engine(database_url: str) -> Engine:
    """Create a SQLAlchemy engine for the database.

    For SQLite, uses check_same_thread=False so sessions can be used from
    FastAPI's threadpool, and StaticPool for in-memory databases so every
    session sees the same data. Parent directories of a SQLite file are
    created if missing.

    Args:
        database_url: SQLAlchemy database URL.

    Returns:
        SQLAlchemy engine instance.
    """
    url = make_url(database_url)

    if url.get_backend_name() != "sqlite":
        return create_engine(database_url, echo=False, pool_pre_ping=True)

    if _is_memory_sqlite(database_url):
        return create_engine(
            database_url,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    Path(url.database).parent.mkdir(parents=True, exist_ok=True)
    return create_engine(
        database_url,
        echo=False,
        connect_args={"check_same_thread": False},
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    """Create a session factory bound to engine.

    Sessions keep loaded attributes after commit so entities can be
    converted once the write has finished.
    """
    return sessionmaker(bind=engine, expire_on_commit=False)


def init_db(engine: Engine) -> None:
    """Initialize database schema.

    Call this once during application startup to create tables.

    Args:
        engine: Engine to create tables on.
    """
    Base.metadata.create_all(engine)
