"""Database session management.

SQLite engines and session factories, cached per resolved database
path and configured for thread-safe use under FastAPI.
"""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from ns2stat.core.settings import DEFAULT_DB_PATH
from ns2stat.db.schema import Base

# Resolved db path -> (engine, session factory)
_cache: dict[str, tuple[Engine, sessionmaker]] = {}


def _resolve(db_path: Path | None) -> Path:
    return Path(db_path) if db_path is not None else DEFAULT_DB_PATH


def get_engine(db_path: Path | None = None) -> Engine:
    """Get the cached SQLAlchemy engine for a database file.

    check_same_thread=False plus StaticPool lets FastAPI's worker threads
    share the single SQLite connection.

    Args:
        db_path: Path to SQLite database file. Defaults to data/ns2stat.db.

    Returns:
        SQLAlchemy engine instance (cached).
    """
    path = _resolve(db_path)
    key = str(path.resolve())
    if key not in _cache:
        path.parent.mkdir(parents=True, exist_ok=True)
        engine = create_engine(
            f"sqlite:///{path}",
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        _cache[key] = (engine, sessionmaker(bind=engine))
    return _cache[key][0]


def get_session(db_path: Path | None = None) -> Session:
    """Open a new session. The caller closes it."""
    get_engine(db_path)
    factory = _cache[str(_resolve(db_path).resolve())][1]
    return factory()


@contextmanager
def session_scope(db_path: Path | None = None) -> Generator[Session, None, None]:
    """Session that commits on success and rolls back on error.

    Example:
        with session_scope() as session:
            repo.create_game(session, entity)
    """
    session = get_session(db_path)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_db(db_path: Path | None = None) -> Engine:
    """Create tables if missing and return the engine."""
    engine = get_engine(db_path)
    Base.metadata.create_all(engine)
    return engine
