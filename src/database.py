"""Database engine and session management.

The engine is process-wide state created once by ``init_engine`` at startup.
Request handlers receive sessions through ``get_db`` and pass them to the
services, which never reach for the engine themselves.
"""

from collections.abc import Generator
from typing import Any

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

Base: Any = declarative_base()

_engine: Engine | None = None
_session_factory: sessionmaker | None = None


def init_engine(database_url: str) -> Engine:
    """Create the engine and session factory. Must be called exactly once."""
    global _engine, _session_factory

    if _engine is not None:
        raise RuntimeError("Database engine is already initialized")

    if database_url.startswith("sqlite"):
        engine = create_engine(database_url, connect_args={"check_same_thread": False})
    else:
        engine = create_engine(
            database_url,
            pool_pre_ping=True,
            pool_size=5,
            max_overflow=10,
        )

    _engine = engine
    _session_factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    return engine


def is_initialized() -> bool:
    """Check whether ``init_engine`` has run."""
    return _engine is not None


def get_engine() -> Engine:
    """Get the process-wide engine."""
    if _engine is None:
        raise RuntimeError("Database engine is not initialized")
    return _engine


def get_session_factory() -> sessionmaker:
    """Get the session factory bound to the process-wide engine."""
    if _session_factory is None:
        raise RuntimeError("Database engine is not initialized")
    return _session_factory


def get_db() -> Generator[Session, None, None]:
    """Dependency that provides a database session."""
    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Create all tables that do not exist yet."""
    # Import all models here so they are registered with Base.metadata
    from src import models  # noqa: F401

    Base.metadata.create_all(bind=get_engine())
