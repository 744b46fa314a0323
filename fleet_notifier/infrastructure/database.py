"""Database configuration and session management."""

from __future__ import annotations

from collections.abc import Callable, Generator, Iterator
from contextlib import contextmanager

import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from fleet_notifier.config import Settings

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], Session]


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""


def build_engine(settings: Settings) -> Engine:
    """Create the SQLAlchemy engine for the configured database URL."""

    url = make_url(settings.database_url)
    options: dict[str, object] = {"pool_pre_ping": True}
    if url.get_backend_name() == "sqlite":
        # Jobs and email deliveries use their own sessions from worker threads.
        options["connect_args"] = {"check_same_thread": False, "timeout": 30}
        if url.database in (None, "", ":memory:"):
            # One shared connection, otherwise every thread sees an empty database.
            options["poolclass"] = StaticPool
    return create_engine(url, **options)


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Return a session factory bound to ``engine``."""

    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def initialize_database(engine: Engine) -> None:
    """Ensure all ORM models have corresponding database tables."""

    from fleet_notifier.infrastructure import models  # noqa: F401  # ensure models are imported

    Base.metadata.create_all(bind=engine, checkfirst=True)
    logger.debug("Database schema verified for %s", engine.url.render_as_string())


@contextmanager
def session_scope(session_factory: SessionFactory) -> Iterator[Session]:
    """Provide a session that is always closed afterwards."""

    session = session_factory()
    try:
        yield session
    finally:
        session.close()


def iter_session(session_factory: SessionFactory) -> Generator[Session, None, None]:
    """Yield a database session and close it afterwards."""

    with session_scope(session_factory) as session:
        yield session


__all__ = [
    "Base",
    "SessionFactory",
    "build_engine",
    "build_session_factory",
    "initialize_database",
    "iter_session",
    "session_scope",
]
