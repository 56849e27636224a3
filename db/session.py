"""Database engine and session management for the table booking service."""

from contextlib import contextmanager
from typing import Generator, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from core.config import Settings, get_settings
from core.logging import get_logger
from .base import Base


logger = get_logger(__name__)


def _enable_sqlite_write_locking(engine: Engine) -> None:
    """
    Make every SQLite transaction take the database write lock up front.

    pysqlite defers BEGIN until the first write, which lets two sessions read the
    same availability and then both insert. BEGIN IMMEDIATE serialises the whole
    read-then-write sequence instead.
    """

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def create_db_engine(
    url: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> Engine:
    """
    Create SQLAlchemy engine.

    Args:
        url: Database URL (defaults to settings.database_url)
        settings: Settings to read pool and echo options from

    Returns:
        SQLAlchemy engine
    """
    settings = settings or get_settings()
    url = url or settings.database_url

    if url.startswith("sqlite"):
        connect_args = {
            "check_same_thread": False,
            "timeout": settings.sqlite_busy_timeout_seconds,
        }
        kwargs = {}
        if url in ("sqlite://", "sqlite:///:memory:"):
            # One shared connection so every session sees the same in-memory database
            kwargs["poolclass"] = StaticPool
        engine = create_engine(url, echo=settings.db_echo, connect_args=connect_args, **kwargs)
        _enable_sqlite_write_locking(engine)
    else:
        engine = create_engine(
            url,
            echo=settings.db_echo,
            pool_pre_ping=settings.db_pool_pre_ping,
        )

    logger.info("Database engine created", extra={"dialect": engine.dialect.name})
    return engine


def create_session_factory(engine: Engine) -> sessionmaker:
    """Create the session factory bound to an engine."""
    return sessionmaker(
        bind=engine,
        class_=Session,
        expire_on_commit=False,
        autoflush=False,
    )


@contextmanager
def session_scope(session_factory: sessionmaker) -> Generator[Session, None, None]:
    """
    Context manager for a session that commits on success and rolls back on error.

    Example:
        with session_scope(SessionLocal) as session:
            session.add(restaurant)
    """
    session = session_factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_db(engine: Engine) -> None:
    """Initialize database by creating all tables."""
    from . import models_sqlalchemy  # noqa: F401

    Base.metadata.create_all(bind=engine)


def drop_db(engine: Engine) -> None:
    """Drop all database tables. Use with caution!"""
    Base.metadata.drop_all(bind=engine)
