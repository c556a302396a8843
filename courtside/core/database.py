"""
Database connection management.

One engine and one session factory per process. The engine is synchronous:
every repository call blocks the UI loop until it returns, which is fine
for a local SQLite file.
"""
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.orm import sessionmaker, Session
from courtside.core.config import settings
import logging

logger = logging.getLogger(__name__)

Base = declarative_base()


def _ensure_sqlite_directory(database_url: str) -> None:
    """Create the parent directory of a SQLite file URL if needed."""
    import os

    prefix = "sqlite:///"
    if not database_url.startswith(prefix):
        return
    path = database_url[len(prefix):]
    if not path or path == ":memory:":
        return
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)


def build_engine(database_url: str = None, **kwargs) -> Engine:
    """
    Create an engine for the given URL (defaults to settings.DATABASE_URL).

    SQLite connections get foreign keys switched on so that deleting a
    session cascades to its content and subscriptions.
    """
    url = database_url or settings.DATABASE_URL
    _ensure_sqlite_directory(url)

    engine = create_engine(
        url,
        echo=settings.DB_ECHO,  # Log SQL queries in debug mode
        future=True,
        **kwargs,
    )

    if engine.dialect.name == "sqlite":
        @event.listens_for(engine, "connect")
        def set_sqlite_pragma(dbapi_conn, connection_record):
            """Set connection-level settings."""
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()
            logger.debug("New database connection established")

    return engine


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
        expire_on_commit=False,  # Prevent lazy loading issues
    )


def get_db_sync(engine: Engine) -> Session:
    """
    Synchronous database session getter.

    Note: This does NOT auto-commit or auto-rollback.
    Caller must manage transactions explicitly.
    """
    return build_session_factory(engine)()

