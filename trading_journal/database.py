"""SQLModel database engine and session management."""

import logging

from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine, Session

from trading_journal.config import settings

logger = logging.getLogger(__name__)


def build_engine(database_url: str):
    """Create an engine; in-memory SQLite is pinned to one shared connection."""
    connect_args = {}
    kwargs = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
    return create_engine(database_url, echo=False, connect_args=connect_args, **kwargs)


engine = build_engine(settings.database_url)


def create_db_and_tables():
    """Create all tables. Called on startup."""
    # Import models so their tables are registered on the metadata
    import trading_journal.models  # noqa: F401

    SQLModel.metadata.create_all(engine)
    logger.info(f"Database ready at {engine.url.render_as_string(hide_password=True)}")


def get_session() -> Session:
    """Dependency that yields a database session."""
    with Session(engine) as session:
        yield session
