from functools import lru_cache

from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine, Session

from .config import get_settings


def build_engine(database_url: str, echo: bool = False, **kwargs) -> Engine:
    """Create an engine for ``database_url``.

    SQLite only enforces ``ON DELETE CASCADE`` when foreign keys are switched
    on for every connection, so that pragma is installed here.
    """
    if database_url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    engine = create_engine(database_url, echo=echo, **kwargs)

    if engine.dialect.name == "sqlite":
        @event.listens_for(engine, "connect")
        def _enable_sqlite_foreign_keys(dbapi_connection, _):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


@lru_cache
def get_engine() -> Engine:
    settings = get_settings()
    return build_engine(settings.database_url, echo=settings.database_echo)


# Function to get a database session
def get_session():
    session = Session(get_engine(), autoflush=False)
    try:
        yield session
    finally:
        session.close()


# Function to create tables
def init_db(engine: Engine = None):
    from . import models  # noqa: F401  registers the tables

    SQLModel.metadata.create_all(engine or get_engine())
