from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator

from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

from .config import get_settings


def _enforce_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(database_url: str, **kwargs: Any) -> Engine:
    """Create the engine; SQLite connections get foreign key enforcement."""
    if database_url.startswith("sqlite"):
        if database_url.startswith("sqlite:///"):
            Path(database_url.replace("sqlite:///", "")).parent.mkdir(parents=True, exist_ok=True)
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    engine = create_engine(database_url, echo=False, **kwargs)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enforce_foreign_keys)
    return engine


engine = build_engine(get_settings().database_url)


def init_db() -> None:
    """Create the teacher, course, student and user tables."""
    from . import models  # noqa: F401  # Ensure models are imported

    SQLModel.metadata.create_all(engine)


def get_session() -> Iterator[Session]:
    """FastAPI dependency yielding one session per request."""
    with Session(engine) as session:
        yield session


@contextmanager
def session_context() -> Iterator[Session]:
    """Session for scripts running outside a request."""
    with Session(engine) as session:
        yield session
