"""Database session and engine helpers."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterator, TypeVar

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.engine.url import URL, make_url
from sqlalchemy.orm import Session, sessionmaker

from registry_api.config.settings import PROJECT_ROOT, get_settings

from .base import Base
from . import models  # noqa: F401  # ensure models are imported for metadata

DEFAULT_DB_PATH = PROJECT_ROOT / "var" / "data" / "registry.db"

T = TypeVar("T")


def _resolve_database_url() -> str:
    raw_url = get_settings().database_url
    if not raw_url:
        DEFAULT_DB_PATH.parent.mkdir(parents=True, exist_ok=True)
        return f"sqlite:///{DEFAULT_DB_PATH.as_posix()}"

    url: URL = make_url(raw_url)
    if url.drivername.startswith("sqlite") and url.database and url.database != ":memory:":
        db_path = Path(url.database)
        if not db_path.is_absolute():
            db_path = PROJECT_ROOT / db_path
        db_path.parent.mkdir(parents=True, exist_ok=True)
        url = url.set(database=str(db_path))
    return url.render_as_string(hide_password=False)


DATABASE_URL = _resolve_database_url()

_SQLITE_CONNECT_ARGS: dict[str, object] = (
    {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
)

engine: Engine = create_engine(
    DATABASE_URL,
    echo=False,
    future=True,
    pool_pre_ping=True,
    connect_args=_SQLITE_CONNECT_ARGS,
)

if DATABASE_URL.startswith("sqlite"):

    @event.listens_for(engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, _record) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
    future=True,
    expire_on_commit=False,
)


def get_session() -> Iterator[Session]:
    """Provide a transactional scope around a series of operations."""

    session: Session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def run_in_session(fn: Callable[[Session], T]) -> T:
    """Run ``fn`` inside one session; the session is closed on every exit path."""

    with SessionLocal() as session:
        return fn(session)


__all__ = [
    "Base",
    "DATABASE_URL",
    "SessionLocal",
    "engine",
    "get_session",
    "run_in_session",
]
