from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import inspect
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine
from meeting_manager.config import Settings

_settings = Settings()


def _make_engine(url: str) -> Engine:
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, connect_args=connect_args)


engine: Engine = _make_engine(_settings.resolved_database_url)


def utcnow() -> datetime:
    """Timezone-aware UTC timestamp; all stored datetimes use this convention."""
    return datetime.now(timezone.utc)


def to_utc(value: datetime) -> datetime:
    """Convert to aware UTC; naive values are taken to already be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def init_db(bind: Engine | None = None) -> None:
    target = bind or engine
    # Import table models so they register on the metadata
    from meeting_manager.models import auth_session, meeting  # noqa: F401

    if target.url.get_backend_name() == "sqlite" and target.url.database not in (None, "", ":memory:"):
        with target.begin() as conn:
            conn.exec_driver_sql("PRAGMA journal_mode=WAL;")
            conn.exec_driver_sql("PRAGMA synchronous=NORMAL;")
    SQLModel.metadata.create_all(target)


def is_initialized(bind: Engine | None = None) -> bool:
    target = bind or engine
    return inspect(target).has_table("meeting")
