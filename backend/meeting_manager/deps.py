from __future__ import annotations

from datetime import datetime
from typing import Iterator

from sqlmodel import Session

from meeting_manager.config import Settings
from meeting_manager.models.base import engine, utcnow

_settings = Settings()


def get_session() -> Iterator[Session]:
    with Session(engine) as session:
        yield session


def get_settings() -> Settings:
    return _settings


def get_now() -> datetime:
    return utcnow()
