from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from meeting_manager.config import Settings
from meeting_manager.deps import get_now, get_session, get_settings
from meeting_manager.main import create_app
from meeting_manager.models.base import init_db
from meeting_manager.models.meeting import Meeting


# Wednesday; its week starts Monday 2024-05-13
NOW = datetime(2024, 5, 15, 10, 30, tzinfo=timezone.utc)


def _memory_engine() -> Engine:
    return create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)


@pytest.fixture
def engine() -> Iterator[Engine]:
    eng = _memory_engine()
    init_db(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def bare_engine() -> Iterator[Engine]:
    """In-memory engine without any tables."""
    eng = _memory_engine()
    yield eng
    eng.dispose()


@pytest.fixture
def session(engine: Engine) -> Iterator[Session]:
    with Session(engine) as s:
        yield s


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(data_dir=tmp_path, auth_password=None)


def _build_client(engine: Engine, settings: Settings) -> TestClient:
    app = create_app()

    def _session() -> Iterator[Session]:
        with Session(engine) as s:
            yield s

    app.dependency_overrides[get_session] = _session
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_now] = lambda: NOW
    return TestClient(app)


@pytest.fixture
def client(engine: Engine, settings: Settings) -> TestClient:
    return _build_client(engine, settings)


@pytest.fixture
def bare_client(bare_engine: Engine, settings: Settings) -> TestClient:
    return _build_client(bare_engine, settings)


@pytest.fixture
def meeting_factory(session: Session):
    """Insert a meeting row with sensible defaults; keyword args override."""

    def _create(**overrides) -> Meeting:
        fields = dict(
            title="Quarterly review",
            client_name="John Doe",
            organization_name="ACME Corp",
            mobile_number="+1234567890",
            meeting_date=NOW,
            status="scheduled",
            is_instant=False,
            created_at=NOW,
            updated_at=NOW,
        )
        fields.update(overrides)
        meeting = Meeting(**fields)
        session.add(meeting)
        session.commit()
        session.refresh(meeting)
        return meeting

    return _create
