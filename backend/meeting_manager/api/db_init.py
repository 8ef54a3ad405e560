from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Dict
import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlmodel import Session

from meeting_manager.auth import require_user
from meeting_manager.deps import get_now, get_session
from meeting_manager.models.base import init_db, is_initialized, to_utc
from meeting_manager.models.meeting import Meeting, STATUS_COMPLETED, STATUS_SCHEDULED
from meeting_manager.repositories.meetings import MeetingsRepository

logger = logging.getLogger("meeting_manager.api")


router = APIRouter(prefix="/db-init", tags=["db"], dependencies=[Depends(require_user)])


class InitRequest(BaseModel):
    seed: bool = False


def sample_meetings(now: datetime) -> list[Meeting]:
    return [
        Meeting(
            title="Sample Meeting",
            client_name="John Doe",
            organization_name="ACME Corp",
            mobile_number="+1234567890",
            description="This is a sample meeting to test the application",
            meeting_date=now + timedelta(hours=2),
            location="Conference Room A",
            is_instant=False,
            status=STATUS_SCHEDULED,
            created_at=now,
            updated_at=now,
        ),
        Meeting(
            title="Client Review",
            client_name="Jane Smith",
            organization_name="Tech Solutions",
            mobile_number="+1234567891",
            description="Quarterly review meeting with the client",
            meeting_date=now + timedelta(days=1),
            location="Client Office",
            is_instant=False,
            status=STATUS_SCHEDULED,
            created_at=now,
            updated_at=now,
        ),
        Meeting(
            title="Field Visit",
            client_name="Mike Johnson",
            organization_name="Construction Co",
            mobile_number="+1234567892",
            description="On-site inspection and progress review",
            meeting_date=now - timedelta(hours=2),
            location="Construction Site",
            is_instant=True,
            status=STATUS_COMPLETED,
            created_at=now,
            updated_at=now,
        ),
    ]


@router.get("")
def db_status(session: Session = Depends(get_session)) -> Dict[str, Any]:
    bind = session.get_bind()
    if not is_initialized(bind):
        return {"initialized": False, "meetings": 0}
    return {"initialized": True, "meetings": MeetingsRepository(session).count()}


@router.post("")
def initialize(
    body: InitRequest | None = None,
    session: Session = Depends(get_session),
    now: datetime = Depends(get_now),
) -> Dict[str, Any]:
    now = to_utc(now)
    init_db(session.get_bind())
    repo = MeetingsRepository(session)
    seeded = 0
    if body is not None and body.seed and repo.count() == 0:
        for meeting in sample_meetings(now):
            repo.create(meeting)
            seeded += 1
        logger.info("Seeded %d sample meetings", seeded)
    return {"initialized": True, "seeded": seeded, "meetings": repo.count()}
