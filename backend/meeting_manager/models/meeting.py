from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import uuid4
from sqlmodel import SQLModel, Field

from meeting_manager.models.base import utcnow


STATUS_SCHEDULED = "scheduled"
STATUS_COMPLETED = "completed"
STATUS_CANCELLED = "cancelled"
MEETING_STATUSES = (STATUS_SCHEDULED, STATUS_COMPLETED, STATUS_CANCELLED)

# Forward-only lifecycle; re-applying the current status is always allowed
ALLOWED_TRANSITIONS: dict[str, frozenset[str]] = {
    STATUS_SCHEDULED: frozenset({STATUS_COMPLETED, STATUS_CANCELLED}),
    STATUS_COMPLETED: frozenset(),
    STATUS_CANCELLED: frozenset(),
}


def _new_id() -> str:
    return str(uuid4())


class Meeting(SQLModel, table=True):
    id: str = Field(default_factory=_new_id, primary_key=True)
    title: str
    client_name: str = Field(index=True)
    organization_name: str
    mobile_number: str
    description: Optional[str] = None
    meeting_date: datetime = Field(index=True)
    location: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    is_instant: bool = Field(default=False)
    reminder_minutes: Optional[int] = None  # scheduled meetings only
    selfie_url: Optional[str] = None  # instant meetings only
    status: str = Field(default=STATUS_SCHEDULED, index=True)  # scheduled|completed|cancelled
    created_at: datetime = Field(default_factory=utcnow, index=True)
    updated_at: datetime = Field(default_factory=utcnow)
