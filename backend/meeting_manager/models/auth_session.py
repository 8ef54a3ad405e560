from __future__ import annotations

from datetime import datetime
from sqlmodel import SQLModel, Field

from meeting_manager.models.base import utcnow


class AuthSession(SQLModel, table=True):
    token: str = Field(primary_key=True)
    email: str = Field(index=True)
    created_at: datetime = Field(default_factory=utcnow)
    user_agent: str = ""
