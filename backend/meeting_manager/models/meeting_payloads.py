from __future__ import annotations

import datetime as dt
from typing import Literal, Optional
from pydantic import BaseModel, Field


MeetingStatusLiteral = Literal["scheduled", "completed", "cancelled"]
MeetingListType = Literal["today", "upcoming", "completed", "instant", "all"]


class CreateMeetingPayload(BaseModel):
    """Body of a create request.

    Required text fields are optional here so that a missing value is reported
    by the meeting service with the same error whether it was absent or empty.
    """

    title: Optional[str] = None
    client_name: Optional[str] = None
    organization_name: Optional[str] = None
    mobile_number: Optional[str] = None
    description: Optional[str] = None
    # Instant meetings: explicit occurrence time, defaults to now
    meeting_date: Optional[dt.datetime] = None
    # Scheduled meetings: calendar date and wall-clock time, both required
    date: Optional[dt.date] = None
    time: Optional[dt.time] = None
    location: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    is_instant: bool = False
    reminder_minutes: Optional[int] = Field(default=None, ge=0)
    selfie_url: Optional[str] = None


class UpdateMeetingPayload(BaseModel):
    """Partial update; only fields present in the request body are applied."""

    title: Optional[str] = None
    client_name: Optional[str] = None
    organization_name: Optional[str] = None
    mobile_number: Optional[str] = None
    description: Optional[str] = None
    meeting_date: Optional[dt.datetime] = None
    location: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    reminder_minutes: Optional[int] = Field(default=None, ge=0)
    selfie_url: Optional[str] = None
    status: Optional[MeetingStatusLiteral] = None

    def present_fields(self) -> dict:
        return self.dict(exclude_unset=True)


class MeetingFilters(BaseModel):
    type: MeetingListType = "all"
    date: Optional[dt.date] = None
    client_name: Optional[str] = None
    status: Optional[MeetingStatusLiteral] = None
