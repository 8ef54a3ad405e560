from __future__ import annotations

import datetime as dt
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends
from sqlmodel import Session

from meeting_manager.auth import require_user
from meeting_manager.config import Settings
from meeting_manager.deps import get_now, get_session, get_settings
from meeting_manager.models.meeting import Meeting
from meeting_manager.models.meeting_payloads import (
    CreateMeetingPayload,
    MeetingFilters,
    MeetingListType,
    MeetingStatusLiteral,
    UpdateMeetingPayload,
)
from meeting_manager.services import meeting_service


router = APIRouter(prefix="/meetings", tags=["meetings"], dependencies=[Depends(require_user)])


@router.post("", status_code=201)
def create_meeting(
    body: CreateMeetingPayload,
    session: Session = Depends(get_session),
    now: dt.datetime = Depends(get_now),
) -> Dict[str, Any]:
    meeting = meeting_service.create_meeting(session, body, now)
    return {
        "success": True,
        "message": "Instant meeting recorded" if meeting.is_instant else "Meeting scheduled successfully",
        "meeting": meeting,
    }


@router.get("")
def list_meetings(
    type: MeetingListType = "all",
    date: Optional[dt.date] = None,
    client_name: Optional[str] = None,
    status: Optional[MeetingStatusLiteral] = None,
    session: Session = Depends(get_session),
    now: dt.datetime = Depends(get_now),
) -> Dict[str, List[Meeting]]:
    filters = MeetingFilters(type=type, date=date, client_name=client_name, status=status)
    return {"meetings": meeting_service.list_meetings(session, filters, now)}


@router.get("/reminders")
def list_due_reminders(
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
    now: dt.datetime = Depends(get_now),
) -> Dict[str, List[Meeting]]:
    return {"meetings": meeting_service.due_reminders(session, now, settings.reminder_lookahead_minutes)}


@router.get("/{meeting_id}")
def get_meeting(meeting_id: str, session: Session = Depends(get_session)) -> Dict[str, Meeting]:
    return {"meeting": meeting_service.get_meeting(session, meeting_id)}


@router.put("/{meeting_id}")
def update_meeting(
    meeting_id: str,
    body: UpdateMeetingPayload,
    session: Session = Depends(get_session),
    now: dt.datetime = Depends(get_now),
) -> Dict[str, Any]:
    meeting = meeting_service.update_meeting(session, meeting_id, body, now)
    return {"success": True, "message": "Meeting updated successfully", "meeting": meeting}


@router.delete("/{meeting_id}")
def delete_meeting(meeting_id: str, session: Session = Depends(get_session)) -> Dict[str, Any]:
    meeting_service.delete_meeting(session, meeting_id)
    return {"success": True, "message": "Meeting deleted successfully"}
