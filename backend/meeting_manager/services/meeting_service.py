from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional
import logging

from sqlmodel import Session

from meeting_manager.errors import NotFoundError, ValidationFailed
from meeting_manager.models.base import to_utc
from meeting_manager.models.meeting import (
    ALLOWED_TRANSITIONS,
    Meeting,
    STATUS_COMPLETED,
    STATUS_SCHEDULED,
)
from meeting_manager.models.meeting_payloads import (
    CreateMeetingPayload,
    MeetingFilters,
    UpdateMeetingPayload,
)
from meeting_manager.repositories.meetings import MeetingsRepository

logger = logging.getLogger("meeting_manager.meetings")


REQUIRED_TEXT_FIELDS = ("title", "client_name", "organization_name", "mobile_number")


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _reject(message: str) -> ValidationFailed:
    logger.warning("Rejected meeting input: %s", message)
    return ValidationFailed(message)


def create_meeting(session: Session, payload: CreateMeetingPayload, now: datetime) -> Meeting:
    """Validate the payload and insert a new meeting.

    Instant meetings are stored as completed at ``payload.meeting_date`` (or
    ``now``); scheduled meetings need both ``date`` and ``time``. Nothing is
    written unless validation passes.
    """
    now = to_utc(now)
    if any(not (getattr(payload, f) or "").strip() for f in REQUIRED_TEXT_FIELDS):
        raise _reject("Missing required fields")

    if payload.is_instant:
        meeting_date = to_utc(payload.meeting_date) if payload.meeting_date else now
        status = STATUS_COMPLETED
        reminder_minutes = None
    else:
        if payload.date is None or payload.time is None:
            raise _reject("Date and time are required for scheduled meetings")
        meeting_date = datetime.combine(payload.date, payload.time)
        meeting_date = to_utc(meeting_date)
        status = STATUS_SCHEDULED
        reminder_minutes = payload.reminder_minutes or None

    meeting = Meeting(
        title=payload.title.strip(),
        client_name=payload.client_name.strip(),
        organization_name=payload.organization_name.strip(),
        mobile_number=payload.mobile_number.strip(),
        description=_blank_to_none(payload.description),
        meeting_date=meeting_date,
        location=_blank_to_none(payload.location),
        latitude=payload.latitude,
        longitude=payload.longitude,
        is_instant=payload.is_instant,
        reminder_minutes=reminder_minutes,
        selfie_url=_blank_to_none(payload.selfie_url),
        status=status,
        created_at=now,
        updated_at=now,
    )
    meeting = MeetingsRepository(session).create(meeting)
    logger.info("Created %s meeting %s", "instant" if meeting.is_instant else "scheduled", meeting.id)
    return meeting


def get_meeting(session: Session, meeting_id: str) -> Meeting:
    meeting = MeetingsRepository(session).get(meeting_id)
    if meeting is None:
        raise NotFoundError()
    return meeting


def _validated_changes(meeting: Meeting, payload: UpdateMeetingPayload) -> Dict[str, Any]:
    changes = payload.present_fields()

    for field in REQUIRED_TEXT_FIELDS:
        if field in changes:
            value = (changes[field] or "").strip()
            if not value:
                raise _reject(f"{field} cannot be empty")
            changes[field] = value

    if "meeting_date" in changes:
        if changes["meeting_date"] is None:
            raise _reject("meeting_date cannot be empty")
        changes["meeting_date"] = to_utc(changes["meeting_date"])

    if "reminder_minutes" in changes:
        reminder = changes["reminder_minutes"] or None
        if reminder is not None and meeting.is_instant:
            raise _reject("Instant meetings cannot have reminders")
        changes["reminder_minutes"] = reminder

    if "status" in changes:
        new_status = changes["status"]
        if new_status is None:
            raise _reject("status cannot be empty")
        if new_status != meeting.status and new_status not in ALLOWED_TRANSITIONS[meeting.status]:
            raise _reject(f"Cannot change status from {meeting.status} to {new_status}")

    for field in ("description", "location", "selfie_url"):
        if field in changes:
            changes[field] = _blank_to_none(changes[field])

    return changes


def update_meeting(session: Session, meeting_id: str, payload: UpdateMeetingPayload, now: datetime) -> Meeting:
    repo = MeetingsRepository(session)
    meeting = repo.get(meeting_id)
    if meeting is None:
        raise NotFoundError()

    changes = _validated_changes(meeting, payload)
    for field, value in changes.items():
        setattr(meeting, field, value)
    meeting.updated_at = to_utc(now)
    meeting = repo.update(meeting)
    logger.info("Updated meeting %s (%s)", meeting.id, ", ".join(sorted(changes)) or "no fields")
    return meeting


def delete_meeting(session: Session, meeting_id: str) -> None:
    repo = MeetingsRepository(session)
    meeting = repo.get(meeting_id)
    if meeting is None:
        raise NotFoundError()
    repo.delete(meeting)
    logger.info("Deleted meeting %s", meeting_id)


def list_meetings(session: Session, filters: MeetingFilters, now: datetime) -> List[Meeting]:
    return MeetingsRepository(session).list(filters, to_utc(now))


def due_reminders(session: Session, now: datetime, lookahead_minutes: int) -> List[Meeting]:
    """Scheduled meetings starting soon enough that their reminder should fire."""
    now = to_utc(now)
    upcoming = MeetingsRepository(session).list_scheduled_between(now, now + timedelta(minutes=lookahead_minutes))
    due: List[Meeting] = []
    for meeting in upcoming:
        if not meeting.reminder_minutes:
            continue
        minutes_left = int((to_utc(meeting.meeting_date) - now).total_seconds() // 60)
        if minutes_left <= meeting.reminder_minutes:
            due.append(meeting)
    return due
