from __future__ import annotations

from datetime import date, datetime, time, timezone
from typing import Optional

from sqlalchemy import func
from sqlmodel import Session, select

from meeting_manager.models.base import to_utc
from meeting_manager.models.meeting import Meeting, STATUS_COMPLETED, STATUS_SCHEDULED
from meeting_manager.models.meeting_payloads import MeetingFilters
from meeting_manager.repositories.store import store_errors

LIKE_ESCAPE = "\\"


def contains_pattern(text: str) -> str:
    """LIKE pattern matching ``text`` literally anywhere in the column."""
    for ch in (LIKE_ESCAPE, "%", "_"):
        text = text.replace(ch, LIKE_ESCAPE + ch)
    return f"%{text}%"


def day_bounds(day: date) -> tuple[datetime, datetime]:
    return (
        datetime.combine(day, time.min, tzinfo=timezone.utc),
        datetime.combine(day, time.max, tzinfo=timezone.utc),
    )


class MeetingsRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def _store_errors(self, action: str):
        return store_errors(self.session, action)

    def create(self, meeting: Meeting) -> Meeting:
        with self._store_errors("creating meeting"):
            self.session.add(meeting)
            self.session.commit()
            self.session.refresh(meeting)
        return meeting

    def get(self, meeting_id: str) -> Optional[Meeting]:
        with self._store_errors("fetching meeting"):
            return self.session.get(Meeting, meeting_id)

    def update(self, meeting: Meeting) -> Meeting:
        with self._store_errors("updating meeting"):
            self.session.add(meeting)
            self.session.commit()
            self.session.refresh(meeting)
        return meeting

    def delete(self, meeting: Meeting) -> None:
        with self._store_errors("deleting meeting"):
            self.session.delete(meeting)
            self.session.commit()

    def count(self) -> int:
        with self._store_errors("counting meetings"):
            return int(self.session.exec(select(func.count()).select_from(Meeting)).one())

    def list(self, filters: MeetingFilters, now: datetime) -> list[Meeting]:
        now = to_utc(now)
        statement = select(Meeting)

        if filters.type == "today":
            start, end = day_bounds(now.date())
            statement = statement.where(Meeting.meeting_date >= start, Meeting.meeting_date <= end)
        elif filters.type == "upcoming":
            statement = statement.where(Meeting.meeting_date > now, Meeting.status == STATUS_SCHEDULED)
        elif filters.type == "completed":
            statement = statement.where(Meeting.status == STATUS_COMPLETED)
        elif filters.type == "instant":
            statement = statement.where(Meeting.is_instant == True)  # noqa: E712

        if filters.date is not None:
            start, end = day_bounds(filters.date)
            statement = statement.where(Meeting.meeting_date >= start, Meeting.meeting_date <= end)

        if filters.client_name:
            pattern = contains_pattern(filters.client_name)
            statement = statement.where(Meeting.client_name.ilike(pattern, escape=LIKE_ESCAPE))

        if filters.status:
            statement = statement.where(Meeting.status == filters.status)

        if filters.type == "completed":
            statement = statement.order_by(Meeting.meeting_date.desc())
        else:
            statement = statement.order_by(Meeting.meeting_date.asc())

        with self._store_errors("listing meetings"):
            return list(self.session.exec(statement))

    def list_created_between(self, start: datetime, end: datetime, include_end: bool = True) -> list[Meeting]:
        start, end = to_utc(start), to_utc(end)
        upper = Meeting.created_at <= end if include_end else Meeting.created_at < end
        statement = (
            select(Meeting)
            .where(Meeting.created_at >= start, upper)
            .order_by(Meeting.created_at.asc())
        )
        with self._store_errors("fetching analytics window"):
            return list(self.session.exec(statement))

    def list_scheduled_between(self, start: datetime, end: datetime) -> list[Meeting]:
        start, end = to_utc(start), to_utc(end)
        statement = (
            select(Meeting)
            .where(
                Meeting.status == STATUS_SCHEDULED,
                Meeting.meeting_date >= start,
                Meeting.meeting_date <= end,
            )
            .order_by(Meeting.meeting_date.asc())
        )
        with self._store_errors("fetching upcoming meetings"):
            return list(self.session.exec(statement))
