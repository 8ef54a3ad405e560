from __future__ import annotations

from datetime import datetime, timedelta
import logging

from sqlmodel import Session

from meeting_manager.models.analytics import AnalyticsSummary
from meeting_manager.models.base import to_utc
from meeting_manager.repositories.meetings import MeetingsRepository
from meeting_manager.services.analytics_engine import compute_summary

logger = logging.getLogger("meeting_manager.analytics")


def build_analytics(session: Session, time_range: int, now: datetime) -> AnalyticsSummary:
    """Fetch the current and previous windows and reduce them.

    The current window is ``[now - time_range days, now]``; the previous one
    is the same length immediately before it, excluding its end.
    """
    now = to_utc(now)
    repo = MeetingsRepository(session)
    start = now - timedelta(days=time_range)
    current = repo.list_created_between(start, now)
    previous = repo.list_created_between(start - timedelta(days=time_range), start, include_end=False)
    logger.info(
        "Analytics over %d days: %d meetings (previous window %d)", time_range, len(current), len(previous)
    )
    return compute_summary(current, previous, time_range, now)
