from __future__ import annotations

from datetime import timedelta

from meeting_manager.models.base import utcnow
from meeting_manager.services.analytics_service import build_analytics

from conftest import NOW


def test_windows_split_at_start_boundary(session, meeting_factory) -> None:
    start = NOW - timedelta(days=7)
    meeting_factory(client_name="current-a", created_at=start)
    meeting_factory(client_name="current-b", created_at=NOW)
    meeting_factory(client_name="previous-a", created_at=start - timedelta(seconds=1))
    meeting_factory(client_name="previous-b", created_at=start - timedelta(days=7))
    meeting_factory(client_name="too-old", created_at=start - timedelta(days=7, seconds=1))
    meeting_factory(client_name="future", created_at=NOW + timedelta(seconds=1))

    summary = build_analytics(session, 7, NOW)

    assert summary.total_meetings == 2
    assert sorted(c.name for c in summary.top_clients) == ["current-a", "current-b"]
    # 2 current vs 2 previous
    assert summary.meeting_growth == 0


def test_growth_against_previous_window(session, meeting_factory) -> None:
    for days_ago in (1, 2, 3):
        meeting_factory(created_at=NOW - timedelta(days=days_ago))
    meeting_factory(created_at=NOW - timedelta(days=10))
    meeting_factory(created_at=NOW - timedelta(days=12))

    summary = build_analytics(session, 7, NOW)

    assert summary.total_meetings == 3
    assert summary.meeting_growth == 50


def test_window_around_current_clock(session, meeting_factory) -> None:
    now = utcnow()
    meeting_factory(created_at=now - timedelta(hours=1))
    meeting_factory(created_at=now - timedelta(days=2))

    summary = build_analytics(session, 1, now)

    assert summary.total_meetings == 1
    assert summary.meeting_growth == -100
