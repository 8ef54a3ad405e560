"""Reduce meeting rows from one reporting window into an AnalyticsSummary.

Everything here is pure: callers fetch the rows and pass them in. Days and
weeks are bucketed in UTC (timestamps are normalized to aware UTC), weeks run Monday
through Sunday, and percentages round half away from zero.
"""

from __future__ import annotations

from collections import Counter
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Callable, Iterable, List, Sequence, Tuple, TypeVar

from meeting_manager.models.analytics import (
    AnalyticsSummary,
    AreaCount,
    CompletionTrend,
    DailyActivity,
    LocationCount,
    NamedMeetings,
    NamedValue,
    WeeklyTrend,
)
from meeting_manager.models.base import to_utc
from meeting_manager.models.meeting import Meeting, STATUS_COMPLETED


TOP_N = 10
TREND_WEEKS = 8
LABEL_FORMAT = "%b %d"

LOCATION_TYPE_KEYWORDS: Tuple[Tuple[str, str], ...] = (
    ("Office", "office"),
    ("Client Site", "client"),
    ("Virtual", "virtual"),
)
GEOGRAPHY_KEYWORDS: Tuple[Tuple[str, str], ...] = (
    ("Delhi NCR", "delhi"),
    ("Mumbai", "mumbai"),
    ("Bangalore", "bangalore"),
)
OTHER_BUCKET = "Other"

K = TypeVar("K")


def percent(part: int, whole: int) -> int:
    """Integer percentage of part/whole, 0 when whole is 0."""
    if whole == 0:
        return 0
    value = Decimal(part * 100) / Decimal(whole)
    return int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def _created_at(meeting: Meeting) -> datetime:
    if meeting.created_at is None:
        raise ValueError(f"meeting {meeting.id!r} has no created_at")
    return to_utc(meeting.created_at)


def _ranked(counts: Counter) -> List[Tuple[K, int]]:
    # Counter keeps first-seen order and sorted() is stable, so equal counts
    # stay in first-seen order.
    return sorted(counts.items(), key=lambda kv: kv[1], reverse=True)[:TOP_N]


def _count_by(meetings: Iterable[Meeting], key: Callable[[Meeting], K]) -> Counter:
    counts: Counter = Counter()
    for m in meetings:
        k = key(m)
        if k:
            counts[k] += 1
    return counts


def _keyword_buckets(locations: Sequence[str], keywords: Tuple[Tuple[str, str], ...]) -> List[Tuple[str, int]]:
    """Count locations per keyword; each keyword is tested independently."""
    lowered = [loc.lower() for loc in locations]
    buckets: List[Tuple[str, int]] = []
    for label, needle in keywords:
        buckets.append((label, sum(1 for loc in lowered if needle in loc)))
    other = sum(1 for loc in lowered if not any(needle in loc for _, needle in keywords))
    buckets.append((OTHER_BUCKET, other))
    return [(label, count) for label, count in buckets if count > 0]


def week_start(day: date) -> date:
    return day - timedelta(days=day.weekday())


def _daily_activity(created: Sequence[datetime], time_range: int, window_end: datetime) -> List[DailyActivity]:
    per_day = Counter(ts.date() for ts in created)
    end_day = window_end.date()
    out: List[DailyActivity] = []
    for offset in range(time_range - 1, -1, -1):
        day = end_day - timedelta(days=offset)
        out.append(DailyActivity(date=day.strftime(LABEL_FORMAT), meetings=per_day.get(day, 0)))
    return out


def _weekly_trends(rows: Sequence[Tuple[datetime, Meeting]], window_end: datetime) -> List[WeeklyTrend]:
    current_week = week_start(window_end.date())
    out: List[WeeklyTrend] = []
    for back in range(TREND_WEEKS - 1, -1, -1):
        start_day = current_week - timedelta(weeks=back)
        start = datetime.combine(start_day, time.min, tzinfo=timezone.utc)
        end = datetime.combine(start_day + timedelta(days=6), time.max, tzinfo=timezone.utc)
        in_week = [m for ts, m in rows if start <= ts <= end]
        out.append(
            WeeklyTrend(
                week=start_day.strftime(LABEL_FORMAT),
                total=len(in_week),
                completed=sum(1 for m in in_week if m.status == STATUS_COMPLETED),
                instant=sum(1 for m in in_week if m.is_instant),
            )
        )
    return out


def compute_summary(
    current: Sequence[Meeting],
    previous: Sequence[Meeting],
    time_range: int,
    window_end: datetime,
) -> AnalyticsSummary:
    """Build the analytics summary for the window ending at ``window_end``.

    ``current`` holds the meetings created inside the window and ``previous``
    the ones created in the equal-length window right before it; only its
    size is used (for growth).
    """
    if time_range < 1:
        raise ValueError("time_range must be at least 1 day")
    window_end = to_utc(window_end)
    rows = [(_created_at(m), m) for m in current]

    total = len(rows)
    completed = sum(1 for _, m in rows if m.status == STATUS_COMPLETED)
    instant = sum(1 for _, m in rows if m.is_instant)

    status_counts = _count_by(current, lambda m: m.status)
    locations = [m.location for m in current if m.location]

    weekly = _weekly_trends(rows, window_end)

    return AnalyticsSummary(
        total_meetings=total,
        completed_meetings=completed,
        instant_meetings=instant,
        unique_clients=len({m.client_name for m in current}),
        unique_organizations=len({m.organization_name for m in current}),
        meeting_growth=percent(total - len(previous), len(previous)),
        completion_rate=percent(completed, total),
        instant_meeting_percentage=percent(instant, total),
        status_distribution=[
            NamedValue(name=status[:1].upper() + status[1:], value=count)
            for status, count in status_counts.items()
        ],
        type_distribution=[
            NamedValue(name="Scheduled", value=total - instant),
            NamedValue(name="Instant", value=instant),
        ],
        daily_activity=_daily_activity([ts for ts, _ in rows], time_range, window_end),
        weekly_trends=weekly,
        completion_trend=[
            CompletionTrend(period=w.week, rate=percent(w.completed, w.total)) for w in weekly
        ],
        top_clients=[
            NamedMeetings(name=name, meetings=count)
            for name, count in _ranked(_count_by(current, lambda m: m.client_name))
        ],
        top_organizations=[
            NamedMeetings(name=name, meetings=count)
            for name, count in _ranked(_count_by(current, lambda m: m.organization_name))
        ],
        top_locations=[
            LocationCount(location=loc, count=count)
            for loc, count in _ranked(_count_by(current, lambda m: m.location))
        ],
        location_types=[
            NamedValue(name=label, value=count)
            for label, count in _keyword_buckets(locations, LOCATION_TYPE_KEYWORDS)
        ],
        geographic_distribution=[
            AreaCount(area=label, count=count)
            for label, count in _keyword_buckets(locations, GEOGRAPHY_KEYWORDS)
        ],
    )
