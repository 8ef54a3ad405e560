from __future__ import annotations

import copy
from datetime import datetime, timedelta, timezone

import pytest

from meeting_manager.models.meeting import Meeting
from meeting_manager.services.analytics_engine import compute_summary, percent, week_start


NOW = datetime(2024, 5, 15, 10, 30, tzinfo=timezone.utc)


def make_meeting(
    created_at: datetime,
    status: str = "scheduled",
    is_instant: bool = False,
    client: str = "John Doe",
    org: str = "ACME Corp",
    location: str | None = None,
) -> Meeting:
    return Meeting(
        title="Visit",
        client_name=client,
        organization_name=org,
        mobile_number="+10000000",
        meeting_date=created_at,
        location=location,
        is_instant=is_instant,
        status=status,
        created_at=created_at,
        updated_at=created_at,
    )


def test_empty_window_yields_zeroes() -> None:
    summary = compute_summary([], [], 30, NOW)

    assert summary.total_meetings == 0
    assert summary.completed_meetings == 0
    assert summary.instant_meetings == 0
    assert summary.unique_clients == 0
    assert summary.unique_organizations == 0
    assert summary.meeting_growth == 0
    assert summary.completion_rate == 0
    assert summary.instant_meeting_percentage == 0
    assert summary.status_distribution == []
    assert summary.top_clients == []
    assert summary.top_organizations == []
    assert summary.top_locations == []
    assert summary.location_types == []
    assert summary.geographic_distribution == []
    # Type buckets are always emitted, even at zero
    assert [(b.name, b.value) for b in summary.type_distribution] == [("Scheduled", 0), ("Instant", 0)]
    assert len(summary.daily_activity) == 30
    assert all(d.meetings == 0 for d in summary.daily_activity)
    assert len(summary.weekly_trends) == 8
    assert [c.rate for c in summary.completion_trend] == [0] * 8


def test_three_meetings_created_today() -> None:
    current = [
        make_meeting(NOW - timedelta(minutes=30), status="completed", is_instant=True),
        make_meeting(NOW - timedelta(minutes=20), status="completed"),
        make_meeting(NOW - timedelta(minutes=10), status="scheduled"),
    ]

    summary = compute_summary(current, [], 1, NOW)

    assert summary.total_meetings == 3
    assert summary.completed_meetings == 2
    assert summary.instant_meetings == 1
    assert summary.completion_rate == 67
    assert summary.instant_meeting_percentage == 33
    assert [(b.name, b.value) for b in summary.type_distribution] == [("Scheduled", 2), ("Instant", 1)]
    assert [(d.date, d.meetings) for d in summary.daily_activity] == [("May 15", 3)]


@pytest.mark.parametrize(
    "part, whole, expected",
    [
        (2, 3, 67),
        (1, 3, 33),
        (1, 8, 13),  # 12.5 rounds away from zero
        (-1, 8, -13),
        (1, 200, 1),  # 0.5
        (-1, 200, -1),
        (5, 0, 0),
        (0, 7, 0),
    ],
)
def test_percent_rounds_half_away_from_zero(part: int, whole: int, expected: int) -> None:
    assert percent(part, whole) == expected


def test_growth_compares_with_previous_window() -> None:
    previous = [make_meeting(NOW - timedelta(days=40)) for _ in range(8)]
    current = [make_meeting(NOW - timedelta(days=1))]

    assert compute_summary(current, previous, 30, NOW).meeting_growth == -88
    assert compute_summary(current * 3, previous[:2], 30, NOW).meeting_growth == 50
    assert compute_summary(current, [], 30, NOW).meeting_growth == 0


def test_daily_activity_buckets_by_utc_calendar_day() -> None:
    current = [
        make_meeting(datetime(2024, 5, 14, 23, 59, 59, tzinfo=timezone.utc)),
        make_meeting(datetime(2024, 5, 15, 0, 0, 0, tzinfo=timezone.utc)),
        # 01:00 in UTC+05:30 is still 19:30 on the previous UTC day
        make_meeting(datetime(2024, 5, 15, 1, 0, tzinfo=timezone(timedelta(hours=5, minutes=30)))),
    ]

    summary = compute_summary(current, [], 3, NOW)

    assert [(d.date, d.meetings) for d in summary.daily_activity] == [
        ("May 13", 0),
        ("May 14", 2),
        ("May 15", 1),
    ]


def test_weekly_trends_use_monday_weeks_oldest_first() -> None:
    assert week_start(NOW.date()).isoformat() == "2024-05-13"
    current = [
        make_meeting(datetime(2024, 5, 12, 23, 0, tzinfo=timezone.utc), status="completed"),  # Sunday
        make_meeting(datetime(2024, 5, 13, 0, 0, tzinfo=timezone.utc), status="completed", is_instant=True),  # Monday
        make_meeting(datetime(2024, 5, 14, 9, 0, tzinfo=timezone.utc), status="completed"),
        make_meeting(datetime(2024, 5, 15, 9, 0, tzinfo=timezone.utc), status="scheduled"),
    ]

    summary = compute_summary(current, [], 56, NOW)
    weeks = summary.weekly_trends

    assert len(weeks) == 8
    assert weeks[0].week == "Mar 25"
    assert weeks[-1].week == "May 13"
    assert (weeks[-2].week, weeks[-2].total, weeks[-2].completed) == ("May 06", 1, 1)
    assert (weeks[-1].total, weeks[-1].completed, weeks[-1].instant) == (3, 2, 1)
    assert [(c.period, c.rate) for c in summary.completion_trend[-2:]] == [("May 06", 100), ("May 13", 67)]


def test_weekly_totals_can_differ_from_window_total() -> None:
    current = [make_meeting(NOW - timedelta(days=70)), make_meeting(NOW)]

    summary = compute_summary(current, [], 90, NOW)

    assert summary.total_meetings == 2
    assert sum(w.total for w in summary.weekly_trends) == 1
    assert len(summary.daily_activity) == 90


def test_top_rankings_are_capped_and_keep_first_seen_ties() -> None:
    clients = ["B", "B", "A", "A", "C", "C", "C"] + list("DEFGHIJKL")
    current = [make_meeting(NOW, client=name, org=f"{name} Ltd") for name in clients]

    summary = compute_summary(current, [], 30, NOW)

    names = [c.name for c in summary.top_clients]
    assert names == ["C", "B", "A", "D", "E", "F", "G", "H", "I", "J"]
    counts = [c.meetings for c in summary.top_clients]
    assert counts == sorted(counts, reverse=True)
    assert len(summary.top_organizations) == 10
    assert summary.top_organizations[0].name == "C Ltd"
    assert summary.unique_clients == 12
    assert summary.unique_organizations == 12


def test_top_locations_skip_missing_locations() -> None:
    current = [
        make_meeting(NOW, location="Head Office"),
        make_meeting(NOW, location=None),
        make_meeting(NOW, location=""),
        make_meeting(NOW, location="Head Office"),
        make_meeting(NOW, location="Cafe"),
    ]

    summary = compute_summary(current, [], 30, NOW)

    assert [(t.location, t.count) for t in summary.top_locations] == [("Head Office", 2), ("Cafe", 1)]


def test_location_and_geography_buckets() -> None:
    current = [
        make_meeting(NOW, location="Head OFFICE, Delhi"),
        make_meeting(NOW, location="Client Office Mumbai"),
        make_meeting(NOW, location="Virtual call"),
        make_meeting(NOW, location="Cafe, Pune"),
        make_meeting(NOW, location=None),
    ]

    summary = compute_summary(current, [], 30, NOW)

    # Keywords are matched independently, so "Client Office" counts twice
    assert [(b.name, b.value) for b in summary.location_types] == [
        ("Office", 2),
        ("Client Site", 1),
        ("Virtual", 1),
        ("Other", 1),
    ]
    assert [(a.area, a.count) for a in summary.geographic_distribution] == [
        ("Delhi NCR", 1),
        ("Mumbai", 1),
        ("Other", 2),
    ]


def test_status_distribution_in_first_seen_order() -> None:
    current = [
        make_meeting(NOW, status="scheduled"),
        make_meeting(NOW, status="completed"),
        make_meeting(NOW, status="scheduled"),
        make_meeting(NOW, status="cancelled"),
    ]

    summary = compute_summary(current, [], 30, NOW)

    assert [(b.name, b.value) for b in summary.status_distribution] == [
        ("Scheduled", 2),
        ("Completed", 1),
        ("Cancelled", 1),
    ]
    assert 0 <= summary.completion_rate <= 100
    assert summary.completion_rate == 25


def test_same_input_gives_identical_summary_without_mutation() -> None:
    current = [
        make_meeting(NOW - timedelta(days=d), status="completed" if d % 2 else "scheduled", location="Office")
        for d in range(10)
    ]
    previous = [make_meeting(NOW - timedelta(days=40))]
    snapshot = [copy.copy(m.dict()) for m in current]

    first = compute_summary(current, previous, 30, NOW)
    second = compute_summary(current, previous, 30, NOW)

    assert first.json() == second.json()
    assert [m.dict() for m in current] == snapshot


def test_missing_created_at_is_rejected() -> None:
    meeting = make_meeting(NOW)
    meeting.created_at = None

    with pytest.raises(ValueError):
        compute_summary([meeting], [], 30, NOW)


def test_time_range_must_be_positive() -> None:
    with pytest.raises(ValueError):
        compute_summary([], [], 0, NOW)
