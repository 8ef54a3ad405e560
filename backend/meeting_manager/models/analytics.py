from __future__ import annotations

from typing import List
from pydantic import BaseModel, Field


class NamedValue(BaseModel):
    name: str
    value: int


class NamedMeetings(BaseModel):
    name: str
    meetings: int


class LocationCount(BaseModel):
    location: str
    count: int


class AreaCount(BaseModel):
    area: str
    count: int


class DailyActivity(BaseModel):
    date: str  # e.g. "Oct 19"
    meetings: int


class WeeklyTrend(BaseModel):
    week: str  # label of the week's Monday
    total: int
    completed: int
    instant: int


class CompletionTrend(BaseModel):
    period: str
    rate: int


class AnalyticsSummary(BaseModel):
    """Aggregated view over the meetings created in one reporting window."""

    total_meetings: int = 0
    completed_meetings: int = 0
    instant_meetings: int = 0
    unique_clients: int = 0
    unique_organizations: int = 0
    meeting_growth: int = 0
    completion_rate: int = 0
    instant_meeting_percentage: int = 0

    status_distribution: List[NamedValue] = Field(default_factory=list)
    type_distribution: List[NamedValue] = Field(default_factory=list)
    daily_activity: List[DailyActivity] = Field(default_factory=list)
    weekly_trends: List[WeeklyTrend] = Field(default_factory=list)
    completion_trend: List[CompletionTrend] = Field(default_factory=list)
    top_clients: List[NamedMeetings] = Field(default_factory=list)
    top_organizations: List[NamedMeetings] = Field(default_factory=list)
    top_locations: List[LocationCount] = Field(default_factory=list)
    location_types: List[NamedValue] = Field(default_factory=list)
    geographic_distribution: List[AreaCount] = Field(default_factory=list)
