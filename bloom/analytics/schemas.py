from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class MoodTrendPoint(BaseModel):
    date: str
    mood: float
    entries: int


class WeekdayActivity(BaseModel):
    day: str
    entries: int
    avg_mood: float


class MoodCounts(BaseModel):
    positive: int = 0
    neutral: int = 0
    negative: int = 0

    @property
    def total(self) -> int:
        return self.positive + self.neutral + self.negative


class MetricsSummary(BaseModel):
    days_logged: int = 0
    avg_sleep_hours: Optional[float] = None
    avg_exercise_minutes: Optional[float] = None
    avg_water_glasses: Optional[float] = None
    avg_energy_level: Optional[float] = None
    avg_stress_level: Optional[float] = None


class GoalsSummary(BaseModel):
    total: int = 0
    completed: int = 0
    completion_rate: int = 0


class AnalyticsSnapshot(BaseModel):
    window_days: int
    generated_at: datetime
    version: int = 0
    total_entries: int
    entries_this_week: int
    active_days: int
    average_daily_entries: float
    most_active_day: Optional[str] = None
    average_mood: str
    wellness_score: int
    streak: int
    mood_trends: List[MoodTrendPoint]
    weekly_activity: List[WeekdayActivity]
    mood_distribution: MoodCounts
    mood_percentages: MoodCounts
    insights: List[str]
    metrics: MetricsSummary
    goals: GoalsSummary


class AnalyticsResponse(BaseModel):
    stale: bool = False
    error: Optional[str] = None
    snapshot: Optional[AnalyticsSnapshot] = None
