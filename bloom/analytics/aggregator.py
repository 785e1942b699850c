"""
Wellness analytics over one user's entries, metrics and goals.

All functions are pure. Entries are expected in ascending `created_at` order;
the daily trend keeps the order in which dates are first seen, so unsorted
input gives unsorted output.
"""

import datetime
from collections import OrderedDict
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Iterable, List, Optional, Sequence, Set

from bloom.analytics import rules
from bloom.analytics.schemas import (
    AnalyticsSnapshot,
    GoalsSummary,
    MetricsSummary,
    MoodCounts,
    MoodTrendPoint,
    WeekdayActivity,
)
from bloom.core.clock import Zone, local_now, to_local


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Rounds halves away from zero, unlike the built-in round()."""
    exp = Decimal(1).scaleb(-ndigits)
    return float(Decimal(str(value)).quantize(exp, rounding=ROUND_HALF_UP))


def mood_score(label: Optional[str]) -> int:
    return rules.MOOD_SCORES.get(label or "", rules.DEFAULT_MOOD_SCORE)


def _local_date(entry: Any, tz: Zone) -> datetime.date:
    return to_local(entry.created_at, tz).date()


def _weekday_index(day: datetime.date) -> int:
    # date.weekday() is Monday-first
    return (day.weekday() + 1) % 7


def mood_trends(entries: Sequence[Any], tz: Zone = None) -> List[MoodTrendPoint]:
    """
    Groups entries by local calendar date.

    Returns:
        One point per date with the entry count and the average mood score
        rounded to one decimal, in first-seen order.
    """
    grouped: "OrderedDict[datetime.date, List[int]]" = OrderedDict()
    for entry in entries:
        grouped.setdefault(_local_date(entry, tz), []).append(mood_score(entry.sentiment_label))

    return [
        MoodTrendPoint(
            date=day.isoformat(),
            mood=round_half_up(sum(scores) / len(scores), 1),
            entries=len(scores),
        )
        for day, scores in grouped.items()
    ]


def weekly_activity(entries: Sequence[Any], tz: Zone = None) -> List[WeekdayActivity]:
    counts = [0] * 7
    totals = [0] * 7
    for entry in entries:
        idx = _weekday_index(_local_date(entry, tz))
        counts[idx] += 1
        totals[idx] += mood_score(entry.sentiment_label)

    return [
        WeekdayActivity(
            day=label,
            entries=counts[i],
            avg_mood=round_half_up(totals[i] / counts[i], 1) if counts[i] else 0,
        )
        for i, label in enumerate(rules.WEEKDAY_LABELS)
    ]


def mood_distribution(entries: Sequence[Any]) -> MoodCounts:
    """Counts entries per label; a missing or unknown label counts as neutral."""
    counts = {label: 0 for label in rules.MOOD_LABELS}
    for entry in entries:
        label = entry.sentiment_label if entry.sentiment_label in counts else "neutral"
        counts[label] += 1
    return MoodCounts(**counts)


def mood_percentages(distribution: MoodCounts) -> MoodCounts:
    total = distribution.total
    if total == 0:
        return MoodCounts()
    return MoodCounts(
        **{
            label: int(round_half_up(100 * getattr(distribution, label) / total))
            for label in rules.MOOD_LABELS
        }
    )


def wellness_score(entries: Sequence[Any]) -> int:
    """
    Share of positive entries as an integer percentage, 0 for no entries.

    This is a plain ratio of positive entries, not a weighted index.
    """
    total = len(entries)
    if total == 0:
        return 0
    positive = mood_distribution(entries).positive
    return max(0, min(100, int(round_half_up(100 * positive / total))))


def activity_days(
    entries: Iterable[Any] = (),
    metrics: Iterable[Any] = (),
    tz: Zone = None,
) -> Set[datetime.date]:
    """Distinct local calendar days with at least one entry or saved metric row."""
    days = {_local_date(entry, tz) for entry in entries}
    days.update(metric.date for metric in metrics)
    return days


def current_streak(days: Set[datetime.date], today: datetime.date) -> int:
    """
    Consecutive days with activity ending today, or ending yesterday when today
    has none yet. Zero when neither day is active.
    """
    yesterday = today - datetime.timedelta(days=1)
    if today in days:
        cursor = today
    elif yesterday in days:
        cursor = yesterday
    else:
        return 0

    streak = 0
    while cursor in days:
        streak += 1
        cursor -= datetime.timedelta(days=1)
    return streak


def generate_insights(entries: Sequence[Any], score: int) -> List[str]:
    insights = []

    for threshold, message in rules.WELLNESS_SCORE_MESSAGES:
        if score >= threshold:
            insights.append(message)
            break

    recent = entries[-rules.CONSISTENCY_LOOKBACK:]
    if len(recent) >= rules.CONSISTENCY_MIN_ENTRIES:
        insights.append(rules.CONSISTENCY_MESSAGE)

    if entries:
        avg_length = sum(len(entry.content or "") for entry in entries) / len(entries)
        if avg_length > rules.REFLECTIVE_MIN_AVG_CHARS:
            insights.append(rules.REFLECTIVE_MESSAGE)

    return insights


def average_mood_label(entries: Sequence[Any]) -> str:
    if not entries:
        return "neutral"
    avg = sum(mood_score(e.sentiment_label) for e in entries) / len(entries)
    if avg >= rules.AVERAGE_MOOD_POSITIVE_AT:
        return "positive"
    if avg <= rules.AVERAGE_MOOD_NEGATIVE_AT:
        return "negative"
    return "neutral"


def summarize_metrics(metrics: Sequence[Any]) -> MetricsSummary:
    if not metrics:
        return MetricsSummary()

    def _avg(field: str) -> float:
        return round_half_up(sum(getattr(m, field) for m in metrics) / len(metrics), 1)

    return MetricsSummary(
        days_logged=len({m.date for m in metrics}),
        avg_sleep_hours=_avg("sleep_hours"),
        avg_exercise_minutes=_avg("exercise_minutes"),
        avg_water_glasses=_avg("water_glasses"),
        avg_energy_level=_avg("energy_level"),
        avg_stress_level=_avg("stress_level"),
    )


def summarize_goals(goals: Sequence[Any]) -> GoalsSummary:
    total = len(goals)
    completed = sum(1 for g in goals if g.completed)
    rate = int(round_half_up(100 * completed / total)) if total else 0
    return GoalsSummary(total=total, completed=completed, completion_rate=rate)


def build_analytics(
    entries: Sequence[Any],
    metrics: Sequence[Any] = (),
    goals: Sequence[Any] = (),
    *,
    window_days: int = 30,
    tz: Zone = None,
    now: Optional[datetime.datetime] = None,
    version: int = 0,
) -> AnalyticsSnapshot:
    """
    Computes the full analytics snapshot for one user's window.

    Args:
        entries: Journal entries in the window, oldest first.
        metrics: Wellness metric rows in the window.
        goals: All of the user's goals.
        window_days: Length of the window, reported back unchanged.
        tz: Zone used for calendar days.
        now: Reference instant; defaults to the current time in `tz`.
        version: Change-feed version the inputs were read at.
    """
    now = to_local(now, tz) if now is not None else local_now(tz)
    today = now.date()

    trends = mood_trends(entries, tz)
    weekly = weekly_activity(entries, tz)
    distribution = mood_distribution(entries)
    score = wellness_score(entries)

    week_start = today - datetime.timedelta(days=6)
    entries_this_week = sum(1 for e in entries if _local_date(e, tz) >= week_start)

    busiest = max(weekly, key=lambda w: w.entries)
    most_active_day = busiest.day if busiest.entries else None

    return AnalyticsSnapshot(
        window_days=window_days,
        generated_at=now,
        version=version,
        total_entries=len(entries),
        entries_this_week=entries_this_week,
        active_days=len(trends),
        average_daily_entries=round_half_up(sum(t.entries for t in trends) / max(len(trends), 1), 1),
        most_active_day=most_active_day,
        average_mood=average_mood_label(entries),
        wellness_score=score,
        streak=current_streak(activity_days(entries, tz=tz), today),
        mood_trends=trends,
        weekly_activity=weekly,
        mood_distribution=distribution,
        mood_percentages=mood_percentages(distribution),
        insights=generate_insights(entries, score),
        metrics=summarize_metrics(metrics),
        goals=summarize_goals(goals),
    )
