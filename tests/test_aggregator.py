"""
Unit tests for the analytics aggregator.
"""
import datetime

import pytest

from bloom.analytics import rules
from bloom.analytics.aggregator import (
    activity_days,
    average_mood_label,
    build_analytics,
    current_streak,
    generate_insights,
    mood_distribution,
    mood_percentages,
    mood_trends,
    round_half_up,
    summarize_goals,
    wellness_score,
    weekly_activity,
)
from tests.conftest import make_entry

# Wednesday
NOW = datetime.datetime(2024, 5, 15, 12, 0)


def days_ago(n, hour=9):
    return (NOW - datetime.timedelta(days=n)).replace(hour=hour)


class TestRounding:
    def test_half_rounds_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(0.125, 2) == 0.13
        assert round_half_up(3.25, 1) == 3.3


class TestMoodDistribution:
    def test_counts_sum_to_total(self):
        entries = [make_entry(NOW, label) for label in ("positive", "negative", None, "neutral", "weird")]
        counts = mood_distribution(entries)
        assert counts.total == len(entries)
        assert (counts.positive, counts.neutral, counts.negative) == (1, 3, 1)

    def test_percentages_for_six_three_one(self):
        entries = (
            [make_entry(NOW, "positive")] * 6
            + [make_entry(NOW, "neutral")] * 3
            + [make_entry(NOW, "negative")]
        )
        pct = mood_percentages(mood_distribution(entries))
        assert (pct.positive, pct.neutral, pct.negative) == (60, 30, 10)
        assert wellness_score(entries) == 60

    def test_percentages_empty(self):
        pct = mood_percentages(mood_distribution([]))
        assert pct.total == 0


class TestWellnessScore:
    def test_empty_is_zero(self):
        assert wellness_score([]) == 0

    @pytest.mark.parametrize("positive,total,expected", [(1, 3, 33), (2, 3, 67), (1, 8, 13), (3, 3, 100)])
    def test_rounded_share_of_positive(self, positive, total, expected):
        entries = [make_entry(NOW, "positive")] * positive + [make_entry(NOW, "negative")] * (total - positive)
        assert wellness_score(entries) == expected


class TestStreak:
    def test_no_days(self):
        assert current_streak(set(), NOW.date()) == 0

    def test_consecutive_days_ending_today(self):
        days = {NOW.date() - datetime.timedelta(days=i) for i in range(4)}
        assert current_streak(days, NOW.date()) == 4

    def test_ending_yesterday_still_counts(self):
        days = {NOW.date() - datetime.timedelta(days=i) for i in (1, 2)}
        assert current_streak(days, NOW.date()) == 2

    def test_gap_before_yesterday_breaks_streak(self):
        days = {NOW.date() - datetime.timedelta(days=2)}
        assert current_streak(days, NOW.date()) == 0

    def test_activity_days_includes_metric_rows(self):
        metric = type("Metric", (), {"date": NOW.date() - datetime.timedelta(days=5)})()
        days = activity_days([make_entry(days_ago(0))], [metric])
        assert days == {NOW.date(), metric.date}

    def test_local_day_decides_the_streak(self):
        # 23:30 UTC on the 14th is already the 15th in Tokyo
        entries = [make_entry(datetime.datetime(2024, 5, 14, 23, 30))]
        assert activity_days(entries, tz="Asia/Tokyo") == {datetime.date(2024, 5, 15)}
        assert activity_days(entries, tz="UTC") == {datetime.date(2024, 5, 14)}


class TestTrendsAndWeekly:
    def test_trend_groups_by_day_in_first_seen_order(self):
        entries = [
            make_entry(days_ago(2), "positive"),
            make_entry(days_ago(2, hour=18), "negative"),
            make_entry(days_ago(0), "neutral"),
        ]
        trends = mood_trends(entries)
        assert [t.date for t in trends] == ["2024-05-13", "2024-05-15"]
        assert trends[0].mood == 3.0
        assert trends[0].entries == 2
        assert trends[1].mood == 3.0

    def test_weekly_buckets_sum_to_total(self):
        entries = [make_entry(days_ago(i), "positive" if i % 2 else "negative") for i in range(10)]
        weekly = weekly_activity(entries)
        assert [w.day for w in weekly] == list(rules.WEEKDAY_LABELS)
        assert sum(w.entries for w in weekly) == len(entries)

    def test_empty_bucket_average_is_zero(self):
        weekly = weekly_activity([make_entry(NOW, "positive"), make_entry(NOW, "negative")])
        wed = weekly[3]
        assert wed.day == "Wed"
        assert wed.entries == 2
        assert wed.avg_mood == 3.0
        assert all(w.avg_mood == 0 for w in weekly if w.day != "Wed")


class TestInsights:
    def test_score_message_thresholds(self):
        assert generate_insights([], 70)[0] == rules.WELLNESS_SCORE_MESSAGES[0][1]
        assert generate_insights([], 50)[0] == rules.WELLNESS_SCORE_MESSAGES[1][1]
        assert generate_insights([], 10)[0] == rules.WELLNESS_SCORE_MESSAGES[2][1]

    def test_consistency_needs_five_recent_entries(self):
        four = [make_entry(days_ago(i)) for i in range(4)]
        five = [make_entry(days_ago(i)) for i in range(5)]
        assert rules.CONSISTENCY_MESSAGE not in generate_insights(four, 0)
        assert rules.CONSISTENCY_MESSAGE in generate_insights(five, 0)

    def test_reflective_entries(self):
        long_entries = [make_entry(NOW, content="x" * 250)]
        assert rules.REFLECTIVE_MESSAGE in generate_insights(long_entries, 0)
        assert rules.REFLECTIVE_MESSAGE not in generate_insights([make_entry(NOW, content="short")], 0)

    def test_average_mood_label(self):
        assert average_mood_label([]) == "neutral"
        assert average_mood_label([make_entry(NOW, "positive")] * 3) == "positive"
        assert average_mood_label([make_entry(NOW, "negative")] * 3) == "negative"


class TestBuildAnalytics:
    def test_today_yesterday_and_three_days_ago(self):
        entries = [make_entry(days_ago(n), "positive") for n in (3, 1, 0)]
        snapshot = build_analytics(entries, now=NOW, tz="UTC")
        assert snapshot.wellness_score == 100
        assert snapshot.streak == 2
        assert snapshot.total_entries == 3
        assert snapshot.active_days == 3
        assert snapshot.entries_this_week == 3
        assert snapshot.most_active_day is not None
        assert snapshot.insights[0] == rules.WELLNESS_SCORE_MESSAGES[0][1]

    def test_empty_window(self):
        snapshot = build_analytics([], now=NOW, tz="UTC")
        assert snapshot.wellness_score == 0
        assert snapshot.streak == 0
        assert snapshot.mood_trends == []
        assert snapshot.most_active_day is None
        assert snapshot.average_daily_entries == 0
        assert snapshot.metrics.days_logged == 0

    def test_goals_summary(self):
        goals = [type("Goal", (), {"completed": c})() for c in (True, False, False)]
        summary = summarize_goals(goals)
        assert (summary.total, summary.completed, summary.completion_rate) == (3, 1, 33)
