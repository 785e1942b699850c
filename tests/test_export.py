"""
Unit tests for journal export documents.
"""
import csv
import datetime
import io
import json

from bloom.export.service import (
    CSV_HEADERS,
    count_moods,
    export_filename,
    render_export,
    to_csv,
    to_html,
    to_json,
)
from tests.conftest import make_entry

CREATED = datetime.datetime(2024, 5, 15, 9, 30, 5)


class TestCsv:
    def test_header_and_quoting(self):
        entry = make_entry(CREATED, "positive", content='She said "hi", then left', mood_intensity=4,
                           ai_feedback='A "good" sign')
        lines = to_csv([entry]).splitlines()
        assert lines[0] == ",".join(CSV_HEADERS)
        assert lines[1] == (
            '"2024-05-15","09:30:05","She said ""hi"", then left","positive","4","A ""good"" sign"'
        )

    def test_missing_values_are_na(self):
        entry = make_entry(CREATED, None, content="plain")
        row = next(csv.reader(io.StringIO(to_csv([entry]).splitlines()[1])))
        assert row[3:] == ["N/A", "N/A", "N/A"]

    def test_local_time_columns(self):
        entry = make_entry(CREATED, "neutral")
        row = to_csv([entry], tz="America/New_York").splitlines()[1]
        assert row.startswith('"2024-05-15","05:30:05"')


class TestHtml:
    def test_escapes_then_breaks_lines(self):
        entry = make_entry(CREATED, "negative", content="a<b>\nline two")
        page = to_html([entry], "week")
        assert "a&lt;b&gt;<br>line two" in page
        assert "<script" not in page
        assert "Last week" in page
        assert "Negative: 1 entries" in page

    def test_feedback_block_only_when_present(self):
        without = to_html([make_entry(CREATED, None)])
        with_feedback = to_html([make_entry(CREATED, None, ai_feedback="Keep going")])
        assert "AI Wellness Insight" not in without
        assert "Keep going" in with_feedback
        assert "All time" in without


class TestJson:
    def test_round_trip_of_entry_fields(self):
        entries = [
            make_entry(CREATED, "positive", content="Line one\n\"quoted\"", mood_intensity=5, ai_feedback="Nice"),
            make_entry(CREATED, None, content="Nothing special"),
        ]
        data = json.loads(to_json(entries, "month"))
        assert data["exportInfo"]["platform"] == "Inner Thought Bloom"
        assert data["exportInfo"]["totalEntries"] == 2
        assert data["exportInfo"]["dateRange"] == "month"
        for original, exported in zip(entries, data["memories"]):
            assert exported["id"] == str(original.id)
            assert exported["content"] == original.content
            assert exported["mood"] == original.sentiment_label
            assert exported["moodIntensity"] == original.mood_intensity
            assert exported["aiInsight"] == original.ai_feedback
        assert data["statistics"]["moodDistribution"] == {"positive": 1, "neutral": 0, "negative": 0}
        assert "wellnessMetrics" not in data

    def test_optional_sections(self):
        data = json.loads(to_json([], metrics=[], goals=[]))
        assert data["wellnessMetrics"] == []
        assert data["goals"] == []


def test_unlabelled_entries_are_not_counted():
    assert count_moods([make_entry(CREATED, None)]) == {"positive": 0, "neutral": 0, "negative": 0}


def test_filename():
    assert export_filename("csv", "week", datetime.date(2024, 5, 15)) == "inner-thought-bloom-journal-week-2024-05-15.csv"


def test_render_dispatches_on_format():
    entries = [make_entry(CREATED, "positive")]
    assert render_export("html", entries).startswith("<!DOCTYPE html>")
    assert render_export("csv", entries).startswith("Date,Time")
    assert json.loads(render_export("json", entries))["exportInfo"]["totalEntries"] == 1
