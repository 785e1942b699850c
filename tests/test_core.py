"""
Unit tests for the change feed and time helpers.
"""
import datetime
from uuid import uuid4

import pytest
import pytz

from bloom.core.clock import as_utc_naive, resolve_zone, shift_months, to_local, window_start
from bloom.core.events import ChangeFeed


class TestChangeFeed:
    def test_versions_are_per_user(self):
        feed = ChangeFeed()
        a, b = uuid4(), uuid4()
        assert feed.version(a) == 0
        assert feed.publish(a, "entries") == 1
        assert feed.publish(a, "goals") == 2
        assert feed.version(b) == 0

    def test_listeners_are_notified_and_can_unsubscribe(self):
        feed = ChangeFeed()
        seen = []
        unsubscribe = feed.subscribe(lambda user_id, source, version: seen.append((source, version)))
        user_id = uuid4()

        feed.publish(user_id, "metrics")
        unsubscribe()
        feed.publish(user_id, "metrics")

        assert seen == [("metrics", 1)]

    def test_failing_listener_does_not_block_publish(self):
        feed = ChangeFeed()

        def broken(*args):
            raise RuntimeError("boom")

        feed.subscribe(broken)
        assert feed.publish(uuid4(), "entries") == 1


class TestClock:
    def test_unknown_zone(self):
        with pytest.raises(ValueError):
            resolve_zone("Mars/Olympus_Mons")

    def test_default_zone(self):
        assert resolve_zone(None).zone == "UTC"

    def test_naive_values_are_utc(self):
        local = to_local(datetime.datetime(2024, 1, 1, 12, 0), "Europe/Berlin")
        assert local.hour == 13

    def test_as_utc_naive(self):
        berlin = pytz.timezone("Europe/Berlin").localize(datetime.datetime(2024, 7, 1, 10, 0))
        assert as_utc_naive(berlin) == datetime.datetime(2024, 7, 1, 8, 0)

    def test_shift_months_clamps_day(self):
        assert shift_months(datetime.datetime(2023, 3, 31), -1) == datetime.datetime(2023, 2, 28)
        assert shift_months(datetime.datetime(2024, 1, 15), -2) == datetime.datetime(2023, 11, 15)

    def test_window_start(self):
        now = pytz.UTC.localize(datetime.datetime(2024, 5, 15, 12, 0))
        assert window_start(30, "UTC", now=now) == now - datetime.timedelta(days=30)
