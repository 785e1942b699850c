"""
Tests for the analytics snapshot tracker: caching by change version,
discarding slow stale refreshes, keeping one snapshot per window and zone,
and keeping the last snapshot on failure.
"""
import asyncio
import datetime
import threading

import pytest

from bloom.analytics import service
from bloom.analytics.service import AnalyticsFetchError
from bloom.core.clock import utcnow


@pytest.mark.asyncio
async def test_refresh_builds_snapshot(tracker, user, add_entry):
    add_entry(user.id, utcnow(), "positive")
    add_entry(user.id, utcnow(), "negative")

    snapshot = await tracker.refresh(user.id)

    assert snapshot.total_entries == 2
    assert snapshot.wellness_score == 50
    assert tracker.cached(user.id) is snapshot


@pytest.mark.asyncio
async def test_get_reuses_snapshot_until_a_change(tracker, feed, user, add_entry):
    add_entry(user.id, utcnow())
    first = await tracker.get(user.id)
    assert await tracker.get(user.id) is first

    add_entry(user.id, utcnow())
    feed.publish(user.id, "entries")

    second = await tracker.get(user.id)
    assert second is not first
    assert second.total_entries == 2
    assert second.version == 1


@pytest.mark.asyncio
async def test_other_window_or_zone_recomputes(tracker, user, add_entry):
    add_entry(user.id, utcnow())
    first = await tracker.get(user.id, window_days=30, tz="UTC")
    assert await tracker.get(user.id, window_days=7, tz="UTC") is not first


@pytest.mark.asyncio
async def test_slow_stale_refresh_is_discarded(tracker, feed, user, add_entry, monkeypatch):
    add_entry(user.id, utcnow())
    gate = threading.Event()
    calls = []
    real_reader = service.get_user_entries

    def slow_first_read(db, user_id, **kwargs):
        rows = real_reader(db, user_id, **kwargs)
        calls.append(len(rows))
        if len(calls) == 1:
            gate.wait(timeout=5)
        return rows

    monkeypatch.setattr(service, "get_user_entries", slow_first_read)

    slow = asyncio.create_task(tracker.refresh(user.id))
    while not calls:
        await asyncio.sleep(0.01)

    add_entry(user.id, utcnow())
    feed.publish(user.id, "entries")
    fresh = await tracker.refresh(user.id)
    assert fresh.total_entries == 2

    gate.set()
    result = await slow

    # The slow refresh read one entry at version 0; the applied snapshot stays the newer one
    assert calls[0] == 1
    assert result.total_entries == 2
    assert tracker.cached(user.id).total_entries == 2
    assert tracker.cached(user.id).version == 1


@pytest.mark.asyncio
async def test_failed_read_keeps_previous_snapshot(tracker, feed, user, add_entry, monkeypatch):
    add_entry(user.id, utcnow())
    good = await tracker.refresh(user.id)

    def broken(*args, **kwargs):
        raise RuntimeError("database is locked")

    monkeypatch.setattr(service, "get_user_metrics", broken)
    feed.publish(user.id, "metrics")

    with pytest.raises(AnalyticsFetchError) as exc:
        await tracker.get(user.id)

    assert exc.value.source == "metrics"
    assert tracker.cached(user.id) is good
    assert "metrics" in tracker.last_error(user.id)


@pytest.mark.asyncio
async def test_account_deletion_forgets_snapshot(tracker, feed, user, add_entry):
    add_entry(user.id, utcnow())
    await tracker.refresh(user.id)

    feed.publish(user.id, "account")

    assert tracker.cached(user.id) is None


@pytest.mark.asyncio
async def test_overlapping_windows_keep_their_own_snapshots(tracker, user, add_entry, monkeypatch):
    add_entry(user.id, utcnow() - datetime.timedelta(days=20))
    add_entry(user.id, utcnow())
    gate = threading.Event()
    calls = []
    real_reader = service.get_user_entries

    def slow_first_read(db, user_id, **kwargs):
        rows = real_reader(db, user_id, **kwargs)
        calls.append(len(rows))
        if len(calls) == 1:
            gate.wait(timeout=5)
        return rows

    monkeypatch.setattr(service, "get_user_entries", slow_first_read)

    month = asyncio.create_task(tracker.refresh(user.id, window_days=30))
    while not calls:
        await asyncio.sleep(0.01)

    week = await tracker.refresh(user.id, window_days=7)
    gate.set()
    month = await month

    assert (week.window_days, week.total_entries) == (7, 1)
    assert (month.window_days, month.total_entries) == (30, 2)
    assert tracker.cached(user.id, window_days=30).window_days == 30
    assert tracker.cached(user.id, window_days=7).window_days == 7


@pytest.mark.asyncio
async def test_default_zone_and_named_zone_share_a_snapshot(tracker, user, add_entry):
    add_entry(user.id, utcnow())
    first = await tracker.get(user.id)
    assert await tracker.get(user.id, tz="UTC") is first
