"""
In-memory search and filtering over an already fetched list of entries.

Nothing here touches the database; every function is pure and never raises
for well-formed input.
"""

import datetime
import re
from typing import Any, List, Literal, Optional, Sequence, Tuple

from bloom.core.clock import as_aware, shift_months, start_of_day

SortOrder = Literal["newest", "oldest", "relevance"]
DateRange = Literal["all", "today", "week", "month", "year"]


def _created(entry: Any) -> datetime.datetime:
    return as_aware(entry.created_at)


def _contains(value: Optional[str], needle: str) -> bool:
    return bool(value) and needle in value.lower()


def matches_query(entry: Any, query: str) -> bool:
    """Case-insensitive substring match on content, AI feedback and sentiment label."""
    needle = query.strip().lower()
    if not needle:
        return True
    return (
        _contains(entry.content, needle)
        or _contains(entry.ai_feedback, needle)
        or _contains(entry.sentiment_label, needle)
    )


def relevance(entry: Any, query: str) -> int:
    """Number of non-overlapping occurrences of the query in the entry content."""
    needle = query.strip().lower()
    if not needle:
        return 0
    return (entry.content or "").lower().count(needle)


def date_range_start(date_range: DateRange, now: Optional[datetime.datetime] = None) -> Optional[datetime.datetime]:
    """
    Lower bound for a named range, or None for "all".

    "today" starts at local midnight of `now`; the others step back a calendar
    week, month or year from `now`.
    """
    if date_range == "all":
        return None
    now = now or datetime.datetime.now(datetime.timezone.utc)
    if date_range == "today":
        return start_of_day(now)
    if date_range == "week":
        return now - datetime.timedelta(days=7)
    if date_range == "month":
        return shift_months(now, -1)
    if date_range == "year":
        return shift_months(now, -12)
    raise ValueError(f"Unknown date range '{date_range}'")


def search_entries(
    entries: Sequence[Any],
    query: str = "",
    mood: Optional[str] = None,
    since: Optional[datetime.datetime] = None,
    sort_by: SortOrder = "newest",
) -> List[Any]:
    """
    Filters and orders journal entries.

    Args:
        entries: Entries as fetched (any order).
        query: Free text; blank means no text filter.
        mood: Exact sentiment label to keep, or None / "all".
        since: Keep entries created at or after this instant.
        sort_by: "newest", "oldest" or "relevance".

    Returns:
        A new list. With a blank query, "relevance" leaves the filtered order untouched.
    """
    results = [e for e in entries if matches_query(e, query)]

    if mood and mood != "all":
        results = [e for e in results if e.sentiment_label == mood]

    if since is not None:
        bound = as_aware(since)
        results = [e for e in results if _created(e) >= bound]

    if sort_by == "newest":
        results.sort(key=_created, reverse=True)
    elif sort_by == "oldest":
        results.sort(key=_created)
    elif sort_by == "relevance":
        if query.strip():
            # list.sort is stable, so ties keep their previous order
            results.sort(key=lambda e: relevance(e, query), reverse=True)
    else:
        raise ValueError(f"Unknown sort order '{sort_by}'")

    return results


def highlight(text: str, query: str) -> List[Tuple[str, bool]]:
    """
    Splits text into (fragment, is_match) pairs for case-insensitive matches of query.
    """
    if not text:
        return []
    if not query.strip():
        return [(text, False)]
    pattern = re.compile(f"({re.escape(query.strip())})", re.IGNORECASE)
    parts = []
    for i, part in enumerate(pattern.split(text)):
        if part:
            parts.append((part, i % 2 == 1))
    return parts
