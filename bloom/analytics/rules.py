"""
Business rules for the analytics aggregator, kept as data so they can be
tuned and tested on their own.
"""

from typing import Dict, List, Tuple

# Sentiment label -> mood score. Anything not listed (neutral, missing) uses the default.
MOOD_SCORES: Dict[str, int] = {
    "positive": 4,
    "negative": 2,
}
DEFAULT_MOOD_SCORE: int = 3

MOOD_LABELS: Tuple[str, ...] = ("positive", "neutral", "negative")

# Sunday-first, matching the weekly activity chart
WEEKDAY_LABELS: Tuple[str, ...] = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")

# (minimum wellness score, message), checked top to bottom; the first match wins
WELLNESS_SCORE_MESSAGES: List[Tuple[int, str]] = [
    (70, "🌟 You're maintaining excellent mental wellness! Keep up the great work."),
    (50, "💪 Your wellness journey is on track. Consider adding more self-care activities."),
    (0, "🤗 Remember to be kind to yourself. Consider reaching out for support if needed."),
]

CONSISTENCY_LOOKBACK: int = 7
CONSISTENCY_MIN_ENTRIES: int = 5
CONSISTENCY_MESSAGE: str = "📝 Great job maintaining a consistent journaling habit this week!"

REFLECTIVE_MIN_AVG_CHARS: int = 200
REFLECTIVE_MESSAGE: str = "✍️ Your entries are wonderfully detailed and reflective."

# Average mood score bounds used to name the overall mood
AVERAGE_MOOD_POSITIVE_AT: float = 3.5
AVERAGE_MOOD_NEGATIVE_AT: float = 2.5
