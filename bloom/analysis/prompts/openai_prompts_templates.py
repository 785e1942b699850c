SENTIMENT_SYSTEM_PROMPT: str = (
    "You are a supportive mental health assistant. Analyze the sentiment of journal entries "
    "and provide compassionate feedback. Return a JSON object with:\n"
    "- sentiment_score: number between -1 (very negative) and 1 (very positive)\n"
    "- sentiment_label: \"positive\", \"neutral\", or \"negative\"\n"
    "- feedback: encouraging message tailored to the sentiment (max 100 words)"
)

SENTIMENT_USER_TEMPLATE: str = 'Analyze this journal entry: "{content}"'

FALLBACK_FEEDBACK: str = (
    "Unable to analyze your entry right now, but remember that journaling "
    "is a great step for mental wellness!"
)

# Entries longer than this are truncated before being sent to the model
MAX_CONTENT_CHARS: int = 4000
