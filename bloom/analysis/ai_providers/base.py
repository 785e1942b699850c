from abc import ABC, abstractmethod
from typing import Any, Dict


class SentimentProvider(ABC):
    @abstractmethod
    def analyze_sentiment(self, content: str) -> Dict[str, Any]:
        """Returns the raw JSON object produced for one journal entry."""
