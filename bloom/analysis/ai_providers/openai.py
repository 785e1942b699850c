from __future__ import annotations

import json
import logging
from typing import Any, List, Optional

from openai import OpenAI

import bloom.analysis.prompts.openai_prompts_templates as prompts
from bloom.analysis.ai_providers.base import SentimentProvider
from bloom.core.config import OPENAI_API_KEY, OPENAI_CHAT_MODEL

logger = logging.getLogger(__name__)


def _try_repair_parse(raw: Optional[str]) -> Any:
    if not raw:
        raise ValueError("Empty content")
    s = raw.strip()
    if s.startswith("```"):
        s = s.strip("`\n ")
    start = s.find("{")
    end = s.rfind("}")
    if start != -1 and end != -1 and end > start:
        return json.loads(s[start : end + 1])
    return json.loads(s)


class OpenAISentimentProvider(SentimentProvider):
    """Sentiment scoring through the Chat Completions JSON mode."""

    def __init__(self, client: Optional[OpenAI] = None, model: Optional[str] = None):
        if client is None:
            if not OPENAI_API_KEY:
                raise RuntimeError("Missing OPENAI_API_KEY in environment")
            client = OpenAI(api_key=OPENAI_API_KEY)
        self.client = client
        self.model = model or OPENAI_CHAT_MODEL

    def _chat_json(self, messages: List[dict[str, Any]], *, max_tokens: int = 300) -> dict[str, Any]:
        """Run a chat completion and parse the JSON object from the first choice."""
        resp = self.client.chat.completions.create(
            model=self.model,
            messages=messages,
            max_tokens=max_tokens,
            temperature=0.2,
            response_format={"type": "json_object"},
        )
        content = resp.choices[0].message.content or "{}"
        try:
            data = json.loads(content)
        except json.JSONDecodeError:
            data = _try_repair_parse(content)
        if not isinstance(data, dict):
            raise ValueError("Expected a JSON object from the model")
        return data

    def analyze_sentiment(self, content: str) -> dict[str, Any]:
        text = content.strip()[: prompts.MAX_CONTENT_CHARS]
        messages = [
            {"role": "system", "content": prompts.SENTIMENT_SYSTEM_PROMPT},
            {"role": "user", "content": prompts.SENTIMENT_USER_TEMPLATE.format(content=text)},
        ]
        return self._chat_json(messages)
