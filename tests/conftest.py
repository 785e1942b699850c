"""
Pytest fixtures for Inner Thought Bloom tests.
"""
import os

# Settings are read at import time, so they must be in place before the app loads
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["DEFAULT_TIMEZONE"] = "UTC"
os.environ.pop("OPENAI_API_KEY", None)

import datetime
from types import SimpleNamespace
from typing import Any, Dict, Optional
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from bloom.analysis.ai_providers.base import SentimentProvider
from bloom.analysis.service import SentimentService
from bloom.analytics.routes import get_analytics_tracker
from bloom.analytics.service import AnalyticsTracker
from bloom.auth.models import User
from bloom.core.database import Base, get_db
from bloom.core.dependency import get_sentiment_service
from bloom.core.events import ChangeFeed, get_change_feed
from bloom.journals.models import JournalEntry
from bloom.main import app


# ============================================================================
# Fakes
# ============================================================================

class StubSentimentProvider(SentimentProvider):
    """Returns a fixed result, or raises when `error` is set."""

    def __init__(self, result: Optional[Dict[str, Any]] = None, error: Optional[Exception] = None):
        self.result = result or {
            "sentiment_score": 0.6,
            "sentiment_label": "positive",
            "feedback": "It sounds like today gave you something to smile about.",
        }
        self.error = error
        self.calls = []

    def analyze_sentiment(self, content: str) -> Dict[str, Any]:
        self.calls.append(content)
        if self.error:
            raise self.error
        return dict(self.result)


def make_entry(
    created_at: datetime.datetime,
    label: Optional[str] = "positive",
    content: str = "A quiet day.",
    ai_feedback: Optional[str] = None,
    mood_intensity: Optional[int] = None,
):
    """Plain object with the attributes the aggregator, search and export read."""
    return SimpleNamespace(
        id=uuid4(),
        content=content,
        created_at=created_at,
        sentiment_label=label,
        sentiment_score=None,
        ai_feedback=ai_feedback,
        mood_intensity=mood_intensity,
    )


# ============================================================================
# Database
# ============================================================================

@pytest.fixture
def session_factory(tmp_path):
    """
    File-backed SQLite so that sessions opened from worker threads each get
    their own connection.
    """
    engine = create_engine(
        f"sqlite:///{tmp_path / 'bloom-test.db'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)
    yield factory
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def user(db):
    u = User(id=uuid4(), email="reader@example.com", name="Reader", password="x")
    db.add(u)
    db.commit()
    return u


@pytest.fixture
def add_entry(db):
    def _add(user_id, created_at, label="positive", content="A quiet day."):
        entry = JournalEntry(
            id=uuid4(),
            user_id=user_id,
            content=content,
            created_at=created_at,
            sentiment_label=label,
        )
        db.add(entry)
        db.commit()
        return entry
    return _add


# ============================================================================
# App
# ============================================================================

@pytest.fixture
def feed():
    return ChangeFeed()


@pytest.fixture
def tracker(session_factory, feed):
    t = AnalyticsTracker(session_factory, feed)
    yield t
    t.close()


@pytest.fixture
def sentiment_provider():
    return StubSentimentProvider()


@pytest.fixture
def client(session_factory, feed, tracker, sentiment_provider):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_change_feed] = lambda: feed
    app.dependency_overrides[get_analytics_tracker] = lambda: tracker
    app.dependency_overrides[get_sentiment_service] = lambda: SentimentService(sentiment_provider)

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def signup(client):
    """Registers a user and returns (auth headers, user id)."""
    def _signup(email="ana@example.com", password="secret123", name="Ana"):
        resp = client.post("/auth/signup", json={"email": email, "password": password, "name": name})
        assert resp.status_code == 200, resp.text
        body = resp.json()
        return {"Authorization": f"Bearer {body['access_token']}"}, body["user"]["id"]
    return _signup


@pytest.fixture
def auth_headers(signup):
    headers, _ = signup()
    return headers
