"""
Database configuration and session management for SQLAlchemy.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from bloom.core.config import DATABASE_URL

# Engine & Session
_connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(DATABASE_URL, connect_args=_connect_args)
SessionLocal = sessionmaker(
    autocommit=False, autoflush=False, expire_on_commit=False, bind=engine
)

# Declarative Base
Base = declarative_base()

# Import all models to register them with the Base metadata
import bloom.auth.models  # noqa: E402,F401
import bloom.goals.models  # noqa: E402,F401
import bloom.journals.models  # noqa: E402,F401
import bloom.metrics.models  # noqa: E402,F401


# Dependency for FastAPI Routes
def get_db():
    """
    Yields a database session for use in FastAPI dependency injection.
    Ensures the session is closed after the request lifecycle.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_session_factory():
    """Returns the sessionmaker used by background readers that need their own session."""
    return SessionLocal
