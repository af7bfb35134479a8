"""Pytest configuration and fixtures."""

import os

# Configure the app before it is imported: in-memory store, keyword grading
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"
os.environ.pop("AI_PROVIDER", None)

from collections.abc import Generator  # noqa: E402
from datetime import UTC, datetime, timedelta  # noqa: E402
from typing import Any  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from vocabcoach import models  # noqa: E402, F401
from vocabcoach.application.questions.exceptions import TrackingError  # noqa: E402
from vocabcoach.application.questions.services.session_tracker import (  # noqa: E402
    QuestionSessionTracker,
)
from vocabcoach.database import Base  # noqa: E402
from vocabcoach.domain.common.value_objects import UserId  # noqa: E402
from vocabcoach.infrastructure.identity.identity_providers import (  # noqa: E402
    StaticIdentityProvider,
)
from vocabcoach.infrastructure.persistence.document_store import SqlDocumentStore  # noqa: E402
from vocabcoach.main import app  # noqa: E402

TEST_USER_ID = "student-1"
AUTH_HEADERS = {"X-User-Id": TEST_USER_ID}
OTHER_USER_HEADERS = {"X-User-Id": "student-2"}


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2025, 8, 6, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def session_factory() -> Generator[sessionmaker[Session], None, None]:
    """Session factory bound to a fresh in-memory database."""
    engine = create_engine(
        "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def document_store(session_factory: sessionmaker[Session]) -> SqlDocumentStore:
    return SqlDocumentStore(session_factory)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def tracked_errors() -> list[TrackingError]:
    return []


@pytest.fixture
def tracker(
    document_store: SqlDocumentStore, clock: FakeClock, tracked_errors: list[TrackingError]
) -> QuestionSessionTracker:
    """Tracker for a signed-in student, reporting errors into ``tracked_errors``."""
    return QuestionSessionTracker(
        document_store=document_store,
        identity_provider=StaticIdentityProvider(UserId(TEST_USER_ID)),
        error_sink=tracked_errors.append,
        clock=clock,
    )


@pytest.fixture
def client() -> Generator[TestClient, Any, None]:
    """Test client with a fresh in-memory document store per test."""
    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
