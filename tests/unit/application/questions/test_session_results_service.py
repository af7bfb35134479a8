"""Tests for reading sessions back and for the tracker registry."""

from unittest.mock import MagicMock

import pytest

from tests.conftest import TEST_USER_ID, FakeClock
from vocabcoach.application.questions.protocols.document_store import DocumentStoreError
from vocabcoach.application.questions.services.session_results_service import (
    QuestionSessionResultsService,
)
from vocabcoach.application.questions.services.session_tracker import QuestionSessionTracker
from vocabcoach.application.questions.services.tracker_registry import (
    QuestionSessionTrackerRegistry,
)
from vocabcoach.domain.common.value_objects import ArticleId, QuestionSessionId, UserId
from vocabcoach.domain.questions.entities import OpenEndedResponse
from vocabcoach.domain.questions.value_objects import QuestionCounts
from vocabcoach.exceptions import (
    QuestionSessionConflictError,
    QuestionSessionNotFoundError,
    ServiceError,
)
from vocabcoach.infrastructure.identity.identity_providers import StaticIdentityProvider
from vocabcoach.infrastructure.persistence.document_store import SqlDocumentStore

USER = UserId(TEST_USER_ID)


def _finished_session(tracker: QuestionSessionTracker) -> QuestionSessionId:
    session_id = tracker.start().unwrap()
    for number in (2, 1, 3):
        tracker.track_multiple_choice(
            is_correct=number != 3,
            question_number=number,
            question_text=f"Question {number}?",
            student_choice="choice_a",
            correct_choice="choice_a" if number != 3 else "choice_b",
        )
    tracker.complete_multiple_choice_section()
    for number, score in ((2, 0.3), (1, 0.8)):
        tracker.add_open_ended_response(
            OpenEndedResponse.create(
                question_number=number,
                question_text="Why?",
                student_answer="Because.",
                feedback="",
                reasoning="",
                score=score,
            )
        )
        tracker.track_open_ended(score)
    tracker.finish("article-3", question_counts=QuestionCounts(3, 2, 0))
    return session_id


@pytest.fixture
def results_service(document_store: SqlDocumentStore) -> QuestionSessionResultsService:
    return QuestionSessionResultsService(document_store)


class TestGetResults:
    def test_returns_session_with_ordered_responses(
        self, tracker: QuestionSessionTracker, results_service: QuestionSessionResultsService
    ) -> None:
        session_id = _finished_session(tracker)

        results = results_service.get_results(session_id, USER)

        assert results.session.id == session_id
        assert results.session.completed
        assert results.session.article_id == ArticleId("article-3")
        assert results.session.earned_points == 16 + 11
        assert results.session.total_points == 44
        assert [r.question_number for r in results.multiple_choice_responses] == [1, 2, 3]
        assert [r.is_correct for r in results.multiple_choice_responses] == [True, True, False]
        assert [r.question_number for r in results.open_ended_responses] == [1, 2]

    def test_unknown_session(self, results_service: QuestionSessionResultsService) -> None:
        with pytest.raises(QuestionSessionNotFoundError):
            results_service.get_results(QuestionSessionId("missing"), USER)

    def test_other_users_session_is_hidden(
        self, tracker: QuestionSessionTracker, results_service: QuestionSessionResultsService
    ) -> None:
        session_id = _finished_session(tracker)
        with pytest.raises(QuestionSessionNotFoundError):
            results_service.get_results(session_id, UserId("student-2"))

    def test_store_failure(self) -> None:
        store = MagicMock()
        store.get.side_effect = DocumentStoreError("down")
        service = QuestionSessionResultsService(store)

        with pytest.raises(ServiceError):
            service.get_results(QuestionSessionId("s"), USER)


class TestSessionIdAvailability:
    def test_unused_id(self, results_service: QuestionSessionResultsService) -> None:
        results_service.ensure_session_id_available(QuestionSessionId("fresh"), USER)

    def test_own_unfinished_session(
        self, tracker: QuestionSessionTracker, results_service: QuestionSessionResultsService
    ) -> None:
        session_id = tracker.start().unwrap()
        results_service.ensure_session_id_available(session_id, USER)

    def test_other_users_session(
        self, tracker: QuestionSessionTracker, results_service: QuestionSessionResultsService
    ) -> None:
        session_id = tracker.start().unwrap()
        with pytest.raises(QuestionSessionConflictError):
            results_service.ensure_session_id_available(session_id, UserId("student-2"))

    def test_finished_session(
        self, tracker: QuestionSessionTracker, results_service: QuestionSessionResultsService
    ) -> None:
        session_id = _finished_session(tracker)
        with pytest.raises(QuestionSessionConflictError):
            results_service.ensure_session_id_available(session_id, USER)

    def test_store_failure(self) -> None:
        store = MagicMock()
        store.get.side_effect = DocumentStoreError("down")
        with pytest.raises(ServiceError):
            QuestionSessionResultsService(store).ensure_session_id_available(
                QuestionSessionId("s"), USER
            )


class TestRecentSessions:
    def test_newest_first_and_limited(
        self,
        document_store: SqlDocumentStore,
        clock: FakeClock,
        results_service: QuestionSessionResultsService,
    ) -> None:
        started = []
        for _ in range(4):
            tracker = QuestionSessionTracker(
                document_store=document_store,
                identity_provider=StaticIdentityProvider(USER),
                clock=clock,
            )
            started.append(tracker.start().unwrap())
            clock.advance(60)
        other = QuestionSessionTracker(
            document_store=document_store,
            identity_provider=StaticIdentityProvider(UserId("student-2")),
            clock=clock,
        )
        other.start()

        recent = results_service.get_recent_sessions(USER)

        assert [s.id for s in recent] == list(reversed(started))[:3]
        assert all(s.user_id == USER for s in recent)

    def test_no_sessions(self, results_service: QuestionSessionResultsService) -> None:
        assert results_service.get_recent_sessions(USER, limit=5) == []


class TestTrackerRegistry:
    def test_register_and_get(self, tracker: QuestionSessionTracker) -> None:
        registry = QuestionSessionTrackerRegistry()
        session_id = QuestionSessionId("s-1")

        registry.register(session_id, USER, tracker)

        assert registry.get(session_id, USER) is tracker
        assert registry.owner(session_id) == USER
        assert len(registry) == 1

    def test_other_user_cannot_reach_tracker(self, tracker: QuestionSessionTracker) -> None:
        registry = QuestionSessionTrackerRegistry()
        session_id = QuestionSessionId("s-1")
        registry.register(session_id, USER, tracker)

        with pytest.raises(QuestionSessionNotFoundError):
            registry.get(session_id, UserId("student-2"))
        with pytest.raises(QuestionSessionConflictError):
            registry.register(session_id, UserId("student-2"), tracker)

    def test_remove(self, tracker: QuestionSessionTracker) -> None:
        registry = QuestionSessionTrackerRegistry()
        session_id = QuestionSessionId("s-1")
        registry.register(session_id, USER, tracker)

        registry.remove(session_id)
        registry.remove(session_id)

        assert registry.owner(session_id) is None
        with pytest.raises(QuestionSessionNotFoundError):
            registry.get(session_id, USER)

    def test_idle_trackers_are_evicted(self, tracker: QuestionSessionTracker) -> None:
        now = [0.0]
        registry = QuestionSessionTrackerRegistry(idle_timeout=60, clock=lambda: now[0])
        for number in range(50):
            registry.register(QuestionSessionId(f"abandoned-{number}"), USER, tracker)
        assert len(registry) == 50

        now[0] = 61.0
        registry.register(QuestionSessionId("active"), USER, tracker)

        assert len(registry) == 1
        assert registry.owner(QuestionSessionId("abandoned-0")) is None
        with pytest.raises(QuestionSessionNotFoundError):
            registry.get(QuestionSessionId("abandoned-0"), USER)

    def test_use_keeps_tracker_alive(self, tracker: QuestionSessionTracker) -> None:
        now = [0.0]
        registry = QuestionSessionTrackerRegistry(idle_timeout=60, clock=lambda: now[0])
        session_id = QuestionSessionId("s-1")
        registry.register(session_id, USER, tracker)

        now[0] = 50.0
        assert registry.get(session_id, USER) is tracker
        now[0] = 100.0
        assert registry.get(session_id, USER) is tracker
        now[0] = 160.0
        with pytest.raises(QuestionSessionNotFoundError):
            registry.get(session_id, USER)
