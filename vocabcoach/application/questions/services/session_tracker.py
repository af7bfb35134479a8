"""
Question session tracker.

Accumulates answer outcomes for the active session and mirrors them to the
document store: a provisional session record at start, the multiple-choice
responses when that section is completed, and the final record plus the
open-ended responses at finish.

Store writes are best-effort. A failed write is logged, reported to the
error sink and returned as a Failure; the in-memory session is never rolled
back and later operations proceed as usual. Nothing is retried.
"""

from collections.abc import Callable, Sequence
from datetime import datetime
from typing import Any, TypeVar

import structlog

from vocabcoach.application.common.result import Failure, Result, Success
from vocabcoach.application.questions import documents
from vocabcoach.application.questions.exceptions import (
    MissingIdentityError,
    RemoteWriteError,
    ResponseSerializationError,
    TrackingError,
)
from vocabcoach.application.questions.protocols.document_store import (
    BatchWrite,
    CollectionPath,
    DocumentPath,
    DocumentStoreError,
    DocumentStoreProtocol,
)
from vocabcoach.application.questions.protocols.identity_provider import (
    IdentityProviderProtocol,
)
from vocabcoach.domain.common.domain_event import DomainEvent
from vocabcoach.domain.common.exceptions import ValidationError
from vocabcoach.domain.common.value_objects import ArticleId, QuestionSessionId, UserId
from vocabcoach.domain.questions.entities.question_responses import (
    MultipleChoiceResponse,
    OpenEndedResponse,
)
from vocabcoach.domain.questions.entities.question_session import QuestionSession
from vocabcoach.domain.questions.services.scoring_service import SessionScoringService
from vocabcoach.domain.questions.value_objects import ChoiceOption, QuestionCounts

logger = structlog.get_logger(__name__)

ErrorSink = Callable[[TrackingError], None]
EventListener = Callable[[DomainEvent], None]
TError = TypeVar("TError", bound=TrackingError)


class QuestionSessionTracker:
    """
    Owns the QuestionSession state for one student's attempt.

    Callers read the state through ``session`` and learn about changes by
    subscribing to the domain events the session records.
    """

    def __init__(
        self,
        document_store: DocumentStoreProtocol,
        identity_provider: IdentityProviderProtocol,
        error_sink: ErrorSink | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.document_store = document_store
        self.identity_provider = identity_provider
        self.error_sink = error_sink
        self.clock = clock
        self.scoring_service = SessionScoringService()
        self._session: QuestionSession | None = None
        # Set once the provisional record could be keyed to a signed-in user
        self._session_id: QuestionSessionId | None = None
        self._listeners: list[EventListener] = []

    @property
    def session(self) -> QuestionSession | None:
        return self._session

    @property
    def session_id(self) -> QuestionSessionId | None:
        """Id of the active session, None until a signed-in start."""
        return self._session_id

    def subscribe(self, listener: EventListener) -> Callable[[], None]:
        """
        Register a listener for session events.

        Returns:
            A callable that removes the listener again
        """
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def start(self, session_id: str | None = None) -> Result[QuestionSessionId, TrackingError]:
        """
        Reset all state and create the provisional session record.

        Args:
            session_id: Id to use instead of a fresh one

        Returns:
            Success with the active session id, or a Failure when nobody is
            signed in or the record could not be written
        """
        user_id = self.identity_provider.current_user_id()
        self._session = QuestionSession.start(
            user_id=user_id,
            session_id=QuestionSessionId(session_id) if session_id else None,
            started_at=self._now(),
        )
        self._session_id = None

        try:
            if user_id is None:
                return self._fail(MissingIdentityError("start session", "signed-in user"))

            self._session_id = self._session.id
            try:
                self.document_store.set(
                    documents.session_path(self._session.id),
                    self._session.provisional_document(),
                )
            except DocumentStoreError as e:
                return self._fail(RemoteWriteError("start session", str(e)))

            logger.info(
                "question_session_created",
                session_id=self._session.id.value,
                user_id=user_id.value,
            )
            return Success(self._session.id)
        finally:
            self._dispatch_events()

    def track_multiple_choice(
        self,
        is_correct: bool,
        question_number: int,
        question_text: str,
        student_choice: str,
        correct_choice: str,
        *,
        student_choice_text: str = "",
        correct_choice_text: str = "",
    ) -> bool:
        """
        Record a multiple-choice answer in memory.

        Returns:
            True if the answer was recorded, False once the section is completed
        """
        session = self._require_session("track_multiple_choice")
        if session is None:
            return False

        response = MultipleChoiceResponse.create(
            question_number=question_number,
            question_text=question_text,
            student_answer=ChoiceOption(student_choice, student_choice_text),
            correct_answer=ChoiceOption(correct_choice, correct_choice_text),
            is_correct=is_correct,
            timestamp=self._now(),
        )
        try:
            tracked = session.track_multiple_choice(response)
        finally:
            self._dispatch_events()

        if not tracked:
            logger.debug(
                "multiple_choice_section_locked",
                session_id=session.id.value,
                question_number=question_number,
            )
        return tracked

    def track_open_ended(self, score: float) -> None:
        session = self._require_session("track_open_ended")
        if session is None:
            return
        try:
            session.track_open_ended_score(score)
        finally:
            self._dispatch_events()

    def add_open_ended_response(self, response: OpenEndedResponse) -> None:
        """Buffer a graded response until finish flushes it."""
        session = self._require_session("add_open_ended_response")
        if session is None:
            return
        try:
            session.add_open_ended_response(response)
        finally:
            self._dispatch_events()

    def track_vocabulary(self, is_correct: bool) -> None:
        session = self._require_session("track_vocabulary")
        if session is None:
            return
        try:
            session.track_vocabulary(is_correct)
        finally:
            self._dispatch_events()

    def complete_multiple_choice_section(self) -> Result[int, TrackingError]:
        """
        Lock the multiple-choice section and flush its responses in one batch.

        Idempotent: only the first call writes anything.

        Returns:
            Success with the number of responses written
        """
        session = self._require_session("complete_multiple_choice_section")
        if session is None:
            return self._fail(
                MissingIdentityError("complete multiple choice section", "active session")
            )

        try:
            if not session.complete_multiple_choice_section():
                return Success(0)
        finally:
            self._dispatch_events()

        identity = self._identity("complete multiple choice section")
        if isinstance(identity, Failure):
            return identity
        user_id, session_id = identity

        return self._flush_responses(
            operation="complete multiple choice section",
            collection=documents.multiple_choice_responses(session_id),
            responses=session.multiple_choice_responses,
            tags={"user_id": user_id.value, "session_id": session_id.value},
        )

    def finish(
        self,
        article_id: str,
        total_question_count: int | None = None,
        *,
        question_counts: QuestionCounts | None = None,
    ) -> Result[QuestionSession, TrackingError]:
        """
        Finalize the session and persist it.

        Possible points come from ``question_counts`` when given. A bare
        ``total_question_count`` falls back to the deprecated estimate of
        eight points per question.

        Args:
            article_id: Article the questions belong to
            total_question_count: Deprecated, number of questions of any type
            question_counts: Number of questions of each type

        Returns:
            Success with the finished session. A Failure reports the first
            write that failed; the session is finished in memory either way.

        Raises:
            ValidationError: If neither count is given
            SessionAlreadyFinishedError: If the session is already finished
        """
        if question_counts is None and total_question_count is None:
            raise ValidationError(
                "Either question_counts or total_question_count is required",
                field="question_counts",
            )

        session = self._require_session("finish")
        if session is None:
            return self._fail(MissingIdentityError("finish session", "active session"))
        identity = self._identity("finish session")
        if isinstance(identity, Failure):
            return identity
        user_id, session_id = identity

        summaries = None
        if question_counts is not None:
            possible_points = self.scoring_service.points_possible_for(question_counts)
            summaries = self.scoring_service.summarize(
                question_counts,
                session.multiple_choice_correct,
                session.open_ended_scores,
                session.vocabulary_correct,
            )
        else:
            logger.warning(
                "legacy_possible_points_used",
                session_id=session_id.value,
                total_question_count=total_question_count,
            )
            possible_points = self.scoring_service.legacy_points_possible(
                total_question_count or 0
            )

        try:
            session.finish(
                ArticleId(article_id),
                possible_points,
                finished_at=self._now(),
                summaries=summaries,
            )
        finally:
            self._dispatch_events()

        errors: list[TrackingError] = []
        try:
            self.document_store.merge(documents.session_path(session_id), session.to_document())
            logger.info(
                "question_session_saved",
                session_id=session_id.value,
                earned_points=session.earned_points,
                total_points=session.total_points,
                accuracy=session.accuracy,
            )
        except DocumentStoreError as e:
            errors.append(self._report(RemoteWriteError("finish session", str(e))))

        flushed = self._flush_responses(
            operation="finish session",
            collection=documents.open_ended_responses(session_id),
            responses=session.open_ended_responses,
            tags={
                "user_id": user_id.value,
                "article_id": article_id,
                "session_id": session_id.value,
            },
        )
        if isinstance(flushed, Failure):
            errors.append(flushed.error)

        if errors:
            return Failure(errors[0])
        return Success(session)

    def save_open_ended_response(
        self, response: OpenEndedResponse, article_id: str
    ) -> Result[DocumentPath, TrackingError]:
        """Persist one open-ended response right away, outside the finish batch."""
        operation = "save open ended response"
        identity = self._identity(operation)
        if isinstance(identity, Failure):
            return identity
        user_id, session_id = identity

        path = documents.open_ended_responses(session_id).document(
            documents.response_document_id(response.question_number)
        )
        try:
            data = self._response_document(
                response,
                {
                    "user_id": user_id.value,
                    "article_id": article_id,
                    "session_id": session_id.value,
                },
            )
        except (TypeError, ValueError) as e:
            return self._fail(ResponseSerializationError(operation, response.question_number, str(e)))

        try:
            self.document_store.set(path, data)
        except DocumentStoreError as e:
            return self._fail(RemoteWriteError(operation, str(e)))

        logger.info(
            "open_ended_response_saved",
            session_id=session_id.value,
            question_number=response.question_number,
        )
        return Success(path)

    def _flush_responses(
        self,
        operation: str,
        collection: CollectionPath,
        responses: Sequence[MultipleChoiceResponse | OpenEndedResponse],
        tags: dict[str, Any],
    ) -> Result[int, TrackingError]:
        writes: list[BatchWrite] = []
        skipped: list[ResponseSerializationError] = []
        for response in responses:
            try:
                data = self._response_document(response, tags)
            except (TypeError, ValueError) as e:
                skipped.append(
                    self._report(
                        ResponseSerializationError(operation, response.question_number, str(e))
                    )
                )
                continue
            path = collection.document(documents.response_document_id(response.question_number))
            writes.append(BatchWrite(path=path, data=data))

        if not writes:
            return Success(0)

        try:
            self.document_store.commit_batch(writes)
        except DocumentStoreError as e:
            return self._fail(RemoteWriteError(operation, str(e), skipped=skipped))

        logger.info(
            "responses_saved",
            collection=str(collection),
            count=len(writes),
            skipped=len(skipped),
        )
        return Success(len(writes))

    def _response_document(
        self, response: MultipleChoiceResponse | OpenEndedResponse, tags: dict[str, Any]
    ) -> dict[str, Any]:
        return documents.ensure_serializable({**response.to_document(), **tags})

    def _identity(
        self, operation: str
    ) -> tuple[UserId, QuestionSessionId] | Failure[TrackingError]:
        user_id = self.identity_provider.current_user_id()
        if user_id is None:
            return self._fail(MissingIdentityError(operation, "signed-in user"))
        if self._session_id is None:
            return self._fail(MissingIdentityError(operation, "active session"))
        return user_id, self._session_id

    def _require_session(self, operation: str) -> QuestionSession | None:
        if self._session is None:
            logger.warning("question_session_not_started", operation=operation)
        return self._session

    def _fail(self, error: TrackingError) -> Failure[TrackingError]:
        return Failure(self._report(error))

    def _report(self, error: TError) -> TError:
        logger.warning(
            "question_session_tracking_failed",
            error_type=type(error).__name__,
            operation=error.operation,
            error=error.message,
            session_id=self._session_id.value if self._session_id else None,
        )
        if self.error_sink is not None:
            self.error_sink(error)
        return error

    def _dispatch_events(self) -> None:
        if self._session is None:
            return
        for event in self._session.collect_events():
            logger.debug("question_session_event", **event.log_context())
            for listener in list(self._listeners):
                listener(event)

    def _now(self) -> datetime | None:
        return self.clock() if self.clock else None
