"""Reads finished question sessions back from the document store."""

from dataclasses import dataclass

import structlog

from vocabcoach.application.questions import documents
from vocabcoach.application.questions.protocols.document_store import (
    DocumentStoreError,
    DocumentStoreProtocol,
)
from vocabcoach.domain.common.value_objects import QuestionSessionId, UserId
from vocabcoach.domain.questions.entities.question_responses import (
    MultipleChoiceResponse,
    OpenEndedResponse,
)
from vocabcoach.domain.questions.entities.question_session import QuestionSession
from vocabcoach.exceptions import (
    QuestionSessionConflictError,
    QuestionSessionNotFoundError,
    ServiceError,
)

logger = structlog.get_logger(__name__)

DEFAULT_RECENT_SESSIONS_LIMIT = 3


@dataclass
class SessionResults:
    session: QuestionSession
    multiple_choice_responses: list[MultipleChoiceResponse]
    open_ended_responses: list[OpenEndedResponse]


class QuestionSessionResultsService:
    """Application service behind the results screen and the progress dashboard."""

    def __init__(self, document_store: DocumentStoreProtocol) -> None:
        self.document_store = document_store

    def ensure_session_id_available(self, session_id: QuestionSessionId, user_id: UserId) -> None:
        """
        Check that starting a session under this id cannot overwrite a stored one.

        An id is free when nothing is stored under it, or when it holds an
        unfinished session of the same user.

        Raises:
            QuestionSessionConflictError: If the stored session belongs to
                another user or is already finished
            ServiceError: If the store cannot be read
        """
        try:
            data = self.document_store.get(documents.session_path(session_id))
        except DocumentStoreError as e:
            logger.error(
                "question_session_lookup_failed", session_id=session_id.value, error=str(e)
            )
            raise ServiceError(f"Failed to look up question session: {e!s}") from e

        if data is None:
            return
        if data.get("user_id") != user_id.value or data.get("completed"):
            logger.warning(
                "question_session_id_taken",
                session_id=session_id.value,
                user_id=user_id.value,
                completed=bool(data.get("completed")),
            )
            raise QuestionSessionConflictError(session_id.value)

    def get_results(self, session_id: QuestionSessionId, user_id: UserId) -> SessionResults:
        """
        Load a session and its responses, ordered by question number.

        Raises:
            QuestionSessionNotFoundError: If the session does not exist or
                belongs to another user
            ServiceError: If the store cannot be read
        """
        try:
            data = self.document_store.get(documents.session_path(session_id))
            if data is None or data.get("user_id") != user_id.value:
                raise QuestionSessionNotFoundError(session_id.value)

            multiple_choice = self.document_store.list_documents(
                documents.multiple_choice_responses(session_id), order_by="question_number"
            )
            open_ended = self.document_store.list_documents(
                documents.open_ended_responses(session_id), order_by="question_number"
            )
        except DocumentStoreError as e:
            logger.error(
                "question_session_results_unavailable",
                session_id=session_id.value,
                error=str(e),
            )
            raise ServiceError(f"Failed to load question session results: {e!s}") from e

        return SessionResults(
            session=QuestionSession.from_document(data),
            multiple_choice_responses=[MultipleChoiceResponse.from_document(d) for d in multiple_choice],
            open_ended_responses=[OpenEndedResponse.from_document(d) for d in open_ended],
        )

    def get_recent_sessions(
        self, user_id: UserId, limit: int = DEFAULT_RECENT_SESSIONS_LIMIT
    ) -> list[QuestionSession]:
        """The user's most recently started sessions, newest first."""
        try:
            records = self.document_store.list_documents(
                documents.QUESTION_SESSIONS,
                order_by="created_at",
                descending=True,
                filters={"user_id": user_id.value},
                limit=limit,
            )
        except DocumentStoreError as e:
            logger.error("recent_question_sessions_unavailable", user_id=user_id.value, error=str(e))
            raise ServiceError(f"Failed to load recent question sessions: {e!s}") from e

        return [QuestionSession.from_document(record) for record in records]
