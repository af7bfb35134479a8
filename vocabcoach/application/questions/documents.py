"""Collection layout for question sessions in the document store."""

import json
from typing import Any

from vocabcoach.application.questions.protocols.document_store import (
    CollectionPath,
    DocumentPath,
)
from vocabcoach.domain.common.value_objects import QuestionSessionId

QUESTION_SESSIONS = CollectionPath("question_sessions")
MULTIPLE_CHOICE_RESPONSES = "multiple_choice_responses"
OPEN_ENDED_RESPONSES = "open_ended_responses"


def session_path(session_id: QuestionSessionId) -> DocumentPath:
    return QUESTION_SESSIONS.document(session_id.value)


def multiple_choice_responses(session_id: QuestionSessionId) -> CollectionPath:
    return session_path(session_id).subcollection(MULTIPLE_CHOICE_RESPONSES)


def open_ended_responses(session_id: QuestionSessionId) -> CollectionPath:
    return session_path(session_id).subcollection(OPEN_ENDED_RESPONSES)


def response_document_id(question_number: int) -> str:
    return f"question_{question_number}"


def ensure_serializable(data: dict[str, Any]) -> dict[str, Any]:
    """
    Check that a document can be stored as JSON.

    Raises:
        ValueError: On NaN or infinite floats
        TypeError: On values JSON cannot represent
    """
    json.dumps(data, allow_nan=False)
    return data
