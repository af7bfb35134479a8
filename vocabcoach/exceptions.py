"""Custom exception hierarchy for the VocabCoach service."""

from fastapi import HTTPException, status


class VocabCoachError(Exception):
    """Base exception for all VocabCoach service errors."""

    def __init__(self, message: str, status_code: int = 500) -> None:
        """Initialize exception with message and optional status code."""
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class NotFoundError(VocabCoachError):
    """Resource not found error."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=404)


class QuestionSessionNotFoundError(NotFoundError):
    """Question session not found, or owned by another user."""

    def __init__(self, session_id: str | None = None, *, message: str | None = None) -> None:
        self.session_id = session_id
        if message:
            super().__init__(message)
        elif session_id is not None:
            super().__init__(f"Question session with id {session_id} not found")
        else:
            super().__init__("Question session not found")


class QuestionSessionConflictError(VocabCoachError):
    """Question session id already in use by another user."""

    def __init__(self, session_id: str) -> None:
        self.session_id = session_id
        super().__init__(f"Question session id {session_id} is already in use", status_code=409)


class ServiceError(VocabCoachError):
    """Service layer error."""


MissingUserException = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Missing user identity",
    headers={"WWW-Authenticate": "X-User-Id"},
)
