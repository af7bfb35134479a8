"""Question module domain exceptions."""

from vocabcoach.domain.common.exceptions import (
    BusinessRuleViolationError,
    InvariantViolationError,
)


class DuplicateQuestionNumberError(InvariantViolationError):
    """Raised when a response reuses a question number within its category."""

    def __init__(self, category: str, question_number: int) -> None:
        super().__init__(
            "QuestionSession",
            f"{category} question number {question_number} is already recorded",
        )
        self.category = category
        self.question_number = question_number


class SessionAlreadyFinishedError(BusinessRuleViolationError):
    """Raised when finishing a question session a second time."""

    def __init__(self, session_id: str) -> None:
        super().__init__(
            "session_finished_once",
            f"Question session {session_id} is already finished",
        )
        self.session_id = session_id
