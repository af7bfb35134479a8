from .answer_matching_service import AnswerMatchingService
from .completion_service import QuestionCompletionService
from .scoring_service import SessionScoringService

__all__ = [
    "AnswerMatchingService",
    "QuestionCompletionService",
    "SessionScoringService",
]
