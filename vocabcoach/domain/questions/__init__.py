"""Question session domain layer."""

from .entities import MultipleChoiceResponse, OpenEndedResponse, QuestionSession
from .services import AnswerMatchingService, QuestionCompletionService, SessionScoringService
from .value_objects import ChoiceOption, QuestionCounts, QuestionType, QuestionTypeSummary

__all__ = [
    "AnswerMatchingService",
    "ChoiceOption",
    "MultipleChoiceResponse",
    "OpenEndedResponse",
    "QuestionCompletionService",
    "QuestionCounts",
    "QuestionSession",
    "QuestionType",
    "QuestionTypeSummary",
    "SessionScoringService",
]
