from .question_responses import MultipleChoiceResponse, OpenEndedResponse
from .question_session import QuestionSession

__all__ = [
    "MultipleChoiceResponse",
    "OpenEndedResponse",
    "QuestionSession",
]
