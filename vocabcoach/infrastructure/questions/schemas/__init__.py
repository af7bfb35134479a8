from .question_session_schemas import (
    MultipleChoiceAnswerRequest,
    MultipleChoiceAnswerResponse,
    MultipleChoiceResponseSchema,
    MultipleChoiceSectionResponse,
    OpenEndedEvaluationRequest,
    OpenEndedEvaluationResponse,
    OpenEndedResponseSchema,
    QuestionCountsSchema,
    QuestionSessionFinishRequest,
    QuestionSessionFinishResponse,
    QuestionSessionResultsResponse,
    QuestionSessionSchema,
    QuestionSessionsResponse,
    QuestionSessionStartRequest,
    QuestionSessionStartResponse,
    QuestionTypeSummarySchema,
    VocabularyAnswerRequest,
    VocabularyAnswerResponse,
)

__all__ = [
    "MultipleChoiceAnswerRequest",
    "MultipleChoiceAnswerResponse",
    "MultipleChoiceResponseSchema",
    "MultipleChoiceSectionResponse",
    "OpenEndedEvaluationRequest",
    "OpenEndedEvaluationResponse",
    "OpenEndedResponseSchema",
    "QuestionCountsSchema",
    "QuestionSessionFinishRequest",
    "QuestionSessionFinishResponse",
    "QuestionSessionResultsResponse",
    "QuestionSessionSchema",
    "QuestionSessionsResponse",
    "QuestionSessionStartRequest",
    "QuestionSessionStartResponse",
    "QuestionTypeSummarySchema",
    "VocabularyAnswerRequest",
    "VocabularyAnswerResponse",
]
