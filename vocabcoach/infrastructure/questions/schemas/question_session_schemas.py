"""Pydantic schemas for Question Session API request/response validation."""

from datetime import datetime as dt

from pydantic import BaseModel, Field

from vocabcoach.domain.questions.value_objects import QuestionType


class QuestionSessionStartRequest(BaseModel):
    """Schema for starting a question session."""

    session_id: str | None = Field(
        None, min_length=1, description="Client-chosen session id, generated when omitted"
    )


class QuestionSessionStartResponse(BaseModel):
    session_id: str
    persisted: bool = Field(..., description="Whether the provisional record was stored")


class MultipleChoiceAnswerRequest(BaseModel):
    """Schema for one answered multiple-choice question."""

    question_number: int = Field(..., ge=1)
    question_text: str
    student_choice: str = Field(..., min_length=1, description="Identifier of the chosen option")
    correct_choice: str = Field(..., min_length=1, description="Identifier of the correct option")
    student_choice_text: str = ""
    correct_choice_text: str = ""
    is_correct: bool


class MultipleChoiceAnswerResponse(BaseModel):
    tracked: bool = Field(..., description="False once the multiple-choice section is locked")
    multiple_choice_correct: int
    multiple_choice_answered: int


class MultipleChoiceSectionResponse(BaseModel):
    saved_count: int
    persisted: bool


class OpenEndedEvaluationRequest(BaseModel):
    """Schema for grading one open-ended answer."""

    article_id: str | None = Field(
        None, description="When given, the graded response is saved immediately"
    )
    article: str
    question_number: int = Field(..., ge=1)
    question_text: str
    expected_answer: str
    student_answer: str


class OpenEndedEvaluationResponse(BaseModel):
    is_correct: bool
    graded: bool = Field(..., description="False when no grade could be produced")
    score: float | None = None
    feedback: str | None = None
    reasoning: str | None = None


class VocabularyAnswerRequest(BaseModel):
    is_correct: bool


class VocabularyAnswerResponse(BaseModel):
    vocabulary_correct: int


class QuestionCountsSchema(BaseModel):
    multiple_choice: int = Field(0, ge=0)
    open_ended: int = Field(0, ge=0)
    vocabulary: int = Field(0, ge=0)


class QuestionSessionFinishRequest(BaseModel):
    """
    Schema for finishing a question session.

    ``question_counts`` gives exact possible points. ``total_question_count``
    is accepted for older clients and assumes eight points per question.
    """

    article_id: str = Field(..., min_length=1)
    question_counts: QuestionCountsSchema | None = None
    total_question_count: int | None = Field(None, ge=0)


class QuestionTypeSummarySchema(BaseModel):
    question_type: QuestionType
    total_questions: int
    correct_answers: int
    accuracy: float
    possible_points: int
    earned_points: int


class QuestionSessionSchema(BaseModel):
    """Schema for a question session record."""

    session_id: str
    article_id: str | None
    completed: bool
    total_points: int
    earned_points: int
    accuracy: float = Field(..., ge=0.0, le=1.0)
    total_time_spent: int = Field(..., description="Seconds between start and finish")
    multiple_choice_correct: int
    vocabulary_correct: int
    open_ended_scores: list[float]
    created_at: dt
    completed_at: dt | None
    summaries: list[QuestionTypeSummarySchema] = Field(default_factory=list)


class QuestionSessionFinishResponse(BaseModel):
    session: QuestionSessionSchema
    persisted: bool


class MultipleChoiceResponseSchema(BaseModel):
    question_number: int
    question_text: str
    student_answer: str
    student_answer_text: str
    correct_answer: str
    correct_answer_text: str
    is_correct: bool
    timestamp: dt


class OpenEndedResponseSchema(BaseModel):
    question_number: int
    question_text: str
    student_answer: str
    feedback: str
    reasoning: str
    score: float
    is_correct: bool
    timestamp: dt


class QuestionSessionResultsResponse(BaseModel):
    session: QuestionSessionSchema
    multiple_choice_responses: list[MultipleChoiceResponseSchema]
    open_ended_responses: list[OpenEndedResponseSchema]


class QuestionSessionsResponse(BaseModel):
    sessions: list[QuestionSessionSchema]
