"""
Answered-question records.

Responses are immutable once created. Each one is persisted as a single
document keyed by its question number inside the owning session.
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from vocabcoach.domain.common.exceptions import ValidationError
from vocabcoach.domain.common.value_object import ValueObject
from vocabcoach.domain.questions.value_objects import (
    OPEN_ENDED_CORRECTNESS_THRESHOLD,
    ChoiceOption,
)


def _validate_question_number(question_number: int) -> None:
    if question_number < 1:
        raise ValidationError(
            "Question numbers start at 1", field="question_number", value=question_number
        )


def _parse_timestamp(value: Any) -> datetime:  # noqa: ANN401
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)


@dataclass(frozen=True)
class MultipleChoiceResponse(ValueObject):
    """A student's answer to one multiple-choice question."""

    question_number: int
    question_text: str
    student_answer: ChoiceOption
    correct_answer: ChoiceOption
    is_correct: bool
    timestamp: datetime

    def __post_init__(self) -> None:
        _validate_question_number(self.question_number)

    @classmethod
    def create(
        cls,
        question_number: int,
        question_text: str,
        student_answer: ChoiceOption,
        correct_answer: ChoiceOption,
        is_correct: bool,
        timestamp: datetime | None = None,
    ) -> "MultipleChoiceResponse":
        return cls(
            question_number=question_number,
            question_text=question_text,
            student_answer=student_answer,
            correct_answer=correct_answer,
            is_correct=is_correct,
            timestamp=timestamp or datetime.now(UTC),
        )

    def to_document(self) -> dict[str, Any]:
        return {
            "question_number": self.question_number,
            "question_text": self.question_text,
            "student_answer": self.student_answer.to_document(),
            "correct_answer": self.correct_answer.to_document(),
            "is_correct": self.is_correct,
            "timestamp": self.timestamp.isoformat(),
        }

    @classmethod
    def from_document(cls, data: dict[str, Any]) -> "MultipleChoiceResponse":
        return cls(
            question_number=int(data["question_number"]),
            question_text=data["question_text"],
            student_answer=ChoiceOption.from_document(data["student_answer"]),
            correct_answer=ChoiceOption.from_document(data["correct_answer"]),
            is_correct=bool(data["is_correct"]),
            timestamp=_parse_timestamp(data["timestamp"]),
        )


@dataclass(frozen=True)
class OpenEndedResponse(ValueObject):
    """
    A student's free-text answer together with its grading.

    Business Rules:
    - Score lies in [0, 1]
    - The answer is correct exactly when the score exceeds 0.6
    """

    question_number: int
    question_text: str
    student_answer: str
    feedback: str
    reasoning: str
    score: float
    is_correct: bool
    timestamp: datetime

    def __post_init__(self) -> None:
        _validate_question_number(self.question_number)
        if not 0.0 <= self.score <= 1.0:
            raise ValidationError("Score must be between 0 and 1", field="score", value=self.score)
        if self.is_correct != (self.score > OPEN_ENDED_CORRECTNESS_THRESHOLD):
            raise ValidationError(
                "Correctness must follow the score threshold", field="is_correct"
            )

    @classmethod
    def create(
        cls,
        question_number: int,
        question_text: str,
        student_answer: str,
        feedback: str,
        reasoning: str,
        score: float,
        timestamp: datetime | None = None,
    ) -> "OpenEndedResponse":
        """Create a graded response, deriving correctness from the score."""
        return cls(
            question_number=question_number,
            question_text=question_text,
            student_answer=student_answer,
            feedback=feedback,
            reasoning=reasoning,
            score=score,
            is_correct=score > OPEN_ENDED_CORRECTNESS_THRESHOLD,
            timestamp=timestamp or datetime.now(UTC),
        )

    def to_document(self) -> dict[str, Any]:
        return {
            "question_number": self.question_number,
            "question_text": self.question_text,
            "student_answer": self.student_answer,
            "feedback": self.feedback,
            "reasoning": self.reasoning,
            "score": self.score,
            "is_correct": self.is_correct,
            "timestamp": self.timestamp.isoformat(),
        }

    @classmethod
    def from_document(cls, data: dict[str, Any]) -> "OpenEndedResponse":
        return cls(
            question_number=int(data["question_number"]),
            question_text=data["question_text"],
            student_answer=data["student_answer"],
            feedback=data.get("feedback", ""),
            reasoning=data.get("reasoning", ""),
            score=float(data["score"]),
            is_correct=bool(data["is_correct"]),
            timestamp=_parse_timestamp(data["timestamp"]),
        )
