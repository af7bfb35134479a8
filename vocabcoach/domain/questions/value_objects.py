"""Value objects for question sessions."""

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from vocabcoach.domain.common.exceptions import ValidationError
from vocabcoach.domain.common.value_object import ValueObject

# Oracle scores strictly above this count as a correct open-ended answer
OPEN_ENDED_CORRECTNESS_THRESHOLD = 0.6


class QuestionType(StrEnum):
    """The three kinds of question that make up a session."""

    MULTIPLE_CHOICE = "multiple_choice"
    OPEN_ENDED = "open_ended"
    VOCABULARY = "vocabulary"

    @property
    def points_per_question(self) -> int:
        """Points awarded for a fully correct answer of this type."""
        return _POINTS_PER_QUESTION[self]


_POINTS_PER_QUESTION = {
    QuestionType.MULTIPLE_CHOICE: 8,
    QuestionType.OPEN_ENDED: 10,
    QuestionType.VOCABULARY: 2,
}


@dataclass(frozen=True)
class ChoiceOption(ValueObject):
    """
    A multiple-choice option as shown to the student.

    Stored as an identifier (e.g. "choice_a") plus the display text,
    which may be empty when only the identifier is known.
    """

    identifier: str
    text: str = ""

    def __post_init__(self) -> None:
        if not self.identifier or not self.identifier.strip():
            raise ValidationError("Choice identifier cannot be empty", field="identifier")

    def to_document(self) -> list[str]:
        return [self.identifier, self.text]

    @classmethod
    def from_document(cls, data: Any) -> "ChoiceOption":  # noqa: ANN401
        if isinstance(data, str):
            return cls(identifier=data)
        identifier, *rest = data
        return cls(identifier=identifier, text=rest[0] if rest else "")


@dataclass(frozen=True)
class QuestionCounts(ValueObject):
    """Number of questions of each type presented in a session."""

    multiple_choice: int = 0
    open_ended: int = 0
    vocabulary: int = 0

    def __post_init__(self) -> None:
        for name in ("multiple_choice", "open_ended", "vocabulary"):
            if getattr(self, name) < 0:
                raise ValidationError("Question count cannot be negative", field=name)

    @property
    def total(self) -> int:
        return self.multiple_choice + self.open_ended + self.vocabulary

    def for_type(self, question_type: QuestionType) -> int:
        return {
            QuestionType.MULTIPLE_CHOICE: self.multiple_choice,
            QuestionType.OPEN_ENDED: self.open_ended,
            QuestionType.VOCABULARY: self.vocabulary,
        }[question_type]


@dataclass(frozen=True)
class QuestionTypeSummary(ValueObject):
    """Per-category breakdown stored alongside a finished session."""

    question_type: QuestionType
    total_questions: int
    correct_answers: int
    accuracy: float
    possible_points: int
    earned_points: int

    def to_document(self) -> dict[str, Any]:
        return {
            "question_type": self.question_type.value,
            "total_questions": self.total_questions,
            "correct_answers": self.correct_answers,
            "accuracy": self.accuracy,
            "possible_points": self.possible_points,
            "earned_points": self.earned_points,
        }

    @classmethod
    def from_document(cls, data: dict[str, Any]) -> "QuestionTypeSummary":
        return cls(
            question_type=QuestionType(data["question_type"]),
            total_questions=int(data["total_questions"]),
            correct_answers=int(data["correct_answers"]),
            accuracy=float(data["accuracy"]),
            possible_points=int(data["possible_points"]),
            earned_points=int(data["earned_points"]),
        )
