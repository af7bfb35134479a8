"""
QuestionSession aggregate root.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from vocabcoach.domain.common.aggregate_root import AggregateRoot
from vocabcoach.domain.common.exceptions import ValidationError
from vocabcoach.domain.common.value_objects import ArticleId, QuestionSessionId, UserId
from vocabcoach.domain.questions.entities.question_responses import (
    MultipleChoiceResponse,
    OpenEndedResponse,
)
from vocabcoach.domain.questions.events import (
    MultipleChoiceAnswerTracked,
    MultipleChoiceSectionCompleted,
    OpenEndedAnswerTracked,
    OpenEndedResponseRecorded,
    QuestionSessionFinished,
    QuestionSessionStarted,
    VocabularyAnswerTracked,
)
from vocabcoach.domain.questions.exceptions import (
    DuplicateQuestionNumberError,
    SessionAlreadyFinishedError,
)
from vocabcoach.domain.questions.services.scoring_service import SessionScoringService
from vocabcoach.domain.questions.value_objects import QuestionType, QuestionTypeSummary

_scoring = SessionScoringService()


@dataclass(eq=False)
class QuestionSession(AggregateRoot[QuestionSessionId]):
    """
    Question session aggregate root.

    One attempt at an article's question set. Lives in memory while the
    student answers and is mirrored to a session document in the store.

    Lifecycle: open -> multiple-choice section locked -> finished.

    Business Rules:
    - Question numbers are unique within each response category
    - Once the multiple-choice section is completed no more multiple-choice
      answers are tracked
    - Accuracy is earned / possible points, 0.0 when nothing is possible
    - A session is finished at most once
    """

    # Identity
    id: QuestionSessionId
    user_id: UserId | None
    created_at: datetime

    # Final fields, filled in by finish()
    article_id: ArticleId | None = None
    completed: bool = False
    completed_at: datetime | None = None
    total_points: int = 0
    earned_points: int = 0
    accuracy: float = 0.0
    total_time_spent: int = 0
    summaries: dict[QuestionType, QuestionTypeSummary] = field(default_factory=dict)

    # Running counters
    multiple_choice_correct: int = 0
    vocabulary_correct: int = 0
    open_ended_scores: list[float] = field(default_factory=list)
    multiple_choice_section_completed: bool = False

    # Buffered responses, flushed to the store in batches
    multiple_choice_responses: list[MultipleChoiceResponse] = field(default_factory=list)
    open_ended_responses: list[OpenEndedResponse] = field(default_factory=list)

    @classmethod
    def start(
        cls,
        user_id: UserId | None,
        session_id: QuestionSessionId | None = None,
        started_at: datetime | None = None,
    ) -> "QuestionSession":
        """Factory method for a fresh session with all counters at zero."""
        session = cls(
            id=session_id or QuestionSessionId.generate(),
            user_id=user_id,
            created_at=started_at or datetime.now(UTC),
        )
        session._record_event(QuestionSessionStarted(session_id=session.id))
        return session

    def track_multiple_choice(self, response: MultipleChoiceResponse) -> bool:
        """
        Record a multiple-choice answer.

        Returns:
            False when the section is already completed and nothing changed

        Raises:
            DuplicateQuestionNumberError: If the question number is already recorded
        """
        if self.multiple_choice_section_completed:
            return False
        if any(r.question_number == response.question_number for r in self.multiple_choice_responses):
            raise DuplicateQuestionNumberError("multiple_choice", response.question_number)

        if response.is_correct:
            self.multiple_choice_correct += 1
        self.multiple_choice_responses.append(response)
        self._record_event(
            MultipleChoiceAnswerTracked(
                session_id=self.id,
                question_number=response.question_number,
                is_correct=response.is_correct,
                correct_count=self.multiple_choice_correct,
            )
        )
        return True

    def track_open_ended_score(self, score: float) -> None:
        if not 0.0 <= score <= 1.0:
            raise ValidationError("Score must be between 0 and 1", field="score", value=score)
        self.open_ended_scores.append(score)
        self._record_event(
            OpenEndedAnswerTracked(
                session_id=self.id, score=score, score_count=len(self.open_ended_scores)
            )
        )

    def add_open_ended_response(self, response: OpenEndedResponse) -> None:
        """
        Buffer a graded open-ended response.

        Raises:
            DuplicateQuestionNumberError: If the question number is already recorded
        """
        if any(r.question_number == response.question_number for r in self.open_ended_responses):
            raise DuplicateQuestionNumberError("open_ended", response.question_number)
        self.open_ended_responses.append(response)
        self._record_event(
            OpenEndedResponseRecorded(
                session_id=self.id,
                question_number=response.question_number,
                is_correct=response.is_correct,
            )
        )

    def track_vocabulary(self, is_correct: bool) -> None:
        if is_correct:
            self.vocabulary_correct += 1
        self._record_event(
            VocabularyAnswerTracked(
                session_id=self.id,
                is_correct=is_correct,
                correct_count=self.vocabulary_correct,
            )
        )

    def complete_multiple_choice_section(self) -> bool:
        """
        Lock the multiple-choice section.

        Returns:
            True on the first call, False on every later call
        """
        if self.multiple_choice_section_completed:
            return False
        self.multiple_choice_section_completed = True
        self._record_event(
            MultipleChoiceSectionCompleted(
                session_id=self.id, response_count=len(self.multiple_choice_responses)
            )
        )
        return True

    def calculate_earned_points(self) -> int:
        return _scoring.points_earned(
            self.multiple_choice_correct, self.open_ended_scores, self.vocabulary_correct
        )

    def finish(
        self,
        article_id: ArticleId,
        possible_points: int,
        finished_at: datetime | None = None,
        summaries: dict[QuestionType, QuestionTypeSummary] | None = None,
    ) -> None:
        """
        Finalize the session in place.

        Args:
            article_id: Article the questions belong to
            possible_points: Maximum points for the session
            finished_at: Completion time, defaults to now
            summaries: Optional per-category breakdown

        Raises:
            SessionAlreadyFinishedError: If the session was already finished
        """
        if self.completed:
            raise SessionAlreadyFinishedError(self.id.value)
        if possible_points < 0:
            raise ValidationError("Possible points cannot be negative", field="possible_points")

        finished_at = finished_at or datetime.now(UTC)
        self.article_id = article_id
        self.completed_at = finished_at
        self.total_time_spent = max(0, int((finished_at - self.created_at).total_seconds()))
        self.earned_points = self.calculate_earned_points()
        self.total_points = possible_points
        self.accuracy = _scoring.accuracy(self.earned_points, possible_points)
        self.summaries = dict(summaries or {})
        self.completed = True

        self._record_event(
            QuestionSessionFinished(
                session_id=self.id,
                earned_points=self.earned_points,
                possible_points=self.total_points,
                accuracy=self.accuracy,
            )
        )

    def provisional_document(self) -> dict[str, Any]:
        """The record written when the session starts."""
        return {
            "session_id": self.id.value,
            "user_id": self.user_id.value if self.user_id else None,
            "total_time_spent": 0,
            "completed": False,
            "total_points": 0,
            "earned_points": 0,
            "accuracy": 0.0,
            "created_at": self.created_at.isoformat(),
        }

    def to_document(self) -> dict[str, Any]:
        """The full session record, as merged into the store on finish."""
        return {
            **self.provisional_document(),
            "article_id": self.article_id.value if self.article_id else None,
            "total_time_spent": self.total_time_spent,
            "completed": self.completed,
            "total_points": self.total_points,
            "earned_points": self.earned_points,
            "accuracy": self.accuracy,
            "multiple_choice_correct": self.multiple_choice_correct,
            "open_ended_scores": list(self.open_ended_scores),
            "vocabulary_correct": self.vocabulary_correct,
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "summaries": {
                question_type.value: summary.to_document()
                for question_type, summary in self.summaries.items()
            },
        }

    @classmethod
    def from_document(cls, data: dict[str, Any]) -> "QuestionSession":
        """Reconstitute a session record read back from the store."""
        user_id = data.get("user_id")
        article_id = data.get("article_id")
        completed_at = data.get("completed_at")
        return cls(
            id=QuestionSessionId(data["session_id"]),
            user_id=UserId(user_id) if user_id else None,
            created_at=datetime.fromisoformat(data["created_at"]),
            article_id=ArticleId(article_id) if article_id else None,
            completed=bool(data.get("completed", False)),
            completed_at=datetime.fromisoformat(completed_at) if completed_at else None,
            total_points=int(data.get("total_points", 0)),
            earned_points=int(data.get("earned_points", 0)),
            accuracy=float(data.get("accuracy", 0.0)),
            total_time_spent=int(data.get("total_time_spent", 0)),
            summaries={
                QuestionType(key): QuestionTypeSummary.from_document(value)
                for key, value in (data.get("summaries") or {}).items()
            },
            multiple_choice_correct=int(data.get("multiple_choice_correct", 0)),
            vocabulary_correct=int(data.get("vocabulary_correct", 0)),
            open_ended_scores=[float(s) for s in data.get("open_ended_scores", [])],
            multiple_choice_section_completed=bool(data.get("completed", False)),
        )
