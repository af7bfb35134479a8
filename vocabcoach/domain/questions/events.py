"""Domain events recorded by the QuestionSession aggregate."""

from dataclasses import dataclass

from vocabcoach.domain.common.domain_event import DomainEvent
from vocabcoach.domain.common.value_objects import QuestionSessionId


@dataclass(frozen=True)
class QuestionSessionStarted(DomainEvent):
    session_id: QuestionSessionId


@dataclass(frozen=True)
class MultipleChoiceAnswerTracked(DomainEvent):
    session_id: QuestionSessionId
    question_number: int
    is_correct: bool
    correct_count: int


@dataclass(frozen=True)
class OpenEndedAnswerTracked(DomainEvent):
    session_id: QuestionSessionId
    score: float
    score_count: int


@dataclass(frozen=True)
class OpenEndedResponseRecorded(DomainEvent):
    session_id: QuestionSessionId
    question_number: int
    is_correct: bool


@dataclass(frozen=True)
class VocabularyAnswerTracked(DomainEvent):
    session_id: QuestionSessionId
    is_correct: bool
    correct_count: int


@dataclass(frozen=True)
class MultipleChoiceSectionCompleted(DomainEvent):
    session_id: QuestionSessionId
    response_count: int


@dataclass(frozen=True)
class QuestionSessionFinished(DomainEvent):
    session_id: QuestionSessionId
    earned_points: int
    possible_points: int
    accuracy: float
