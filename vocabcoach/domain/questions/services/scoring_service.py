"""
Domain service for session point totals.

This is a pure domain service with no infrastructure dependencies.
"""

import math
from collections.abc import Sequence

from vocabcoach.domain.questions.value_objects import (
    OPEN_ENDED_CORRECTNESS_THRESHOLD,
    QuestionCounts,
    QuestionType,
    QuestionTypeSummary,
)

MULTIPLE_CHOICE_POINTS = QuestionType.MULTIPLE_CHOICE.points_per_question
OPEN_ENDED_POINTS = QuestionType.OPEN_ENDED.points_per_question
VOCABULARY_POINTS = QuestionType.VOCABULARY.points_per_question


class SessionScoringService:
    """
    Computes earned points, possible points and accuracy.

    Points per question: multiple choice 8, open-ended 10 (scaled by the
    oracle score), vocabulary 2.
    """

    def points_earned(
        self,
        multiple_choice_correct: int,
        open_ended_scores: Sequence[float],
        vocabulary_correct: int,
    ) -> int:
        """
        Total points earned.

        Open-ended points are the score sum times ten, truncated to an integer.
        """
        return (
            multiple_choice_correct * MULTIPLE_CHOICE_POINTS
            + self.open_ended_points(open_ended_scores)
            + vocabulary_correct * VOCABULARY_POINTS
        )

    def open_ended_points(self, open_ended_scores: Sequence[float]) -> int:
        # Round away binary float noise (0.3 + 0.6 == 0.8999...) before truncating
        raw = math.fsum(open_ended_scores) * OPEN_ENDED_POINTS
        return math.floor(round(raw, 9))

    def points_possible(
        self, multiple_choice_count: int, open_ended_count: int, vocabulary_count: int
    ) -> int:
        """Maximum points for the given number of questions of each type."""
        return (
            multiple_choice_count * MULTIPLE_CHOICE_POINTS
            + open_ended_count * OPEN_ENDED_POINTS
            + vocabulary_count * VOCABULARY_POINTS
        )

    def points_possible_for(self, counts: QuestionCounts) -> int:
        return self.points_possible(counts.multiple_choice, counts.open_ended, counts.vocabulary)

    def legacy_points_possible(self, total_question_count: int) -> int:
        """
        Approximate maximum points from a bare question total.

        Deprecated: assumes every question is worth 8 points. Use
        points_possible with per-type counts whenever they are known.
        """
        return total_question_count * MULTIPLE_CHOICE_POINTS

    def accuracy(self, earned_points: int, possible_points: int) -> float:
        """Earned over possible points, or 0.0 when nothing was possible."""
        if possible_points <= 0:
            return 0.0
        return min(1.0, max(0.0, earned_points / possible_points))

    def summarize(
        self,
        counts: QuestionCounts,
        multiple_choice_correct: int,
        open_ended_scores: Sequence[float],
        vocabulary_correct: int,
    ) -> dict[QuestionType, QuestionTypeSummary]:
        """
        Build the per-category breakdown for a finished session.

        Categories with no questions are left out.
        """
        open_ended_correct = sum(
            1 for score in open_ended_scores if score > OPEN_ENDED_CORRECTNESS_THRESHOLD
        )
        earned = {
            QuestionType.MULTIPLE_CHOICE: multiple_choice_correct * MULTIPLE_CHOICE_POINTS,
            QuestionType.OPEN_ENDED: self.open_ended_points(open_ended_scores),
            QuestionType.VOCABULARY: vocabulary_correct * VOCABULARY_POINTS,
        }
        correct = {
            QuestionType.MULTIPLE_CHOICE: multiple_choice_correct,
            QuestionType.OPEN_ENDED: open_ended_correct,
            QuestionType.VOCABULARY: vocabulary_correct,
        }

        summaries: dict[QuestionType, QuestionTypeSummary] = {}
        for question_type in QuestionType:
            total = counts.for_type(question_type)
            if total == 0:
                continue
            summaries[question_type] = QuestionTypeSummary(
                question_type=question_type,
                total_questions=total,
                correct_answers=correct[question_type],
                accuracy=min(1.0, correct[question_type] / total),
                possible_points=total * question_type.points_per_question,
                earned_points=earned[question_type],
            )
        return summaries
