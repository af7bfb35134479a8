"""Tests for SessionScoringService."""

import pytest

from vocabcoach.domain.questions.services.scoring_service import SessionScoringService
from vocabcoach.domain.questions.value_objects import QuestionCounts, QuestionType


@pytest.fixture
def service() -> SessionScoringService:
    return SessionScoringService()


class TestPointsEarned:
    def test_mixed_answers(self, service: SessionScoringService) -> None:
        # 3*8 + floor(10*1.4) + 2*2
        assert service.points_earned(3, [0.5, 0.9], 2) == 42

    def test_open_ended_points_are_truncated(self, service: SessionScoringService) -> None:
        assert service.points_earned(0, [0.55], 0) == 5
        assert service.points_earned(0, [0.99, 0.99], 0) == 19

    def test_float_noise_does_not_lose_a_point(self, service: SessionScoringService) -> None:
        # 0.3 + 0.6 is 0.8999999999999999 in binary floating point
        assert service.points_earned(0, [0.3, 0.6], 0) == 9

    def test_only_sub_nanopoint_noise_is_rounded_away(
        self, service: SessionScoringService
    ) -> None:
        # 1e-10 short of 3 rounds up, 1e-6 short is truncated
        assert service.open_ended_points([0.29999999999]) == 3
        assert service.open_ended_points([0.2999999]) == 2
        assert service.open_ended_points([0.1, 0.1, 0.1]) == 3

    def test_nothing_answered(self, service: SessionScoringService) -> None:
        assert service.points_earned(0, [], 0) == 0


class TestPointsPossible:
    def test_per_category_counts(self, service: SessionScoringService) -> None:
        assert service.points_possible(5, 3, 10) == 90

    def test_from_question_counts(self, service: SessionScoringService) -> None:
        counts = QuestionCounts(multiple_choice=5, open_ended=3, vocabulary=10)
        assert service.points_possible_for(counts) == 90

    def test_legacy_estimate_uses_eight_points_per_question(
        self, service: SessionScoringService
    ) -> None:
        assert service.legacy_points_possible(18) == 144


class TestAccuracy:
    def test_zero_possible_points(self, service: SessionScoringService) -> None:
        assert service.accuracy(0, 0) == 0.0
        assert service.accuracy(12, 0) == 0.0

    def test_ratio(self, service: SessionScoringService) -> None:
        assert service.accuracy(42, 90) == pytest.approx(42 / 90)

    @pytest.mark.parametrize(("earned", "possible"), [(0, 10), (10, 10), (5, 10), (30, 10)])
    def test_always_between_zero_and_one(
        self, service: SessionScoringService, earned: int, possible: int
    ) -> None:
        assert 0.0 <= service.accuracy(earned, possible) <= 1.0


class TestSummarize:
    def test_summaries_per_question_type(self, service: SessionScoringService) -> None:
        counts = QuestionCounts(multiple_choice=4, open_ended=2, vocabulary=5)

        summaries = service.summarize(counts, 3, [0.9, 0.5], 4)

        mc = summaries[QuestionType.MULTIPLE_CHOICE]
        assert mc.correct_answers == 3
        assert mc.accuracy == pytest.approx(0.75)
        assert mc.possible_points == 32
        assert mc.earned_points == 24

        oe = summaries[QuestionType.OPEN_ENDED]
        assert oe.correct_answers == 1
        assert oe.possible_points == 20
        assert oe.earned_points == 14

        vocab = summaries[QuestionType.VOCABULARY]
        assert vocab.correct_answers == 4
        assert vocab.earned_points == 8
        assert vocab.possible_points == 10

    def test_types_without_questions_are_skipped(self, service: SessionScoringService) -> None:
        summaries = service.summarize(QuestionCounts(multiple_choice=2), 1, [], 0)
        assert list(summaries) == [QuestionType.MULTIPLE_CHOICE]

    def test_score_at_threshold_is_not_correct(self, service: SessionScoringService) -> None:
        summaries = service.summarize(QuestionCounts(open_ended=1), 0, [0.6], 0)
        assert summaries[QuestionType.OPEN_ENDED].correct_answers == 0
