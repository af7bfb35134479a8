"""Tests for keyword-overlap grading."""

import pytest

from vocabcoach.domain.questions.services.answer_matching_service import AnswerMatchingService


@pytest.fixture
def service() -> AnswerMatchingService:
    return AnswerMatchingService()


class TestKeywords:
    def test_only_tokens_longer_than_three_characters(self, service: AnswerMatchingService) -> None:
        assert service.keywords("plants use photosynthesis energy") == {
            "plants",
            "photosynthesis",
            "energy",
        }

    def test_keywords_are_lowercased_and_trimmed(self, service: AnswerMatchingService) -> None:
        assert service.keywords("  Climate CHANGE  ") == {"climate", "change"}


class TestIsCorrect:
    def test_expected_answer_without_keywords_is_incorrect(
        self, service: AnswerMatchingService
    ) -> None:
        assert service.keyword_overlap("the cat sat on mat", "The Cat Sat") is None
        assert service.is_correct("the cat sat on mat", "The Cat Sat") is False

    def test_empty_expected_answer_is_incorrect(self, service: AnswerMatchingService) -> None:
        assert service.is_correct("anything at all", "") is False

    def test_enough_overlap_is_correct(self, service: AnswerMatchingService) -> None:
        # 2 of 3 keywords ("photosynthesis", "energy") is above the 0.6 threshold
        assert service.is_correct(
            "photosynthesis converts light energy", "plants use photosynthesis energy"
        )

    def test_full_overlap(self, service: AnswerMatchingService) -> None:
        assert service.keyword_overlap(
            "photosynthesis energy", "photosynthesis energy"
        ) == pytest.approx(1.0)

    def test_overlap_below_threshold_is_incorrect(self, service: AnswerMatchingService) -> None:
        assert service.keyword_overlap("rain", "rain falls from clouds") == pytest.approx(0.25)
        assert service.is_correct("rain", "rain falls from clouds") is False

    def test_threshold_is_inclusive(self, service: AnswerMatchingService) -> None:
        expected = "alpha bravo charlie delta echoes"
        assert service.is_correct("alpha bravo charlie", expected) is True
        assert service.is_correct("alpha bravo", expected) is False

    def test_case_insensitive(self, service: AnswerMatchingService) -> None:
        assert service.is_correct("GLOBAL WARMING", "global warming")

    def test_tokens_must_match_exactly(self, service: AnswerMatchingService) -> None:
        # Punctuation stays attached to the token
        assert service.is_correct("warming.", "warming") is False
