"""
Open-ended answer evaluation and point totals.

Answers are graded by the scoring oracle when one is configured and by
keyword overlap otherwise. The oracle is awaited under a timeout; a slow,
failing or silent oracle grades the answer as incorrect.
"""

import asyncio
from collections.abc import Iterable, Mapping, Sequence

import structlog

from vocabcoach.application.questions.protocols.scoring_oracle import (
    EvaluationResult,
    ScoringOracleProtocol,
)
from vocabcoach.application.questions.services.session_tracker import QuestionSessionTracker
from vocabcoach.domain.questions.entities.question_responses import OpenEndedResponse
from vocabcoach.domain.questions.services import (
    AnswerMatchingService,
    QuestionCompletionService,
    SessionScoringService,
)

logger = structlog.get_logger(__name__)

ORACLE_TIMEOUT_SECONDS = 30.0

KEYWORD_MATCH_FEEDBACK = "Your answer covers the key points of the expected answer."
KEYWORD_MISS_FEEDBACK = "Your answer is missing key points of the expected answer."


class QuestionEvaluationService:
    """Application service that grades answers and feeds the results to a tracker."""

    def __init__(
        self,
        scoring_oracle: ScoringOracleProtocol | None = None,
        oracle_timeout: float = ORACLE_TIMEOUT_SECONDS,
    ) -> None:
        """
        Initialize service.

        Args:
            scoring_oracle: Oracle used for open-ended grading, None for keyword grading only
            oracle_timeout: Seconds to wait for the oracle before giving up
        """
        self.scoring_oracle = scoring_oracle
        self.oracle_timeout = oracle_timeout
        self.answer_matching_service = AnswerMatchingService()
        self.completion_service = QuestionCompletionService()
        self.scoring_service = SessionScoringService()

    @property
    def oracle_enabled(self) -> bool:
        return self.scoring_oracle is not None

    async def evaluate_with_oracle(
        self,
        article: str,
        question_text: str,
        expected_answer: str,
        student_answer: str,
        question_number: int,
        tracker: QuestionSessionTracker,
        *,
        article_id: str | None = None,
    ) -> bool:
        """
        Grade an open-ended answer with the scoring oracle.

        On a result the graded response is added to the tracker and its
        score tracked. With ``article_id`` the response is also saved right
        away.

        Returns:
            Whether the answer is correct. False when the oracle is missing,
            times out, fails or returns nothing.
        """
        result = await self._ask_oracle(article, question_text, expected_answer, student_answer)
        if result is None:
            logger.info(
                "open_ended_answer_ungraded",
                question_number=question_number,
            )
            return False

        response = OpenEndedResponse.create(
            question_number=question_number,
            question_text=question_text,
            student_answer=student_answer,
            feedback=result.feedback,
            reasoning=result.reasoning,
            score=result.score,
        )
        self._record(tracker, response, article_id)
        return response.is_correct

    async def evaluate(
        self,
        article: str,
        question_text: str,
        expected_answer: str,
        student_answer: str,
        question_number: int,
        tracker: QuestionSessionTracker,
        *,
        article_id: str | None = None,
    ) -> bool:
        """
        Grade an open-ended answer with the oracle, or by keyword overlap without one.

        Keyword grading produces a score of 1.0 or 0.0 and is recorded on the
        tracker the same way an oracle grade is.
        """
        if self.oracle_enabled:
            return await self.evaluate_with_oracle(
                article,
                question_text,
                expected_answer,
                student_answer,
                question_number,
                tracker,
                article_id=article_id,
            )

        is_correct = self.evaluate_by_keyword_overlap(student_answer, expected_answer)
        overlap = self.answer_matching_service.keyword_overlap(student_answer, expected_answer)
        response = OpenEndedResponse.create(
            question_number=question_number,
            question_text=question_text,
            student_answer=student_answer,
            feedback=KEYWORD_MATCH_FEEDBACK if is_correct else KEYWORD_MISS_FEEDBACK,
            reasoning=(
                "Expected answer has no keywords to compare against."
                if overlap is None
                else f"{overlap:.0%} of the expected keywords were found in the answer."
            ),
            score=1.0 if is_correct else 0.0,
        )
        self._record(tracker, response, article_id)
        return is_correct

    def evaluate_by_keyword_overlap(self, user_answer: str, expected_answer: str) -> bool:
        return self.answer_matching_service.is_correct(user_answer, expected_answer)

    def all_completed(
        self,
        multiple_choice_questions: Iterable[str],
        open_ended_questions: Iterable[str],
        vocabulary_words: Iterable[str],
        multiple_choice_answers: Mapping[str, str],
        open_ended_answers: Mapping[str, str],
        vocabulary_answers: Mapping[str, str],
    ) -> bool:
        return self.completion_service.all_questions_completed(
            multiple_choice_questions,
            open_ended_questions,
            vocabulary_words,
            multiple_choice_answers,
            open_ended_answers,
            vocabulary_answers,
        )

    def points_earned(
        self,
        multiple_choice_correct: int,
        open_ended_scores: Sequence[float],
        vocabulary_correct: int,
    ) -> int:
        return self.scoring_service.points_earned(
            multiple_choice_correct, open_ended_scores, vocabulary_correct
        )

    def points_possible(
        self, multiple_choice_count: int, open_ended_count: int, vocabulary_count: int
    ) -> int:
        return self.scoring_service.points_possible(
            multiple_choice_count, open_ended_count, vocabulary_count
        )

    async def _ask_oracle(
        self,
        article: str,
        question_text: str,
        expected_answer: str,
        student_answer: str,
    ) -> EvaluationResult | None:
        if self.scoring_oracle is None:
            return None
        try:
            async with asyncio.timeout(self.oracle_timeout):
                return await self.scoring_oracle.evaluate_open_ended_answer(
                    article, question_text, expected_answer, student_answer
                )
        except TimeoutError:
            logger.warning("scoring_oracle_timed_out", timeout=self.oracle_timeout)
            return None
        except Exception as e:
            # Unreachable provider or client error, the answer stays ungraded
            logger.error("scoring_oracle_failed", error=str(e), exc_info=True)
            return None

    def _record(
        self,
        tracker: QuestionSessionTracker,
        response: OpenEndedResponse,
        article_id: str | None,
    ) -> None:
        tracker.add_open_ended_response(response)
        tracker.track_open_ended(response.score)
        if article_id is not None:
            tracker.save_open_ended_response(response, article_id)
