"""
Domain service for grading free-text answers without the oracle.

This is a pure domain service with no infrastructure dependencies.
"""

# Only expected-answer tokens longer than this count as keywords
KEYWORD_MIN_LENGTH = 3
KEYWORD_OVERLAP_THRESHOLD = 0.6


class AnswerMatchingService:
    """
    Keyword-overlap grading used when no scoring oracle is available.

    Both answers are trimmed and lowercased, then split on whitespace.
    Keywords are the distinct expected-answer tokens longer than three
    characters. The answer is correct when at least 60% of the keywords
    appear among the student's tokens.
    """

    def keywords(self, expected_answer: str) -> set[str]:
        return {
            token
            for token in expected_answer.strip().lower().split()
            if len(token) > KEYWORD_MIN_LENGTH
        }

    def keyword_overlap(self, user_answer: str, expected_answer: str) -> float | None:
        """
        Fraction of expected keywords present in the user answer.

        Returns:
            The fraction in [0, 1], or None when the expected answer has
            no keywords and the fraction is undefined.
        """
        keywords = self.keywords(expected_answer)
        if not keywords:
            return None
        user_tokens = set(user_answer.strip().lower().split())
        return len(keywords & user_tokens) / len(keywords)

    def is_correct(self, user_answer: str, expected_answer: str) -> bool:
        """
        Grade an answer by keyword overlap.

        An expected answer without keywords can never be matched, so the
        answer is graded incorrect.
        """
        overlap = self.keyword_overlap(user_answer, expected_answer)
        if overlap is None:
            return False
        return overlap >= KEYWORD_OVERLAP_THRESHOLD
