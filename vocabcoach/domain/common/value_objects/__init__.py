"""Common value objects shared across all domain modules."""

from .ids import ArticleId, QuestionSessionId, UserId

__all__ = [
    "ArticleId",
    "QuestionSessionId",
    "UserId",
]
