from dataclasses import dataclass

from ..entity import EntityId


@dataclass(frozen=True)
class UserId(EntityId):
    """Strongly-typed user identifier issued by the identity provider."""


@dataclass(frozen=True)
class QuestionSessionId(EntityId):
    """Strongly-typed question session identifier (document key)."""


@dataclass(frozen=True)
class ArticleId(EntityId):
    """Strongly-typed article identifier."""
