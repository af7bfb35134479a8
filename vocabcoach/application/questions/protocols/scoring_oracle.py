from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class EvaluationResult:
    score: float
    feedback: str
    reasoning: str


class ScoringOracleProtocol(Protocol):
    async def evaluate_open_ended_answer(
        self,
        article: str,
        question_text: str,
        expected_answer: str,
        student_answer: str,
    ) -> EvaluationResult | None:
        """Grade a free-text answer. None means no grade could be produced."""
        ...
