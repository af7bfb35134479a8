import structlog
from pydantic_ai.exceptions import AgentRunError

from vocabcoach.application.questions.protocols.scoring_oracle import EvaluationResult
from vocabcoach.infrastructure.ai.ai_agents import get_grading_agent

logger = structlog.get_logger(__name__)


class AIGradingService:
    async def evaluate_open_ended_answer(
        self,
        article: str,
        question_text: str,
        expected_answer: str,
        student_answer: str,
    ) -> EvaluationResult | None:
        agent = get_grading_agent()
        prompt = (
            f"Article: {article}\n\n"
            f"Question: {question_text}\n\n"
            f"Expected Answer: {expected_answer}\n\n"
            f"Student's Answer: {student_answer}"
        )
        try:
            result = await agent.run(prompt)
        except AgentRunError as e:
            logger.warning("ai_grading_failed", error=str(e), question=question_text)
            return None
        return EvaluationResult(
            score=result.output.score,
            feedback=result.output.feedback,
            reasoning=result.output.reasoning,
        )
