"""Tests for AI grading of open-ended answers."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from pydantic import ValidationError
from pydantic_ai import Agent
from pydantic_ai.exceptions import UnexpectedModelBehavior
from pydantic_ai.models.openai import OpenAIChatModel
from pydantic_ai.models.test import TestModel as FakeGradingModel

from vocabcoach.application.questions.protocols.scoring_oracle import EvaluationResult
from vocabcoach.config import Settings
from vocabcoach.infrastructure.ai.ai_agents import GradingOutput
from vocabcoach.infrastructure.ai.ai_model import _get_model
from vocabcoach.infrastructure.ai.ai_service import AIGradingService

GET_AGENT = "vocabcoach.infrastructure.ai.ai_service.get_grading_agent"


class TestAIGradingService:
    @pytest.mark.asyncio
    async def test_returns_model_grade(self) -> None:
        model = FakeGradingModel(
            custom_output_args={
                "score": 0.75,
                "feedback": "Nice work, you found the main idea.",
                "reasoning": "Mentions photosynthesis but not sunlight.",
            }
        )
        agent = Agent(model, output_type=GradingOutput)

        with patch(GET_AGENT, return_value=agent):
            result = await AIGradingService().evaluate_open_ended_answer(
                "Plants make food from sunlight.",
                "How do plants get energy?",
                "Photosynthesis using sunlight",
                "Photosynthesis",
            )

        assert result == EvaluationResult(
            score=0.75,
            feedback="Nice work, you found the main idea.",
            reasoning="Mentions photosynthesis but not sunlight.",
        )

    @pytest.mark.asyncio
    async def test_prompt_includes_question_material(self) -> None:
        agent = MagicMock()
        agent.run = AsyncMock(
            return_value=MagicMock(output=GradingOutput(score=1.0, feedback="", reasoning=""))
        )

        with patch(GET_AGENT, return_value=agent):
            await AIGradingService().evaluate_open_ended_answer(
                "ARTICLE TEXT", "QUESTION TEXT", "EXPECTED TEXT", "STUDENT TEXT"
            )

        (prompt,) = agent.run.call_args.args
        for text in ("ARTICLE TEXT", "QUESTION TEXT", "EXPECTED TEXT", "STUDENT TEXT"):
            assert text in prompt

    @pytest.mark.asyncio
    async def test_agent_failure_returns_none(self) -> None:
        agent = MagicMock()
        agent.run = AsyncMock(side_effect=UnexpectedModelBehavior("malformed output"))

        with patch(GET_AGENT, return_value=agent):
            result = await AIGradingService().evaluate_open_ended_answer(
                "Article", "Question?", "Expected", "Answer"
            )

        assert result is None


class TestGradingOutput:
    def test_score_must_be_within_unit_range(self) -> None:
        with pytest.raises(ValidationError):
            GradingOutput(score=1.2, feedback="", reasoning="")


class TestModelSelection:
    def test_openai_model(self) -> None:
        settings = Settings(
            AI_PROVIDER="openai", AI_MODEL_NAME="gpt-4o-mini", OPENAI_API_KEY="sk-test"
        )
        assert isinstance(_get_model(settings), OpenAIChatModel)

    def test_missing_credentials_are_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
        with pytest.raises(ValidationError):
            Settings(_env_file=None, AI_PROVIDER="anthropic", AI_MODEL_NAME="claude")

    def test_keyword_only_by_default(self) -> None:
        assert Settings(AI_PROVIDER=None).ai_enabled is False
