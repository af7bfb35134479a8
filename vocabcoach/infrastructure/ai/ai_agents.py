from pydantic import BaseModel, Field
from pydantic_ai import Agent

from vocabcoach.infrastructure.ai.ai_model import get_ai_model


class GradingOutput(BaseModel):
    score: float = Field(ge=0.0, le=1.0)
    feedback: str
    reasoning: str


def get_grading_agent() -> Agent[None, GradingOutput]:
    return Agent(
        get_ai_model(),
        output_type=GradingOutput,
        instructions="""
        You are an expert English teacher evaluating a student's answer to a reading
        comprehension question about an article.

        Compare the student's answer with the expected answer and consider:
        1. Does the student's answer address the key points of the expected answer?
        2. Is the answer factually accurate according to the article?
        3. Is the answer complete and well-formed?

        Respond with:
        score: a number from 0.0 (wrong or empty) to 1.0 (fully correct)
        feedback: one or two encouraging sentences addressed to the student
        reasoning: a short explanation of how you arrived at the score
        """,
    )
