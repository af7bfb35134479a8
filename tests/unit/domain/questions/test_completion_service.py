"""Tests for QuestionCompletionService."""

import pytest

from vocabcoach.domain.questions.services.completion_service import QuestionCompletionService


@pytest.fixture
def service() -> QuestionCompletionService:
    return QuestionCompletionService()


MC = ["What is the main idea?", "Who is the author?"]
OE = ["Explain the conclusion."]
VOCAB = ["resilient", "ubiquitous"]


def _complete_answers() -> tuple[dict[str, str], dict[str, str], dict[str, str]]:
    return (
        {q: "choice_a" for q in MC},
        {q: "Because the data supports it." for q in OE},
        {w: "able to recover" for w in VOCAB},
    )


class TestAllQuestionsCompleted:
    def test_everything_answered(self, service: QuestionCompletionService) -> None:
        mc, oe, vocab = _complete_answers()
        assert service.all_questions_completed(MC, OE, VOCAB, mc, oe, vocab)

    def test_missing_multiple_choice_selection(self, service: QuestionCompletionService) -> None:
        mc, oe, vocab = _complete_answers()
        del mc[MC[1]]
        assert not service.all_questions_completed(MC, OE, VOCAB, mc, oe, vocab)

    def test_empty_open_ended_answer(self, service: QuestionCompletionService) -> None:
        mc, oe, vocab = _complete_answers()
        oe[OE[0]] = ""
        assert not service.all_questions_completed(MC, OE, VOCAB, mc, oe, vocab)

    def test_missing_vocabulary_answer(self, service: QuestionCompletionService) -> None:
        mc, oe, vocab = _complete_answers()
        del vocab["ubiquitous"]
        assert not service.all_questions_completed(MC, OE, VOCAB, mc, oe, vocab)

    def test_no_questions_at_all(self, service: QuestionCompletionService) -> None:
        assert service.all_questions_completed([], [], [], {}, {}, {})
