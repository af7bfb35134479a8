"""Domain service deciding whether every question of a session has an answer."""

from collections.abc import Iterable, Mapping


class QuestionCompletionService:
    """
    Checks that a session is ready to submit.

    Questions are keyed by their text and vocabulary words by the word
    itself, matching how answers are collected while the quiz is taken.
    """

    def all_questions_completed(
        self,
        multiple_choice_questions: Iterable[str],
        open_ended_questions: Iterable[str],
        vocabulary_words: Iterable[str],
        selected_answers: Mapping[str, str],
        open_ended_answers: Mapping[str, str],
        vocabulary_answers: Mapping[str, str],
    ) -> bool:
        """
        True iff every question has been answered.

        A multiple-choice question only needs a recorded selection; open-ended
        questions and vocabulary words need a non-empty answer.
        """
        multiple_choice_completed = all(
            question in selected_answers for question in multiple_choice_questions
        )
        open_ended_completed = all(
            open_ended_answers.get(question, "") != "" for question in open_ended_questions
        )
        vocabulary_completed = all(
            vocabulary_answers.get(word, "") != "" for word in vocabulary_words
        )
        return multiple_choice_completed and open_ended_completed and vocabulary_completed
