from __future__ import annotations

from collections.abc import Sequence

from quizboard.core.errors import LengthMismatch
from quizboard.schemas.quiz import QuizRecord, ScoreResult


def score(quiz: QuizRecord, answers: Sequence[str]) -> ScoreResult:
    """Grade ``answers`` against the stored answer key of ``quiz``.

    One point per position where the answer equals the correct option
    exactly (case-sensitive). The answer sequence must line up with the
    questions one to one, otherwise ``LengthMismatch`` is raised.
    """
    questions = quiz.questions
    if len(answers) != len(questions):
        raise LengthMismatch(expected=len(questions), actual=len(answers))

    correct = 0
    for question, answer in zip(questions, answers):
        if answer == question.correct_option:
            correct += 1

    return ScoreResult(score=correct, total=len(questions))
