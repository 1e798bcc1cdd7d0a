from datetime import datetime, timezone

import pytest

from quizboard.core.errors import LengthMismatch
from quizboard.schemas.quiz import QuestionRecord, QuizRecord, ScoreResult
from quizboard.services.scoring import score


def _quiz(*correct: str) -> QuizRecord:
    options = ["A", "B", "C", "D"]
    return QuizRecord(
        id="00000000-0000-0000-0000-000000000001",
        title=None,
        created_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
        questions=[QuestionRecord(text=f"Q{i}", options=options, correct_option=c) for i, c in enumerate(correct)],
    )


def test_single_question_examples():
    quiz = _quiz("B")
    assert score(quiz, ["B"]) == ScoreResult(score=1, total=1)
    assert score(quiz, ["A"]) == ScoreResult(score=0, total=1)


def test_all_correct_scores_full_marks():
    quiz = _quiz("A", "C", "D", "B", "A")
    answers = [q.correct_option for q in quiz.questions]
    assert score(quiz, answers) == ScoreResult(score=5, total=5)


def test_all_wrong_scores_zero():
    quiz = _quiz("A", "C", "D")
    answers = [next(o for o in q.options if o != q.correct_option) for q in quiz.questions]
    assert score(quiz, answers) == ScoreResult(score=0, total=3)


def test_partial_answers_count_by_position():
    quiz = _quiz("A", "B", "C", "D")
    assert score(quiz, ["A", "A", "C", "C"]).score == 2


def test_comparison_is_case_sensitive():
    quiz = _quiz("B")
    assert score(quiz, ["b"]).score == 0
    assert score(quiz, [" B"]).score == 0


def test_score_is_deterministic():
    quiz = _quiz("A", "B", "C")
    answers = ["A", "C", "C"]
    results = {score(quiz, answers).model_dump_json() for _ in range(10)}
    assert len(results) == 1


@pytest.mark.parametrize("answers", [[], ["A"], ["A", "B", "C"]])
def test_length_mismatch_is_rejected(answers):
    quiz = _quiz("A", "B")
    with pytest.raises(LengthMismatch) as exc:
        score(quiz, answers)
    assert exc.value.expected == 2
    assert exc.value.actual == len(answers)
    assert exc.value.code == "length_mismatch"
