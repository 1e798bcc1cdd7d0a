from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from quizboard.core.config import settings
from quizboard.core.rate_limit import rate_limit
from quizboard.db.session import get_db
from quizboard.schemas.quiz import (
    QuizCreateRequest,
    QuizPublic,
    QuizRecord,
    QuizSubmitRequest,
    QuizSubmitResponse,
    QuizSummary,
)
from quizboard.services.quizzes import QuizStore
from quizboard.services.scoring import score

router = APIRouter(prefix="/api/quizzes", tags=["quizzes"])


@router.post("", response_model=QuizRecord, status_code=201)
def create_quiz(
    body: QuizCreateRequest,
    db: Session = Depends(get_db),
    _: object = rate_limit(
        key_prefix="quiz_create", limit=lambda: settings.rate_limit_writes_per_minute, window_seconds=60
    ),
):
    # The creator already holds the answer key, so the full record is echoed back.
    return QuizStore(db).create(body.questions, title=body.title)


@router.get("", response_model=list[QuizSummary])
def list_quizzes(db: Session = Depends(get_db)):
    return QuizStore(db).list()


@router.get("/{quiz_id}", response_model=QuizPublic)
def get_quiz(quiz_id: str, db: Session = Depends(get_db)):
    quiz = QuizStore(db).get_by_id(quiz_id)
    return {
        "id": quiz.id,
        "title": quiz.title,
        "created_at": quiz.created_at,
        "questions": [{"text": q.text, "options": q.options} for q in quiz.questions],
    }


@router.post("/{quiz_id}/submit", response_model=QuizSubmitResponse)
def submit_quiz(
    quiz_id: str,
    body: QuizSubmitRequest,
    db: Session = Depends(get_db),
    _: object = rate_limit(
        key_prefix="quiz_submit", limit=lambda: settings.rate_limit_submits_per_minute, window_seconds=60
    ),
):
    quiz = QuizStore(db).get_by_id(quiz_id)
    result = score(quiz, body.answers)
    return QuizSubmitResponse(quiz_id=quiz.id, score=result.score, total=result.total)
