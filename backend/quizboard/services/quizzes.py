from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable, Mapping

from pydantic import ValidationError
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from quizboard.core.config import settings
from quizboard.core.errors import NotFound, ValidationFailed
from quizboard.models.quiz import Quiz, QuizQuestion
from quizboard.schemas.quiz import MAX_TITLE_LENGTH, QuestionIn, QuestionRecord, QuizRecord, QuizSummary
from quizboard.services._records import as_aware, as_uuid, utcnow

log = logging.getLogger(__name__)


def _coerce_question(q: QuestionIn | Mapping) -> QuestionIn:
    if isinstance(q, QuestionIn):
        return q
    try:
        return QuestionIn.model_validate(q)
    except ValidationError as e:
        raise ValidationFailed(f"invalid question: {e.errors()[0].get('msg', 'invalid')}") from e


def _quiz_record(quiz: Quiz) -> QuizRecord:
    return QuizRecord(
        id=str(quiz.id),
        title=quiz.title,
        created_at=as_aware(quiz.created_at),
        questions=[
            QuestionRecord(text=q.text, options=list(q.options or []), correct_option=q.correct_option)
            for q in sorted(quiz.questions, key=lambda x: x.position)
        ],
    )


class QuizStore:
    def __init__(self, db: Session):
        self.db = db

    def create(
        self, questions: Iterable[QuestionIn | Mapping], title: str | None = None, *, commit: bool = True
    ) -> QuizRecord:
        items = [_coerce_question(q) for q in (questions or [])]
        if not items:
            raise ValidationFailed("quiz must have at least one question")
        max_questions = int(settings.quiz_max_questions)
        if len(items) > max_questions:
            raise ValidationFailed(f"quiz must have at most {max_questions} questions")
        if title is not None and len(title) > MAX_TITLE_LENGTH:
            raise ValidationFailed(f"quiz title must be at most {MAX_TITLE_LENGTH} characters")

        quiz = Quiz(id=uuid.uuid4(), title=title, created_at=utcnow())
        quiz.questions = [
            QuizQuestion(
                id=uuid.uuid4(),
                position=i,
                text=q.text,
                options=list(q.options),
                correct_option=q.correct_option,
            )
            for i, q in enumerate(items)
        ]
        self.db.add(quiz)
        self.db.flush()

        # Built before commit so the returned copy does not depend on a reload.
        record = _quiz_record(quiz)
        if commit:
            self.db.commit()

        log.info("quiz created id=%s questions=%d", record.id, len(record.questions))
        return record

    def get_by_id(self, quiz_id) -> QuizRecord:
        uid = as_uuid(quiz_id)
        if uid is None:
            raise NotFound("quiz not found")

        quiz = self.db.scalar(select(Quiz).where(Quiz.id == uid))
        if quiz is None:
            raise NotFound("quiz not found")
        return _quiz_record(quiz)

    def list(self) -> list[QuizSummary]:
        rows = self.db.execute(
            select(Quiz, func.count(QuizQuestion.id))
            .outerjoin(QuizQuestion, QuizQuestion.quiz_id == Quiz.id)
            .group_by(Quiz.id)
            .order_by(Quiz.created_at.desc())
        ).all()
        return [
            QuizSummary(
                id=str(quiz.id),
                title=quiz.title,
                question_count=int(count or 0),
                created_at=as_aware(quiz.created_at),
            )
            for quiz, count in rows
        ]
