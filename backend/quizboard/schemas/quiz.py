from __future__ import annotations

from datetime import datetime

from pydantic import AliasChoices, BaseModel, Field, model_validator

from quizboard.core.config import settings

# Matches String(400) on quizzes.title.
MAX_TITLE_LENGTH = 400


class QuestionIn(BaseModel):
    text: str
    options: list[str]
    correct_option: str = Field(validation_alias=AliasChoices("correct_option", "correctOption"))

    @model_validator(mode="after")
    def _check_question(self) -> "QuestionIn":
        if not (self.text or "").strip():
            raise ValueError("question text must not be blank")

        expected = int(settings.quiz_options_count)
        if len(self.options) != expected:
            raise ValueError(f"question must have exactly {expected} options, got {len(self.options)}")
        if any(not (o or "").strip() for o in self.options):
            raise ValueError("options must not be blank")
        if len(set(self.options)) != len(self.options):
            raise ValueError("options must be distinct")

        if self.correct_option not in self.options:
            raise ValueError("correct_option must be one of the options")
        return self


class QuizCreateRequest(BaseModel):
    title: str | None = Field(default=None, max_length=MAX_TITLE_LENGTH)
    questions: list[QuestionIn]


class QuestionRecord(BaseModel):
    text: str
    options: list[str]
    correct_option: str


class QuizRecord(BaseModel):
    id: str
    title: str | None
    created_at: datetime
    questions: list[QuestionRecord]


class QuestionPublic(BaseModel):
    text: str
    options: list[str]


class QuizPublic(BaseModel):
    id: str
    title: str | None
    created_at: datetime
    questions: list[QuestionPublic]


class QuizSummary(BaseModel):
    id: str
    title: str | None
    question_count: int
    created_at: datetime


class QuizSubmitRequest(BaseModel):
    answers: list[str]


class ScoreResult(BaseModel):
    score: int = Field(ge=0)
    total: int = Field(ge=0)


class QuizSubmitResponse(ScoreResult):
    quiz_id: str
