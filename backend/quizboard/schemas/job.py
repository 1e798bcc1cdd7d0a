from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

# Matches String(400) on job_postings.title/company/location.
MAX_FIELD_LENGTH = 400


class JobPostingCreate(BaseModel):
    title: str = Field(max_length=MAX_FIELD_LENGTH)
    description: str = ""
    company: str = Field(max_length=MAX_FIELD_LENGTH)
    location: str = Field(max_length=MAX_FIELD_LENGTH)

    @field_validator("title", "company", "location")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not (v or "").strip():
            raise ValueError("must not be blank")
        return v


class JobPostingRecord(BaseModel):
    id: str
    title: str
    description: str
    company: str
    location: str
    created_at: datetime
