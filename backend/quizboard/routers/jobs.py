from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from quizboard.core.config import settings
from quizboard.core.rate_limit import rate_limit
from quizboard.db.session import get_db
from quizboard.schemas.job import JobPostingCreate, JobPostingRecord
from quizboard.services.jobs import JobStore

router = APIRouter(prefix="/api/jobs", tags=["jobs"])


@router.get("", response_model=list[JobPostingRecord])
def list_jobs(db: Session = Depends(get_db)):
    return JobStore(db).list()


@router.post("", response_model=JobPostingRecord, status_code=201)
def create_job(
    body: JobPostingCreate,
    db: Session = Depends(get_db),
    _: object = rate_limit(
        key_prefix="job_create", limit=lambda: settings.rate_limit_writes_per_minute, window_seconds=60
    ),
):
    return JobStore(db).create(body)


@router.get("/{job_id}", response_model=JobPostingRecord)
def get_job(job_id: str, db: Session = Depends(get_db)):
    return JobStore(db).get_by_id(job_id)
