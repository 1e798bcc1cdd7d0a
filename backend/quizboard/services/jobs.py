from __future__ import annotations

import logging
import uuid
from collections.abc import Mapping

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.orm import Session

from quizboard.core.errors import NotFound, ValidationFailed
from quizboard.models.job import JobPosting
from quizboard.schemas.job import JobPostingCreate, JobPostingRecord
from quizboard.services._records import as_aware, as_uuid, utcnow

log = logging.getLogger(__name__)


def _job_record(job: JobPosting) -> JobPostingRecord:
    return JobPostingRecord(
        id=str(job.id),
        title=job.title,
        description=job.description,
        company=job.company,
        location=job.location,
        created_at=as_aware(job.created_at),
    )


class JobStore:
    def __init__(self, db: Session):
        self.db = db

    def create(self, fields: JobPostingCreate | Mapping, *, commit: bool = True) -> JobPostingRecord:
        if not isinstance(fields, JobPostingCreate):
            try:
                fields = JobPostingCreate.model_validate(fields)
            except ValidationError as e:
                raise ValidationFailed(f"invalid job posting: {e.errors()[0].get('msg', 'invalid')}") from e

        job = JobPosting(
            id=uuid.uuid4(),
            title=fields.title,
            description=fields.description,
            company=fields.company,
            location=fields.location,
            created_at=utcnow(),
        )
        self.db.add(job)
        self.db.flush()

        record = _job_record(job)
        if commit:
            self.db.commit()

        log.info("job posting created id=%s company=%s", record.id, record.company)
        return record

    def get_by_id(self, job_id) -> JobPostingRecord:
        uid = as_uuid(job_id)
        if uid is None:
            raise NotFound("job posting not found")

        job = self.db.scalar(select(JobPosting).where(JobPosting.id == uid))
        if job is None:
            raise NotFound("job posting not found")
        return _job_record(job)

    def list(self) -> list[JobPostingRecord]:
        jobs = self.db.scalars(select(JobPosting).order_by(JobPosting.created_at.desc())).all()
        return [_job_record(j) for j in jobs]
