"""create job postings

Revision ID: 0002
Revises: 0001
Create Date: 2026-10-18

"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


revision = "0002"
down_revision = "0001"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "job_postings",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True, nullable=False),
        sa.Column("title", sa.String(length=400), nullable=False),
        sa.Column("description", sa.String(), nullable=False, server_default=""),
        sa.Column("company", sa.String(length=400), nullable=False),
        sa.Column("location", sa.String(length=400), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
    )
    op.create_index("ix_job_postings_title", "job_postings", ["title"], unique=False)
    op.create_index("ix_job_postings_company", "job_postings", ["company"], unique=False)
    op.create_index("ix_job_postings_created_at", "job_postings", ["created_at"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_job_postings_created_at", table_name="job_postings")
    op.drop_index("ix_job_postings_company", table_name="job_postings")
    op.drop_index("ix_job_postings_title", table_name="job_postings")
    op.drop_table("job_postings")
