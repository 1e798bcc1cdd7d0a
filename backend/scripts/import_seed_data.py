from __future__ import annotations

import argparse
import json
import pathlib
import sys

# Ensure imports work when running from any CWD without an installed package.
_HERE = pathlib.Path(__file__).resolve()
_BACKEND_ROOT = _HERE.parents[1]
sys.path.insert(0, str(_BACKEND_ROOT))

from quizboard.core.config import settings
from quizboard.db.session import Database
from quizboard.services.jobs import JobStore
from quizboard.services.quizzes import QuizStore


def run(*, path: pathlib.Path, database: Database) -> dict[str, int]:
    """Load quizzes and job postings from a JSON file.

    Expected shape::

        {"quizzes": [{"title": "...", "questions": [...]}],
         "jobs": [{"title": "...", "company": "...", "location": "...", "description": "..."}]}
    """
    data = json.loads(path.read_text(encoding="utf-8"))

    counts = {"quizzes": 0, "jobs": 0}
    db = database.session()
    try:
        # One transaction for the whole file: an invalid item leaves nothing behind.
        quiz_store = QuizStore(db)
        for item in data.get("quizzes") or []:
            quiz_store.create(item.get("questions") or [], title=item.get("title"), commit=False)
            counts["quizzes"] += 1

        job_store = JobStore(db)
        for item in data.get("jobs") or []:
            job_store.create(item, commit=False)
            counts["jobs"] += 1

        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
    return counts


def main() -> None:
    p = argparse.ArgumentParser(description="Import quizzes and job postings from a JSON file")
    p.add_argument("path", help="Path to the JSON seed file")
    p.add_argument("--database-url", default=None, help="Override DATABASE_URL")
    p.add_argument("--create-schema", action="store_true", help="Create tables before importing")
    args = p.parse_args()

    database = Database(args.database_url or settings.database_url)
    try:
        if args.create_schema:
            database.create_schema()
        counts = run(path=pathlib.Path(args.path), database=database)
    finally:
        database.close()

    print(f"OK: imported {counts['quizzes']} quizzes and {counts['jobs']} job postings from {args.path}")


if __name__ == "__main__":
    main()
