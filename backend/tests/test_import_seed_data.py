import json

import pytest

from scripts.import_seed_data import run
from quizboard.core.errors import ValidationFailed
from quizboard.services.jobs import JobStore
from quizboard.services.quizzes import QuizStore


def test_import_seed_file(tmp_path, database):
    seed = {
        "quizzes": [
            {
                "title": "Geography",
                "questions": [
                    {"text": "Capital of France?", "options": ["Paris", "Rome", "Oslo", "Bern"], "correctOption": "Paris"}
                ],
            }
        ],
        "jobs": [{"title": "Engineer", "company": "Acme", "location": "Remote", "description": "..."}],
    }
    path = tmp_path / "seed.json"
    path.write_text(json.dumps(seed), encoding="utf-8")

    counts = run(path=path, database=database)

    assert counts == {"quizzes": 1, "jobs": 1}
    with database.session() as db:
        [summary] = QuizStore(db).list()
        assert summary.title == "Geography"
        assert QuizStore(db).get_by_id(summary.id).questions[0].correct_option == "Paris"
        assert [j.company for j in JobStore(db).list()] == ["Acme"]


def test_invalid_item_leaves_nothing_imported(tmp_path, database):
    seed = {
        "quizzes": [
            {"title": "Good", "questions": [{"text": "Q", "options": ["A", "B", "C", "D"], "correct_option": "A"}]},
            {"title": "Bad", "questions": [{"text": "Q", "options": ["A", "B", "C", "D"], "correct_option": "Z"}]},
        ],
        "jobs": [{"title": "Engineer", "company": "Acme", "location": "Remote"}],
    }
    path = tmp_path / "seed.json"
    path.write_text(json.dumps(seed), encoding="utf-8")

    with pytest.raises(ValidationFailed):
        run(path=path, database=database)

    with database.session() as db:
        assert QuizStore(db).list() == []
        assert JobStore(db).list() == []


def test_invalid_job_rolls_back_quizzes(tmp_path, database):
    seed = {
        "quizzes": [
            {"title": "Good", "questions": [{"text": "Q", "options": ["A", "B", "C", "D"], "correct_option": "A"}]}
        ],
        "jobs": [{"title": "Engineer", "company": "", "location": "Remote"}],
    }
    path = tmp_path / "seed.json"
    path.write_text(json.dumps(seed), encoding="utf-8")

    with pytest.raises(ValidationFailed):
        run(path=path, database=database)

    with database.session() as db:
        assert QuizStore(db).list() == []
