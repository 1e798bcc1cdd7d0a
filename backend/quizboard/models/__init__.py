from quizboard.models.job import JobPosting
from quizboard.models.quiz import Quiz, QuizQuestion

__all__ = [
    "JobPosting",
    "Quiz",
    "QuizQuestion",
]
