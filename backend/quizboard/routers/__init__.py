from quizboard.routers import health, jobs, quizzes

__all__ = [
    "health",
    "jobs",
    "quizzes",
]
