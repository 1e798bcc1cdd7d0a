from __future__ import annotations


class QuizboardError(Exception):
    """Domain failure that maps onto one HTTP error response.

    code:
      - not_found
      - validation_failed
      - length_mismatch
    """

    code = "error"
    http_status = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = str(message)


class NotFound(QuizboardError):
    code = "not_found"
    http_status = 404


class ValidationFailed(QuizboardError):
    code = "validation_failed"
    http_status = 422


class LengthMismatch(QuizboardError):
    code = "length_mismatch"
    http_status = 422

    def __init__(self, *, expected: int, actual: int):
        super().__init__(f"expected {int(expected)} answers, got {int(actual)}")
        self.expected = int(expected)
        self.actual = int(actual)
