"""
Typed errors raised by the recommendation core and its collaborators.

Every error carries a stable code and the HTTP status a caller should use if it
maps errors onto responses. The core raises these and never catches them.
"""

from enum import Enum
from typing import Any, Optional


class ErrorCode(str, Enum):
    TREE_NOT_FOUND = "TREE_NOT_FOUND"
    TREE_INVALID = "TREE_INVALID"
    QUESTION_NOT_FOUND = "QUESTION_NOT_FOUND"
    OPTION_NOT_FOUND = "OPTION_NOT_FOUND"
    MISSING_ANSWERS = "MISSING_ANSWERS"
    INVALID_ANSWER_PATH = "INVALID_ANSWER_PATH"
    SAVE_FAILED = "SAVE_FAILED"
    NO_RECOMMENDATION = "NO_RECOMMENDATION"
    RESULT_NOT_FOUND = "RESULT_NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


STATUS_CODES: dict[ErrorCode, int] = {
    ErrorCode.TREE_NOT_FOUND: 404,
    ErrorCode.TREE_INVALID: 400,
    ErrorCode.QUESTION_NOT_FOUND: 404,
    ErrorCode.OPTION_NOT_FOUND: 404,
    ErrorCode.MISSING_ANSWERS: 400,
    ErrorCode.INVALID_ANSWER_PATH: 400,
    ErrorCode.SAVE_FAILED: 500,
    ErrorCode.NO_RECOMMENDATION: 422,
    ErrorCode.RESULT_NOT_FOUND: 404,
    ErrorCode.VALIDATION_ERROR: 400,
    ErrorCode.INTERNAL_ERROR: 500,
}


class JourneyError(Exception):
    """Base class: code + human-readable message + optional details."""

    code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    @property
    def status_code(self) -> int:
        return STATUS_CODES.get(self.code, 500)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"code": self.code.value, "message": self.message}
        if self.details is not None:
            payload["details"] = self.details
        return payload


# -----------------------------------------------------------------------------
# Recommendation errors
# -----------------------------------------------------------------------------


class MissingAnswers(JourneyError):
    code = ErrorCode.MISSING_ANSWERS

    def __init__(self, message: str = "No answers provided"):
        super().__init__(message)


class InvalidAnswerPath(JourneyError):
    code = ErrorCode.INVALID_ANSWER_PATH


class QuestionNotFound(JourneyError):
    code = ErrorCode.QUESTION_NOT_FOUND

    def __init__(self, question_id: str):
        super().__init__(f"Question '{question_id}' not found in tree")
        self.question_id = question_id


class OptionNotFound(JourneyError):
    code = ErrorCode.OPTION_NOT_FOUND

    def __init__(self, option_id: str, question_id: str):
        super().__init__(f"Option '{option_id}' not found in question '{question_id}'")
        self.option_id = option_id
        self.question_id = question_id


class NoRecommendation(JourneyError):
    code = ErrorCode.NO_RECOMMENDATION

    def __init__(self, message: str = "No outcomes scored any points"):
        super().__init__(message)


class ResultNotFound(JourneyError):
    code = ErrorCode.RESULT_NOT_FOUND


class InvalidRequest(JourneyError):
    """Caller input (answers, payloads) that does not match the expected shape."""

    code = ErrorCode.VALIDATION_ERROR


# -----------------------------------------------------------------------------
# Repository / store errors
# -----------------------------------------------------------------------------


class TreeNotFound(JourneyError):
    code = ErrorCode.TREE_NOT_FOUND

    def __init__(self, tree_id: str):
        super().__init__(f"Decision tree '{tree_id}' not found")
        self.tree_id = tree_id


class TreeInvalid(JourneyError):
    code = ErrorCode.TREE_INVALID


class SaveFailed(JourneyError):
    code = ErrorCode.SAVE_FAILED
