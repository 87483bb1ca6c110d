from typing import Any, Dict, Optional
from fastapi import status


class ExamServiceError(Exception):
    """Base class for errors the workflows raise on purpose.

    Each subclass pins the HTTP status and the machine-readable code that
    ``middleware.exceptions`` puts in the error envelope.
    """
    status_code: int = status.HTTP_400_BAD_REQUEST
    code: str = "BAD_REQUEST"
    default_message: str = "Request could not be processed"

    def __init__(self, message: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class NotFoundError(ExamServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"
    default_message = "Resource not found"


class InvalidFileError(ExamServiceError):
    code = "INVALID_FILE"
    default_message = "CSV file not provided or incorrect file type"


class EmptyQuestionSetError(ExamServiceError):
    code = "EMPTY_QUESTION_SET"
    default_message = "No valid questions found in CSV"


class InvalidScheduleFormatError(ExamServiceError):
    code = "INVALID_SCHEDULE_FORMAT"
    default_message = "Invalid scheduled date format. Use YYYY-MM-DD HH:mm:ss."


class InvalidTimeFormatError(ExamServiceError):
    code = "INVALID_TIME_FORMAT"
    default_message = "Invalid time format for startTime or endTime. Use HH:MM:SS."


class HasDependentQuestionsError(ExamServiceError):
    status_code = status.HTTP_409_CONFLICT
    code = "HAS_DEPENDENT_QUESTIONS"
    default_message = "Delete all questions within the exam paper and try again"
