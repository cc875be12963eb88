from typing import Any, Dict, Optional

from fastapi import status


class StudentAPIException(Exception):
    """Base class for errors surfaced to API callers"""

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class InvalidInputError(StudentAPIException):
    """400: malformed or out-of-range input"""

    def __init__(self, message: str = "Input validation failed", details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details,
        )


class StudentNotFoundError(StudentAPIException):
    """404: no student has the requested id"""

    def __init__(self, student_id: int):
        self.student_id = student_id
        super().__init__(
            message=f"Student not found with id: {student_id}",
            code="STUDENT_NOT_FOUND",
            status_code=status.HTTP_404_NOT_FOUND,
        )


class DuplicateEmailError(StudentAPIException):
    """409: another student already holds this email"""

    def __init__(self, email: str):
        self.email = email
        super().__init__(
            message=f"Email already exists: {email}",
            code="DUPLICATE_EMAIL",
            status_code=status.HTTP_409_CONFLICT,
        )


class StudentEmailNotFoundError(StudentAPIException):
    """404: no student has the requested email"""

    def __init__(self, email: str):
        self.email = email
        super().__init__(
            message=f"Student not found with email: {email}",
            code="STUDENT_NOT_FOUND",
            status_code=status.HTTP_404_NOT_FOUND,
        )
