from __future__ import annotations

from enum import Enum
from typing import Optional

GENERIC_MESSAGE = "Unable to save your information. Please try again later."
PARSE_MESSAGE = "Unable to read the submitted form data. Please try again."
VALIDATION_MESSAGE = "Please fill in all required fields: name, phone and location."


class ErrorType(str, Enum):
    DATA_PARSE_ERROR = "DataParseError"
    VALIDATION_ERROR = "ValidationError"
    SHEET_UNAVAILABLE = "SheetUnavailable"
    PERMISSION_DENIED = "PermissionDenied"
    ROW_LIMIT_REACHED = "RowLimitReached"
    UNKNOWN_ERROR = "UnknownError"


class IntakeError(Exception):
    """
    Base class for failures surfaced by the intake pipeline.

    `str(exc)` is the internal detail (logs, operator email). `client_message`
    is the only text that reaches the caller.
    """

    error_type: ErrorType = ErrorType.UNKNOWN_ERROR
    client_message: str = GENERIC_MESSAGE
    status_code: int = 500
    notify_operator: bool = True

    def __init__(self, detail: str, *, trace: Optional[str] = None) -> None:
        super().__init__(detail)
        self.detail = detail
        self.trace = trace


class DataParseError(IntakeError):
    error_type = ErrorType.DATA_PARSE_ERROR
    client_message = PARSE_MESSAGE
    status_code = 400


class ValidationError(IntakeError):
    error_type = ErrorType.VALIDATION_ERROR
    client_message = VALIDATION_MESSAGE
    status_code = 400
    notify_operator = False


class SheetUnavailable(IntakeError):
    error_type = ErrorType.SHEET_UNAVAILABLE
    status_code = 503


class PermissionDenied(IntakeError):
    error_type = ErrorType.PERMISSION_DENIED


class RowLimitReached(IntakeError):
    error_type = ErrorType.ROW_LIMIT_REACHED
    status_code = 503


class UnknownError(IntakeError):
    error_type = ErrorType.UNKNOWN_ERROR
