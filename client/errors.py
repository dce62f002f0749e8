"""
Error taxonomy for the API client.

Every failure surfaced by the client is a single exception type, AppError, whose
``kind`` field says what went wrong:

- NETWORK: connectivity problems (DNS, refused connection, dropped connection)
- API: non-2xx HTTP response, with ``status_code`` (timeouts are API 408)
- AUTH: missing, invalid or expired credentials
- VALIDATION: input rejected as semantically invalid, optionally naming a ``field``
- UNKNOWN: anything that could not be classified

Each error carries a ``retryable`` flag and a ``user_message`` meant for display,
separate from the technical message passed to Exception. Callers branch on
``error.kind`` rather than on exception subclasses.
"""

from enum import Enum
from typing import Any, Dict, Optional

import requests


class ErrorKind(str, Enum):
    NETWORK = "NETWORK"
    API = "API"
    AUTH = "AUTH"
    VALIDATION = "VALIDATION"
    UNKNOWN = "UNKNOWN"


# User-friendly error messages
ERROR_MESSAGES: Dict[str, str] = {
    "OFFLINE": "Please check your internet connection and try again.",
    "TIMEOUT": "Request timed out. Please try again.",
    "SERVER_ERROR": "Our servers are experiencing issues. Please try again in a few moments.",
    "BAD_REQUEST": "Invalid request. Please check your input and try again.",
    "NOT_FOUND": "The requested resource was not found.",
    "UNAUTHORIZED": "You need to sign in to continue.",
    "SESSION_EXPIRED": "Please sign in again to continue.",
    "FORBIDDEN": "You don't have permission to perform this action.",
    "RATE_LIMITED": "Too many requests. Please wait a moment and try again.",
    "VALIDATION_FAILED": "Please check your input and try again.",
    "GENERIC": "Something went wrong. Please try again.",
    "UNEXPECTED": "An unexpected error occurred. Please try again.",
}

# Statuses worth retrying besides 5xx
RETRYABLE_STATUSES = (408, 429)


def is_retryable_status(status_code: int) -> bool:
    """Server errors, request timeout (408) and rate limiting (429) are retryable."""
    return status_code >= 500 or status_code in RETRYABLE_STATUSES


def user_message_for_status(status_code: int, original_message: str = "") -> str:
    """Readable message for an HTTP status, falling back to the server's message."""
    if status_code >= 500:
        return ERROR_MESSAGES["SERVER_ERROR"]
    return {
        400: ERROR_MESSAGES["BAD_REQUEST"],
        401: ERROR_MESSAGES["UNAUTHORIZED"],
        403: ERROR_MESSAGES["FORBIDDEN"],
        404: ERROR_MESSAGES["NOT_FOUND"],
        408: ERROR_MESSAGES["TIMEOUT"],
        429: ERROR_MESSAGES["RATE_LIMITED"],
    }.get(status_code, original_message or ERROR_MESSAGES["GENERIC"])


class AppError(Exception):
    """
    Classified client error.

    Attributes:
        kind: ErrorKind discriminant
        message: Technical message (also str(error))
        status_code: HTTP status for API errors (and for validation errors that came
            from a response), else None
        retryable: Whether the retry policy may re-attempt the request
        user_message: Human-readable message for display
        field: Offending input field for validation errors, if known
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        *,
        status_code: Optional[int] = None,
        retryable: bool = False,
        user_message: Optional[str] = None,
        field: Optional[str] = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.status_code = status_code
        self.retryable = retryable
        self.user_message = user_message or ERROR_MESSAGES["GENERIC"]
        self.field = field

    def to_dict(self) -> Dict[str, Any]:
        """Serializable representation (for logging and error reporting)."""
        return {
            "kind": self.kind.value,
            "message": self.message,
            "status_code": self.status_code,
            "retryable": self.retryable,
            "user_message": self.user_message,
            "field": self.field,
        }

    def __repr__(self) -> str:
        status = f", status_code={self.status_code}" if self.status_code is not None else ""
        return f"AppError({self.kind.value}{status}, {self.message!r})"


def network_error(message: str = "Network connection failed") -> AppError:
    return AppError(
        ErrorKind.NETWORK,
        message,
        retryable=True,
        user_message=ERROR_MESSAGES["OFFLINE"],
    )


def api_error(status_code: int, message: str = "API request failed") -> AppError:
    return AppError(
        ErrorKind.API,
        message or "API request failed",
        status_code=status_code,
        retryable=is_retryable_status(status_code),
        user_message=user_message_for_status(status_code, message),
    )


def auth_error(message: str = "Authentication failed") -> AppError:
    return AppError(
        ErrorKind.AUTH,
        message,
        retryable=False,
        user_message=ERROR_MESSAGES["SESSION_EXPIRED"],
    )


def validation_error(
    message: str,
    field: Optional[str] = None,
    status_code: Optional[int] = None,
) -> AppError:
    return AppError(
        ErrorKind.VALIDATION,
        message,
        status_code=status_code,
        retryable=False,
        user_message=message,
        field=field,
    )


def unknown_error(message: str) -> AppError:
    return AppError(
        ErrorKind.UNKNOWN,
        message,
        retryable=False,
        user_message=ERROR_MESSAGES["UNEXPECTED"],
    )


def categorize_error(error: BaseException) -> AppError:
    """
    Classify any exception raised while talking to the backend.

    AppError instances are returned unchanged. Connection problems from requests
    become NETWORK errors, everything else UNKNOWN.
    """
    if isinstance(error, AppError):
        return error

    if isinstance(error, requests.exceptions.ConnectionError):
        return network_error(f"Network connection failed: {error}")

    if isinstance(error, requests.exceptions.RequestException):
        return network_error(f"Network request failed: {error}")

    return unknown_error(str(error) or error.__class__.__name__)
