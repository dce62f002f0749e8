"""
Error reporting sink for terminal client errors.

The API client reports each terminal error exactly once, with the request URL and
method as context, before raising it. Any object with a
``report(error, context)`` method can be plugged in (e.g. a Sentry adapter);
LoggingErrorReporter is the default.

# NOTE: A reporter must never change what the caller sees. report_error() logs
    and discards reporter failures so the original error is always raised.
"""

import logging
from typing import Any, Dict, Optional, Protocol

from client.errors import AppError, ErrorKind

logger = logging.getLogger(__name__)


class ErrorReporter(Protocol):
    def report(self, error: AppError, context: Dict[str, Any]) -> None:
        ...


class LoggingErrorReporter:
    """Reports errors to a standard library logger (network errors as warnings)."""

    def __init__(self, log: Optional[logging.Logger] = None):
        self._log = log or logger

    def report(self, error: AppError, context: Dict[str, Any]) -> None:
        level = logging.WARNING if error.kind == ErrorKind.NETWORK else logging.ERROR
        self._log.log(
            level,
            "%s error on %s %s: %s",
            error.kind.value,
            context.get("method", "?"),
            context.get("url", "?"),
            error.message,
            extra={"error": error.to_dict(), "context": context},
        )


def report_error(
    reporter: Optional[ErrorReporter],
    error: AppError,
    context: Dict[str, Any],
) -> None:
    """
    Send an error to the reporter without ever raising.

    Args:
        reporter: Reporter instance, or None to skip reporting
        error: Classified error
        context: Request context ({"url": ..., "method": ...})
    """
    if reporter is None:
        return
    try:
        reporter.report(error, context)
    except Exception as e:
        logger.warning("Error reporter failed: %s", e)
