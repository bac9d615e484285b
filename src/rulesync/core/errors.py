"""
Unified error handling for rulesync.

Every failure raised by handlers, the ruler client and the CLI derives from
RuleSyncError, which carries the exit code the CLI returns for it.

Exit Codes:
- 0: Success
- 10: Configuration error
- 11: Remote error (ruler API failure)
- 12: Validation error
- 13: Unsupported operation
- 14: Resource not found
- 127: Unknown/internal error
"""

from __future__ import annotations

import functools
import sys
import traceback
from enum import IntEnum
from typing import Any, Callable, TypeVar

import structlog

logger = structlog.get_logger()


class ExitCode(IntEnum):
    """Standardized exit codes for CLI commands."""

    SUCCESS = 0
    CONFIG_ERROR = 10
    REMOTE_ERROR = 11
    VALIDATION_ERROR = 12
    UNSUPPORTED = 13
    NOT_FOUND = 14
    UNKNOWN_ERROR = 127


class RuleSyncError(Exception):
    """Base exception for rulesync errors with exit code support."""

    exit_code: ExitCode = ExitCode.UNKNOWN_ERROR
    show_traceback: bool = False

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(RuleSyncError):
    """Raised for configuration-related errors."""

    exit_code = ExitCode.CONFIG_ERROR


class RemoteError(RuleSyncError):
    """Raised when the remote rules service (or the client talking to it) fails."""

    exit_code = ExitCode.REMOTE_ERROR


class ValidationError(RuleSyncError):
    """Raised for local validation failures."""

    exit_code = ExitCode.VALIDATION_ERROR


class MismatchError(ValidationError):
    """Raised when a resource declares a spec uid that differs from its name."""

    def __init__(self, uid: str, name: str):
        super().__init__(
            f"uid '{uid}' and name '{name}', don't match",
            details={"uid": uid, "name": name},
        )
        self.uid = uid
        self.name = name


class MissingMetadataError(ValidationError):
    """Raised when a resource lacks a metadata entry its kind requires."""

    def __init__(self, kind: str, name: str, key: str):
        super().__init__(
            f"{kind} {name} requires a {key} metadata entry",
            details={"kind": kind, "name": name, "key": key},
        )
        self.key = key


class InvalidArgumentError(ValidationError):
    """Raised when a caller passes a malformed argument (e.g. a bad uid)."""


class InvalidSpecError(ValidationError):
    """Raised when a resource document or spec does not match its schema."""


class UnsupportedOperationError(RuleSyncError):
    """Raised when an operation does not apply to a resource kind."""

    exit_code = ExitCode.UNSUPPORTED


class NotFoundError(RuleSyncError):
    """Raised when a resource does not exist remotely."""

    exit_code = ExitCode.NOT_FOUND

    def __init__(self, uid: str, kind: str | None = None):
        label = f"{kind} {uid}" if kind else uid
        super().__init__(f"{label} not found", details={"uid": uid})
        self.uid = uid


# Type variable for decorated functions
F = TypeVar("F", bound=Callable[..., int])


def main_with_error_handling(
    *,
    show_traceback: bool = False,
    log_errors: bool = True,
) -> Callable[[F], F]:
    """
    Decorator for CLI command functions that provides unified error handling.

    Catches exceptions and converts them to appropriate exit codes with
    consistent error reporting.

    Args:
        show_traceback: If True, show full traceback for unexpected errors
        log_errors: If True, log errors to structlog

    Exit codes:
        - RuleSyncError subclasses: Uses the error's exit_code
        - KeyboardInterrupt: Returns 130 (standard for SIGINT)
        - Other exceptions: Returns 127 (unknown error)
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> int:
            try:
                return func(*args, **kwargs)
            except RuleSyncError as e:
                if log_errors:
                    logger.error(
                        "command_error",
                        error_type=type(e).__name__,
                        message=e.message,
                        exit_code=e.exit_code,
                        **e.details,
                    )
                if e.show_traceback or show_traceback:
                    traceback.print_exc(file=sys.stderr)
                return e.exit_code
            except KeyboardInterrupt:
                if log_errors:
                    logger.info("command_interrupted")
                return 130  # Standard exit code for SIGINT
            except Exception as e:
                if log_errors:
                    logger.error(
                        "unexpected_error",
                        error_type=type(e).__name__,
                        message=str(e),
                        exit_code=ExitCode.UNKNOWN_ERROR,
                    )
                if show_traceback:
                    traceback.print_exc(file=sys.stderr)
                return ExitCode.UNKNOWN_ERROR

        return wrapper  # type: ignore[return-value]

    return decorator


def format_error_message(error: RuleSyncError) -> str:
    """Format an error message for display to users."""
    msg = error.message
    if error.details:
        detail_str = ", ".join(f"{k}={v}" for k, v in error.details.items())
        msg = f"{msg} ({detail_str})"
    return msg
