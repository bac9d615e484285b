"""Core modules for rulesync - centralized definitions and utilities."""

from rulesync.core.errors import (
    ConfigurationError,
    ExitCode,
    InvalidArgumentError,
    InvalidSpecError,
    MismatchError,
    MissingMetadataError,
    NotFoundError,
    RemoteError,
    RuleSyncError,
    UnsupportedOperationError,
    ValidationError,
    format_error_message,
    main_with_error_handling,
)

__all__ = [
    "ExitCode",
    "RuleSyncError",
    "ConfigurationError",
    "RemoteError",
    "ValidationError",
    "MismatchError",
    "MissingMetadataError",
    "InvalidArgumentError",
    "InvalidSpecError",
    "UnsupportedOperationError",
    "NotFoundError",
    "main_with_error_handling",
    "format_error_message",
]
