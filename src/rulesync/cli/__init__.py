"""
CLI commands for rulesync.
"""

from rulesync.cli.apply import apply_command, validate_command
from rulesync.cli.remote import get_command, list_command, pull_command

__all__ = [
    "apply_command",
    "validate_command",
    "get_command",
    "list_command",
    "pull_command",
]
