"""
CLI exit codes.

Maps reader outcomes onto process exit codes.
"""

from __future__ import annotations

from enum import IntEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ninja_import.core.reader.models import NormalizeResult


class ExitCode(IntEnum):
    """CLI exit codes following Unix conventions."""

    SUCCESS = 0  # Clean UTF-8 produced
    ERROR = 1  # Best-effort output, may be garbled
    FATAL = 2  # Nothing could be read
    USAGE = 64  # Command line usage error
    CONFIG = 78  # Configuration error


def get_exit_code(result: NormalizeResult, *, strict: bool = True) -> ExitCode:
    """
    Determine exit code for a normalize result.

    Args:
        result: What the reader produced
        strict: Treat text that failed the validity check as an error
    """
    if result.has_fatal_issues:
        return ExitCode.FATAL

    if strict and not result.valid:
        return ExitCode.ERROR

    return ExitCode.SUCCESS
