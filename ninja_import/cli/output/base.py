"""
Output adapter base classes.

Defines the interface for output adapters.
"""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, TextIO

if TYPE_CHECKING:
    from ninja_import.core.reader.models import NormalizeResult, PreImportResult


class OutputFormat(Enum):
    """Supported output formats."""

    TERMINAL = "terminal"
    JSON = "json"


class OutputAdapter(ABC):
    """Base class for output adapters."""

    format: OutputFormat

    def __init__(self, stream: TextIO | None = None, color: bool = True):
        self.stream = stream or sys.stdout
        self.color = color

    @abstractmethod
    def render_inspection(
        self,
        result: NormalizeResult,
        delimiter: str,
        charset_hint: str | None = None,
    ) -> str:
        """Render how a file was read."""

    @abstractmethod
    def render_preimport(self, result: PreImportResult) -> str:
        """Render the pre-import mapping proposal."""


def get_output_adapter(
    format: OutputFormat | str,
    stream: TextIO | None = None,
    color: bool = True,
) -> OutputAdapter:
    """Get an output adapter by format."""
    if isinstance(format, str):
        format = OutputFormat(format)

    if format == OutputFormat.TERMINAL:
        from ninja_import.cli.output.terminal import TerminalOutput

        return TerminalOutput(stream=stream, color=color)
    elif format == OutputFormat.JSON:
        from ninja_import.cli.output.json import JsonOutput

        return JsonOutput(stream=stream, color=color)
    else:
        raise ValueError(f"Unknown output format: {format}")
