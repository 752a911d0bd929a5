"""
Output adapters for CLI.

Provides different output formats: terminal, JSON.
"""

from ninja_import.cli.output.base import OutputAdapter, OutputFormat, get_output_adapter
from ninja_import.cli.output.json import JsonOutput
from ninja_import.cli.output.terminal import TerminalOutput

__all__ = [
    "JsonOutput",
    "OutputAdapter",
    "OutputFormat",
    "TerminalOutput",
    "get_output_adapter",
]
