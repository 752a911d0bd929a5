"""
Terminal output adapter.

Renders reader results with ANSI colors when writing to a TTY.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, TextIO

from ninja_import.cli.output.base import OutputAdapter, OutputFormat

if TYPE_CHECKING:
    from ninja_import.core.reader.errors import ImportIssue
    from ninja_import.core.reader.models import NormalizeResult, PreImportResult


# Check if Unicode is supported
def _supports_unicode() -> bool:
    """Check if terminal supports Unicode."""
    try:
        "\u2713".encode(sys.stdout.encoding or "utf-8")
        return True
    except (UnicodeEncodeError, LookupError):
        return False


# Severity colors
SEVERITY_COLORS = {
    "fatal": "bold red",
    "warn": "yellow",
    "info": "blue",
}

# Unicode and ASCII fallback symbols
SEVERITY_SYMBOLS_UNICODE = {
    "fatal": "\u2716",
    "warn": "\u26a0",
    "info": "\u2139",
}

SEVERITY_SYMBOLS_ASCII = {
    "fatal": "X",
    "warn": "!",
    "info": "i",
}

SUCCESS_SYMBOL_UNICODE = "\u2713"
SUCCESS_SYMBOL_ASCII = "OK"

DELIMITER_NAMES = {
    ",": "comma",
    ".": "period",
    ";": "semicolon",
    "|": "pipe",
}


class TerminalOutput(OutputAdapter):
    """Terminal output with ANSI colors."""

    format = OutputFormat.TERMINAL

    def __init__(self, stream: TextIO | None = None, color: bool = True):
        super().__init__(stream=stream, color=color)
        self._use_color = color and self._is_tty()
        self._use_unicode = _supports_unicode()
        self._severity_symbols = SEVERITY_SYMBOLS_UNICODE if self._use_unicode else SEVERITY_SYMBOLS_ASCII
        self._success_symbol = SUCCESS_SYMBOL_UNICODE if self._use_unicode else SUCCESS_SYMBOL_ASCII

    def _is_tty(self) -> bool:
        """Check if output is a TTY."""
        return hasattr(self.stream, "isatty") and self.stream.isatty()

    def render_inspection(
        self,
        result: NormalizeResult,
        delimiter: str,
        charset_hint: str | None = None,
    ) -> str:
        """Render how a file was read."""
        lines = [self._style(result.source, "bold")]
        lines.extend(self._format_normalize(result))
        lines.append(f"  Delimiter: {delimiter!r} ({DELIMITER_NAMES.get(delimiter, 'other')})")
        if charset_hint:
            lines.append(self._style(f"  charset-normalizer guess: {charset_hint}", "dim"))
        lines.extend(self._format_issues(result.issues))
        return "\n".join(lines)

    def render_preimport(self, result: PreImportResult) -> str:
        """Render the pre-import mapping proposal."""
        lines = [self._style(f"{result.normalized.source} -> {result.entity_type}", "bold")]
        lines.extend(self._format_normalize(result.normalized))
        lines.append(f"  Delimiter: {result.dialect.delimiter!r}")
        lines.append(f"  Rows: {result.row_count}")

        if result.headers:
            lines.append("")
            lines.append(self._style("Column hints:", "bold"))
            for column, header in enumerate(result.headers[0]):
                hint = result.hints.get(column)
                target = self._style(hint, "green") if hint else self._style("(unmapped)", "dim")
                lines.append(f"  {column:>3}  {header!r} -> {target}")

        lines.extend(self._format_issues(result.issues))
        return "\n".join(lines)

    def _format_normalize(self, result: NormalizeResult) -> list[str]:
        """Format the encoding part of a result."""
        encoding = result.encoding.value if result.encoding else "unknown"
        if result.valid:
            status = self._style(f"{self._success_symbol} valid UTF-8", "green")
        else:
            status = self._style(f"{self._severity_symbols['warn']} not clean UTF-8", "yellow")

        return [
            f"  Size: {result.byte_size} bytes",
            f"  Encoding: {encoding} (via {result.strategy.value})",
            f"  Result: {status}",
        ]

    def _format_issues(self, issues: list[ImportIssue]) -> list[str]:
        """Format issues, one per line."""
        if not issues:
            return []

        lines = [""]
        for issue in issues:
            severity = issue.severity.value
            symbol = self._style(self._severity_symbols.get(severity, "*"), SEVERITY_COLORS.get(severity, "white"))
            lines.append(f"  {symbol} {issue.message} [{self._style(issue.code, 'dim')}]")
        return lines

    def _style(self, text: str, style: str) -> str:
        """Apply style to text if colors are enabled."""
        if not self._use_color:
            return text

        # ANSI color codes
        codes = {
            "bold": "\033[1m",
            "dim": "\033[2m",
            "red": "\033[31m",
            "green": "\033[32m",
            "yellow": "\033[33m",
            "blue": "\033[34m",
            "bold red": "\033[1;31m",
            "white": "\033[37m",
        }
        reset = "\033[0m"

        code = codes.get(style, "")
        if code:
            return f"{code}{text}{reset}"
        return text
