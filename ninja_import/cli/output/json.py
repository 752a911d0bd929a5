"""
JSON output adapter.

Renders reader results as JSON for machine processing.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, TextIO

from ninja_import.cli.output.base import OutputAdapter, OutputFormat

if TYPE_CHECKING:
    from ninja_import.core.reader.errors import ImportIssue
    from ninja_import.core.reader.models import NormalizeResult, PreImportResult


class JsonOutput(OutputAdapter):
    """JSON output adapter."""

    format = OutputFormat.JSON

    def __init__(self, stream: TextIO | None = None, color: bool = False, indent: int = 2):
        super().__init__(stream=stream, color=False)  # Never colorize JSON
        self.indent = indent

    def render_inspection(
        self,
        result: NormalizeResult,
        delimiter: str,
        charset_hint: str | None = None,
    ) -> str:
        """Render inspection as JSON."""
        output = self._normalize_to_dict(result)
        output["delimiter"] = delimiter
        output["charset_hint"] = charset_hint
        return json.dumps(output, indent=self.indent, ensure_ascii=False)

    def render_preimport(self, result: PreImportResult) -> str:
        """Render pre-import proposal as JSON."""
        output = result.to_dict()
        output["normalize"] = self._normalize_to_dict(result.normalized)
        return json.dumps(output, indent=self.indent, ensure_ascii=False)

    def _normalize_to_dict(self, result: NormalizeResult) -> dict[str, Any]:
        """Convert normalize result to dictionary (without the text)."""
        return {
            "source": result.source,
            "byte_size": result.byte_size,
            "strategy": result.strategy.value,
            "encoding": result.encoding.value if result.encoding else None,
            "valid": result.valid,
            "issues": [self._issue_to_dict(i) for i in result.issues],
        }

    def _issue_to_dict(self, issue: ImportIssue) -> dict[str, Any]:
        """Convert issue to dictionary."""
        return {
            "code": issue.code,
            "severity": issue.severity.value,
            "title": issue.title,
            "message": issue.message,
            "location": {
                "file": issue.location.file,
                "line_no": issue.location.line_no,
                "column": issue.location.column,
            },
            "context": issue.context,
        }
