"""
Import issue models.

This module defines structured diagnostics for the import reader.
The reader never raises for bad input; it degrades to a best-effort value
and records what happened as an ImportIssue using the IMP-XXX-NNN taxonomy.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class Severity(Enum):
    """Issue severity levels."""

    FATAL = "fatal"  # Nothing could be read
    WARN = "warn"  # Output may be garbled
    INFO = "info"  # Informational


class Location(BaseModel, frozen=True):
    """Issue location in file."""

    file: str | None = None
    line_no: int | None = None
    column: int | None = None

    def __str__(self) -> str:
        """Format location for display."""
        parts = []
        if self.file:
            parts.append(self.file)
        if self.line_no is not None:
            parts.append(f"line {self.line_no}")
        if self.column is not None:
            parts.append(f"col {self.column}")
        return ", ".join(parts) if parts else "<unknown>"


class ImportIssue(BaseModel, frozen=True):
    """
    Structured import diagnostic.

    Issue domains:
    - IMP-IO-*: Reading the upload
    - IMP-ENC-*: Encoding normalization
    - IMP-CSV-*: CSV structure
    - IMP-MAP-*: Column mapping
    """

    code: str = Field(
        pattern=r"^IMP-[A-Z]{2,5}-\d{3}$",
        description="Issue code, e.g., 'IMP-ENC-001'",
    )
    severity: Severity
    title: str = Field(description="Short issue title")
    message: str = Field(description="Detailed issue message")
    location: Location = Field(
        default_factory=Location,
        description="Where the issue occurred",
    )
    context: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional context (encoding, strategy, sizes)",
    )

    @classmethod
    def create(
        cls,
        severity: Severity,
        code: str,
        message: str,
        *,
        title: str | None = None,
        location: Location | None = None,
        context: dict[str, Any] | None = None,
    ) -> ImportIssue:
        """Create an issue, taking the title from the code registry if omitted."""
        return cls(
            code=code,
            severity=severity,
            title=title or get_issue_description(code) or code,
            message=message,
            location=location or Location(),
            context=context or {},
        )

    @classmethod
    def fatal(cls, code: str, message: str, **kwargs: Any) -> ImportIssue:
        """Create a FATAL severity issue."""
        return cls.create(Severity.FATAL, code, message, **kwargs)

    @classmethod
    def warn(cls, code: str, message: str, **kwargs: Any) -> ImportIssue:
        """Create a WARN severity issue."""
        return cls.create(Severity.WARN, code, message, **kwargs)

    @classmethod
    def info(cls, code: str, message: str, **kwargs: Any) -> ImportIssue:
        """Create an INFO severity issue."""
        return cls.create(Severity.INFO, code, message, **kwargs)

    def __str__(self) -> str:
        """Format issue for display."""
        return f"[{self.code}] {self.severity.value.upper()}: {self.title} - {self.message}"


class UnknownEntityError(LookupError):
    """Raised when an import is requested for an entity type with no field map."""

    code = "IMP-MAP-001"

    def __init__(self, entity_type: str, known: list[str]) -> None:
        self.entity_type = entity_type
        self.known = known
        super().__init__(f"Unknown entity type: {entity_type!r} (known: {', '.join(known)})")


# =============================================================================
# Issue Codes Registry
# =============================================================================

IMPORT_ISSUE_CODES: dict[str, str] = {
    # IO
    "IMP-IO-001": "File unreadable",
    "IMP-IO-002": "File too large",
    # Encoding
    "IMP-ENC-001": "Input converted to UTF-8",
    "IMP-ENC-002": "No encoding produced clean UTF-8",
    "IMP-ENC-003": "Corrupted replacement characters repaired",
    # CSV
    "IMP-CSV-001": "No rows found",
    # Mapping
    "IMP-MAP-001": "Unknown entity type",
}


def get_issue_description(code: str) -> str | None:
    """Get the description for an issue code."""
    return IMPORT_ISSUE_CODES.get(code)
