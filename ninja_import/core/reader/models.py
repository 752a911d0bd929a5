"""
Reader data models.

Transient values produced by the import reader. Nothing here is persisted:
every model is created per call and discarded once the caller consumes it.
All models are frozen (immutable).
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from .errors import ImportIssue, Severity

# =============================================================================
# Enums
# =============================================================================


class EncodingCandidate(Enum):
    """Encodings the normalizer knows how to read, in detection order."""

    UTF_32BE = "UTF-32BE"
    UTF_32LE = "UTF-32LE"
    UTF_16BE = "UTF-16BE"
    UTF_16LE = "UTF-16LE"
    UTF_8 = "UTF-8"
    WINDOWS_1252 = "WINDOWS-1252"
    ISO_8859_1 = "ISO-8859-1"
    ISO_8859_15 = "ISO-8859-15"
    CP1252 = "CP1252"

    @property
    def codec(self) -> str:
        """Python codec name for this encoding."""
        return _CODECS[self]


_CODECS: dict[EncodingCandidate, str] = {
    EncodingCandidate.UTF_32BE: "utf-32-be",
    EncodingCandidate.UTF_32LE: "utf-32-le",
    EncodingCandidate.UTF_16BE: "utf-16-be",
    EncodingCandidate.UTF_16LE: "utf-16-le",
    EncodingCandidate.UTF_8: "utf-8",
    EncodingCandidate.WINDOWS_1252: "cp1252",
    EncodingCandidate.ISO_8859_1: "latin-1",
    EncodingCandidate.ISO_8859_15: "iso8859-15",
    EncodingCandidate.CP1252: "cp1252",
}


class Strategy(Enum):
    """Which step of the normalization cascade produced the text."""

    WIDE_ENCODING = "wide_encoding"  # UTF-16/32 by BOM or null-byte heuristic
    CLEAN_UTF8 = "clean_utf8"  # Already valid UTF-8
    WINDOWS1252_CONTEXT = "windows1252_context"  # Re-read as Windows-1252
    WINDOWS1252_BINARY = "windows1252_binary"  # Binary read, 0x80-0x9F present
    CORRUPTION_REPAIR = "corruption_repair"  # U+FFFD replaced by U+2019
    ENUMERATION = "enumeration"  # Legacy single-byte encoding list
    FALLBACK = "fallback"  # Nothing worked, lossy UTF-8
    UNREADABLE = "unreadable"  # File could not be read

    @property
    def converted(self) -> bool:
        """True if the text is not the input bytes read verbatim as UTF-8."""
        return self not in (Strategy.CLEAN_UTF8, Strategy.FALLBACK, Strategy.UNREADABLE)


# =============================================================================
# Basic Models
# =============================================================================


class Dialect(BaseModel, frozen=True):
    """CSV dialect settings for an uploaded file."""

    delimiter: str = ","
    quotechar: str = '"'

    model_config = {"frozen": True}


class NormalizeResult(BaseModel, frozen=True):
    """
    Result of normalizing an upload to UTF-8.

    Text from the cascade strategies always passes ``is_valid_conversion``.
    WIDE_ENCODING text is returned unchecked and FALLBACK text failed every
    check, so callers should look at ``valid`` for those. Invalid text is
    not a fixed point: normalizing it again repairs its U+FFFD to U+2019.
    """

    text: str
    strategy: Strategy
    encoding: EncodingCandidate | None = Field(
        default=None,
        description="Encoding the text was decoded from, None when unknown",
    )
    source: str = Field(default="<bytes>", description="Display name of the input")
    byte_size: int = Field(default=0, ge=0)
    valid: bool = Field(description="Whether the text passed the validity check")
    issues: list[ImportIssue] = Field(default_factory=list)

    model_config = {"frozen": True}

    @property
    def has_fatal_issues(self) -> bool:
        """Check if nothing could be read."""
        return any(i.severity == Severity.FATAL for i in self.issues)


# =============================================================================
# Pre-import Models
# =============================================================================


class ImportableField(BaseModel, frozen=True):
    """A field an entity accepts from a CSV column."""

    key: str = Field(description="Field key, e.g. 'client.name'")
    index: str = Field(description="Human label of the group, e.g. 'Client'")
    label: str = Field(description="Human label of the field, e.g. 'Name'")

    model_config = {"frozen": True}


class PreImportResult(BaseModel, frozen=True):
    """What the upload step hands back before the real import runs."""

    entity_type: str
    available: list[ImportableField]
    headers: list[list[str]] = Field(description="First rows of the CSV")
    hints: dict[int, str | None] = Field(description="Column index to suggested field key")
    dialect: Dialect
    row_count: int = Field(ge=0)
    normalized: NormalizeResult

    model_config = {"frozen": True}

    @property
    def issues(self) -> list[ImportIssue]:
        """Issues from reading the file."""
        return list(self.normalized.issues)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the shape returned by the upload endpoint."""
        return {
            "entity_type": self.entity_type,
            "available": {f.key: f"{f.index} {f.label}" for f in self.available},
            "headers": self.headers,
            "hints": {str(k): v for k, v in self.hints.items()},
            "delimiter": self.dialect.delimiter,
            "row_count": self.row_count,
        }
