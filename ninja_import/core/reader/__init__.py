"""
Import Reader Core.

Public API for reading uploaded CSV files.

Usage:
    from ninja_import.core.reader import normalize_file, preimport

    result = normalize_file("clients.csv")
    print(f"Read via {result.strategy.value}: {len(result.text)} chars")

    data = preimport("clients.csv", "client")
    print(data.hints)

API Functions:
    read_file_with_proper_encoding(path) -> str
    normalize_file(path) -> NormalizeResult
    normalize_bytes(data, name) -> NormalizeResult
    detect_delimiter(text) -> str
    get_csv_data(text) -> list[list[str]]
    set_import_hints(headers, available) -> dict[int, str | None]
    preimport(path, entity_type) -> PreImportResult
"""

from __future__ import annotations

from pathlib import Path

from ninja_import.core.config import ImportSettings
from ninja_import.core.log import get_logger

from .bom import detect_wide_encoding, strip_bom
from .csv_data import get_csv_data
from .delimiter import DELIMITERS, detect_delimiter
from .encoding import (
    TranscodeError,
    Transcoder,
    contains_windows1252_bytes,
    fix_corrupted_windows1252,
    guess_encoding,
    is_valid_conversion,
)
from .errors import ImportIssue, Location, Severity, UnknownEntityError
from .field_maps import get_entity_map, get_field_maps
from .hints import set_import_hints
from .models import (
    Dialect,
    EncodingCandidate,
    ImportableField,
    NormalizeResult,
    PreImportResult,
    Strategy,
)
from .normalizer import EncodingNormalizer
from .sources import ByteSource, BytesSource, PathSource

logger = get_logger(__name__)


def normalize_file(
    path: Path | str,
    *,
    settings: ImportSettings | None = None,
    transcoder: Transcoder | None = None,
) -> NormalizeResult:
    """
    Read an uploaded file and normalize it to UTF-8.

    Never raises for missing, unreadable or oversized files; those give
    empty text and a fatal issue on the result.

    Args:
        path: Path to the upload
        settings: Size limit and other settings (defaults from environment)
        transcoder: Conversion backend

    Returns:
        NormalizeResult
    """
    settings = settings or ImportSettings.from_env()
    source = PathSource(path, max_bytes=settings.max_bytes)
    return EncodingNormalizer(transcoder).normalize(source)


def normalize_bytes(
    data: bytes,
    name: str = "<bytes>",
    *,
    max_bytes: int | None = None,
    transcoder: Transcoder | None = None,
) -> NormalizeResult:
    """
    Normalize an in-memory upload to UTF-8.

    Args:
        data: Raw file content
        name: Display name for issues and logs
        max_bytes: Optional size limit
        transcoder: Conversion backend

    Returns:
        NormalizeResult
    """
    source = BytesSource(data, name, max_bytes=max_bytes)
    return EncodingNormalizer(transcoder).normalize(source)


def read_file_with_proper_encoding(path: Path | str) -> str:
    """
    Read an uploaded file as UTF-8 text.

    Returns:
        The normalized text, or "" if the file cannot be read
    """
    return normalize_file(path).text


def preimport(
    path: Path | str,
    entity_type: str,
    *,
    settings: ImportSettings | None = None,
) -> PreImportResult:
    """
    Read an upload and prepare the column mapping screen.

    Args:
        path: Path to the upload
        entity_type: Target entity, e.g. "client"
        settings: Reader settings (defaults from environment)

    Returns:
        PreImportResult with leading rows, available fields and hints

    Raises:
        UnknownEntityError: If entity_type has no field map
    """
    settings = settings or ImportSettings.from_env()
    available = get_entity_map(entity_type)

    normalized = normalize_file(path, settings=settings)
    dialect = Dialect(delimiter=detect_delimiter(normalized.text))
    rows = get_csv_data(normalized.text, app_name=settings.app_name, dialect=dialect)

    if not rows and not normalized.has_fatal_issues:
        normalized = normalized.model_copy(
            update={
                "issues": [
                    *normalized.issues,
                    ImportIssue.warn(
                        "IMP-CSV-001",
                        "The file contains no rows",
                        location=Location(file=normalized.source),
                    ),
                ]
            }
        )

    hints = set_import_hints(rows[0], available) if rows else {}
    logger.debug(
        "Pre-import of %s as %s: %d rows, delimiter %r",
        normalized.source,
        entity_type,
        len(rows),
        dialect.delimiter,
    )

    return PreImportResult(
        entity_type=entity_type,
        available=available,
        headers=rows[: settings.preview_rows],
        hints=hints,
        dialect=dialect,
        row_count=len(rows),
        normalized=normalized,
    )


# =============================================================================
# Public API Exports
# =============================================================================

__all__ = [
    "DELIMITERS",
    "ByteSource",
    "BytesSource",
    "Dialect",
    "EncodingCandidate",
    "EncodingNormalizer",
    "ImportIssue",
    "ImportableField",
    "Location",
    "NormalizeResult",
    "PathSource",
    "PreImportResult",
    "Severity",
    "Strategy",
    "TranscodeError",
    "Transcoder",
    "UnknownEntityError",
    "contains_windows1252_bytes",
    "detect_delimiter",
    "detect_wide_encoding",
    "fix_corrupted_windows1252",
    "get_csv_data",
    "get_entity_map",
    "get_field_maps",
    "guess_encoding",
    "is_valid_conversion",
    "normalize_bytes",
    "normalize_file",
    "preimport",
    "read_file_with_proper_encoding",
    "set_import_hints",
    "strip_bom",
]
