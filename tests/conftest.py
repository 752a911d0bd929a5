"""
Pytest configuration and fixtures for ninja-import tests.

Provides fixtures for:
- Upload files in the encodings the reader has to cope with
- Sample text used across test modules
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from collections.abc import Callable


# =============================================================================
# Sample Data
# =============================================================================

CLIENTS_CSV = "Name,Email,City\nJosé García,jose@example.com,Málaga\nMüller GmbH,info@mueller.de,Köln\n"


# =============================================================================
# File Fixtures
# =============================================================================


@pytest.fixture
def write_upload(tmp_path: Path) -> Callable[[bytes, str], Path]:
    """Return a helper that writes raw bytes to a file in tmp_path."""

    def _write(data: bytes, name: str = "upload.csv") -> Path:
        path = tmp_path / name
        path.write_bytes(data)
        return path

    return _write


@pytest.fixture
def clients_csv() -> str:
    """A small client export with accented names."""
    return CLIENTS_CSV


@pytest.fixture
def utf8_upload(write_upload: Callable[[bytes, str], Path]) -> Path:
    """Clean UTF-8 file without BOM."""
    return write_upload(CLIENTS_CSV.encode("utf-8"), "clients_utf8.csv")


@pytest.fixture
def utf8_bom_upload(write_upload: Callable[[bytes, str], Path]) -> Path:
    """UTF-8 file with BOM, as written by Excel's 'CSV UTF-8' option."""
    return write_upload(b"\xef\xbb\xbf" + CLIENTS_CSV.encode("utf-8"), "clients_utf8_bom.csv")


@pytest.fixture
def utf16_upload(write_upload: Callable[[bytes, str], Path]) -> Path:
    """UTF-16LE file with BOM, as written by Excel's 'Unicode Text' option."""
    return write_upload(b"\xff\xfe" + CLIENTS_CSV.encode("utf-16-le"), "clients_utf16.csv")


@pytest.fixture
def windows1252_upload(write_upload: Callable[[bytes, str], Path]) -> Path:
    """Windows-1252 file with smart quotes and a euro sign."""
    text = "Name,Notes\nJohn’s Company,“Premium” – €50\n"
    return write_upload(text.encode("cp1252"), "clients_cp1252.csv")


@pytest.fixture
def semicolon_upload(write_upload: Callable[[bytes, str], Path]) -> Path:
    """Semicolon-separated ISO-8859-1 export, typical for German Excel."""
    text = "Name;E-Mail;Ort\nMüller;info@mueller.de;Köln\nSchäfer;s@example.de;Düsseldorf\n"
    return write_upload(text.encode("latin-1"), "kunden.csv")


@pytest.fixture
def missing_upload(tmp_path: Path) -> Path:
    """Path to a file that does not exist."""
    return tmp_path / "does-not-exist.csv"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep NINJA_IMPORT_* settings from the developer's shell out of tests."""
    monkeypatch.delenv("NINJA_IMPORT_MAX_BYTES", raising=False)
    monkeypatch.delenv("NINJA_IMPORT_APP_NAME", raising=False)
