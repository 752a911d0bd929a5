"""
Encoding primitives for uploaded CSV files.

Uploads arrive as:
- UTF-8, with or without BOM (preferred)
- Windows-1252 / ISO-8859-x exported by older spreadsheet tools
- UTF-8 that already went through a lossy conversion and carries U+FFFD

This module holds the pieces the normalizer composes: the transcoder, the
validity check that decides whether a conversion "worked", and the two
Windows-1252 heuristics. charset-normalizer is used only to report a second
opinion; it never decides the outcome.
"""

from __future__ import annotations

import codecs
from typing import TYPE_CHECKING

from charset_normalizer import from_bytes

if TYPE_CHECKING:
    from .models import EncodingCandidate

REPLACEMENT_CHAR = "\ufffd"
REPLACEMENT_BYTES = REPLACEMENT_CHAR.encode("utf-8")  # EF BF BD

# U+FFFD that was read as Windows-1252 and written out again as UTF-8
DOUBLE_ENCODED_REPLACEMENT = REPLACEMENT_BYTES.decode("cp1252")  # "ï¿½"

RIGHT_SINGLE_QUOTE = "\u2019"

# 0x80-0x9F bytes that Windows-1252 leaves unassigned
WINDOWS_1252_UNASSIGNED = frozenset({0x81, 0x8D, 0x8F, 0x90, 0x9D})

# 0x80-0x9F bytes that Windows-1252 assigns to printable characters
WINDOWS_1252_BYTES = frozenset(range(0x80, 0xA0)) - WINDOWS_1252_UNASSIGNED

WINDOWS_1252_ERRORS = "ninja-import-windows1252"

# Size of data to use for the charset-normalizer hint
DETECTION_SAMPLE_SIZE = 8192


class TranscodeError(ValueError):
    """Raised when bytes cannot be decoded from the requested encoding."""

    def __init__(self, encoding: str, reason: str) -> None:
        self.encoding = encoding
        self.reason = reason
        super().__init__(f"Cannot decode as {encoding}: {reason}")


def _decode_unassigned_windows1252(exc: UnicodeError) -> tuple[str, int]:
    """Map an unassigned Windows-1252 byte to the C1 control with the same value."""
    if not isinstance(exc, UnicodeDecodeError):
        raise exc
    byte = exc.object[exc.start]
    if byte not in WINDOWS_1252_UNASSIGNED:
        raise exc
    return chr(byte), exc.start + 1


codecs.register_error(WINDOWS_1252_ERRORS, _decode_unassigned_windows1252)


class Transcoder:
    """
    Strict bytes-to-text conversion.

    The normalizer only talks to this class, so callers can swap in a
    different conversion backend (or a fake in tests).

    Windows-1252 is read the way browsers read it: the five unassigned
    bytes decode to U+0081, U+008D, U+008F, U+0090 and U+009D, so every
    byte sequence is valid Windows-1252.
    """

    def decode(self, data: bytes, encoding: EncodingCandidate) -> str:
        """
        Decode data from encoding.

        Raises:
            TranscodeError: If data contains bytes invalid in that encoding
        """
        errors = WINDOWS_1252_ERRORS if encoding.codec == "cp1252" else "strict"
        try:
            return data.decode(encoding.codec, errors)
        except UnicodeDecodeError as e:
            raise TranscodeError(encoding.value, str(e)) from e


def decode_with_fallback(data: bytes, encoding: str) -> str:
    """
    Decode bytes with encoding, using replacement for invalid sequences.

    Args:
        data: Bytes to decode
        encoding: Python codec name

    Returns:
        Decoded string (with replacement characters for invalid bytes)
    """
    try:
        return data.decode(encoding)
    except UnicodeDecodeError:
        return data.decode(encoding, errors="replace")


def is_valid_utf8(data: str | bytes) -> bool:
    """Check that data is (or can be written as) well-formed UTF-8."""
    try:
        if isinstance(data, bytes):
            data.decode("utf-8")
        else:
            # Lone surrogates cannot be encoded
            data.encode("utf-8")
    except UnicodeError:
        return False
    return True


def is_valid_conversion(data: str | bytes) -> bool:
    """
    Check whether a conversion produced usable UTF-8.

    Well-formed UTF-8 alone is not enough: text full of replacement
    characters is well-formed but wrong, and that is exactly the failure
    signal the normalizer looks for.

    Args:
        data: Converted text, or raw bytes claimed to be UTF-8

    Returns:
        True if data is well-formed UTF-8 and holds neither U+FFFD nor the
        double-encoded replacement "ï¿½"
    """
    if not is_valid_utf8(data):
        return False

    text = data.decode("utf-8") if isinstance(data, bytes) else data
    return REPLACEMENT_CHAR not in text and DOUBLE_ENCODED_REPLACEMENT not in text


def contains_windows1252_bytes(data: bytes) -> bool:
    """Check for bytes that only make sense as Windows-1252 (0x80-0x9F range)."""
    return not WINDOWS_1252_BYTES.isdisjoint(data)


def fix_corrupted_windows1252(data: bytes) -> bytes:
    """
    Repair UTF-8 that lost characters in an earlier bad conversion.

    A Windows-1252 right single quote (0x92) read as UTF-8 becomes U+FFFD;
    it is by far the most common casualty, so every replacement character
    is mapped back to U+2019.
    """
    return data.replace(REPLACEMENT_BYTES, RIGHT_SINGLE_QUOTE.encode("utf-8"))


def guess_encoding(data: bytes) -> str | None:
    """
    Ask charset-normalizer what it thinks the input is.

    Args:
        data: Raw file content

    Returns:
        Lowercase encoding name, or None for empty/undetectable input
    """
    if not data:
        return None

    best = from_bytes(data[:DETECTION_SAMPLE_SIZE]).best()
    if best is None:
        return None
    return best.encoding.lower()
