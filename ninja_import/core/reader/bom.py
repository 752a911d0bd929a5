"""
Byte order marks and wide (UTF-16/UTF-32) encoding detection.

Spreadsheet tools export CSV as UTF-16 surprisingly often, sometimes without
a BOM. Wide encodings have to be recognized before anything else looks at the
bytes, because their null bytes make every other check meaningless.
"""

from __future__ import annotations

from .encoding import decode_with_fallback
from .models import EncodingCandidate

BOM_UTF8 = b"\xef\xbb\xbf"
BOM_UTF16_BE = b"\xfe\xff"
BOM_UTF16_LE = b"\xff\xfe"
BOM_UTF32_BE = b"\x00\x00\xfe\xff"
BOM_UTF32_LE = b"\xff\xfe\x00\x00"

# Longest marks first: FF FE is a prefix of FF FE 00 00.
WIDE_BOMS: tuple[tuple[bytes, EncodingCandidate], ...] = (
    (BOM_UTF32_BE, EncodingCandidate.UTF_32BE),
    (BOM_UTF32_LE, EncodingCandidate.UTF_32LE),
    (BOM_UTF16_BE, EncodingCandidate.UTF_16BE),
    (BOM_UTF16_LE, EncodingCandidate.UTF_16LE),
)

ALL_BOMS: tuple[bytes, ...] = (
    BOM_UTF8,
    BOM_UTF32_BE,
    BOM_UTF32_LE,
    BOM_UTF16_BE,
    BOM_UTF16_LE,
)

# Order used by older releases of the upload handler. UTF-16LE is tested
# before UTF-32LE, which turns a UTF-32LE mark into a UTF-16LE one.
_LEGACY_ORDER: tuple[bytes, ...] = (
    BOM_UTF8,
    BOM_UTF16_BE,
    BOM_UTF16_LE,
    BOM_UTF32_BE,
    BOM_UTF32_LE,
)

# Null-byte sniffing without a BOM
SNIFF_WINDOW = 100
UTF32_MIN_MATCHES = 5  # strictly more than this many groups
UTF16_MIN_MATCHES = 10


def strip_bom(data: bytes, *, legacy_order: bool = False) -> bytes:
    """
    Remove a leading byte order mark.

    Args:
        data: Raw bytes
        legacy_order: Check 2-byte marks before 4-byte ones, like older
            releases did (a UTF-32LE mark then loses only
            two bytes)

    Returns:
        Bytes without the BOM, or data unchanged if none is recognized
    """
    for bom in _LEGACY_ORDER if legacy_order else ALL_BOMS:
        if data.startswith(bom):
            return data[len(bom):]
    return data


def sniff_wide_encoding(data: bytes) -> EncodingCandidate | None:
    """
    Guess UTF-32LE/UTF-16LE/UTF-16BE from null-byte spacing.

    Only the first SNIFF_WINDOW bytes are inspected. Latin text in UTF-16 has
    a zero in every other byte and in UTF-32 three zeros out of four, while
    ASCII or UTF-8 text almost never contains a null byte at all.

    Args:
        data: Raw bytes without a BOM

    Returns:
        The guessed encoding, or None
    """
    length = len(data)
    window = min(SNIFF_WINDOW, length)

    if length >= 8 and length % 4 == 0:
        matches = 0
        for i in range(0, window - 3, 4):
            if data[i + 1] == 0 and data[i + 2] == 0 and data[i + 3] == 0:
                matches += 1
        if matches > UTF32_MIN_MATCHES:
            return EncodingCandidate.UTF_32LE

    if length >= 4 and length % 2 == 0:
        matches = 0
        for i in range(0, window - 1, 2):
            if data[i + 1] == 0:
                matches += 1
        if matches > UTF16_MIN_MATCHES:
            return EncodingCandidate.UTF_16LE

        matches = 0
        for i in range(0, window - 1, 2):
            if data[i] == 0:
                matches += 1
        if matches > UTF16_MIN_MATCHES:
            return EncodingCandidate.UTF_16BE

    return None


def detect_wide_encoding(data: bytes) -> tuple[str, EncodingCandidate] | None:
    """
    Decode UTF-16/UTF-32 input, announced by a BOM or sniffed.

    Undecodable code units become U+FFFD rather than failing the read.

    Args:
        data: Raw file content

    Returns:
        (text, encoding) if the input looks like a wide encoding, else None
    """
    for bom, candidate in WIDE_BOMS:
        if data.startswith(bom):
            return decode_with_fallback(data[len(bom):], candidate.codec), candidate

    candidate = sniff_wide_encoding(data)
    if candidate is not None:
        return decode_with_fallback(data, candidate.codec), candidate

    return None
