"""
Delimiter detection.

Only the header line is inspected: data rows carry free text (addresses,
notes, amounts with decimal points) that would skew the counts.
"""

from __future__ import annotations

# Checked in this order; on equal counts the later candidate wins.
DELIMITERS: tuple[str, ...] = (",", ".", ";", "|")

DEFAULT_DELIMITER = ","


def header_line(text: str) -> str:
    """Return everything before the first LF (the whole text if there is none)."""
    return text.split("\n", 1)[0]


def count_delimiters(text: str) -> dict[str, int]:
    """Count each candidate delimiter in the header line."""
    line = header_line(text)
    return {d: line.count(d) for d in DELIMITERS}


def detect_delimiter(text: str) -> str:
    """
    Pick the most frequent candidate delimiter in the header line.

    Ties go to the candidate checked last, so "a,b;c" gives ";" and a line
    with one of each gives "|". A header without any candidate falls back
    to ",".

    Args:
        text: Normalized file content

    Returns:
        One of ",", ".", ";", "|"
    """
    counts = count_delimiters(text)
    if not any(counts.values()):
        return DEFAULT_DELIMITER

    best_delimiter = DEFAULT_DELIMITER
    best_count = 0

    for delimiter in DELIMITERS:
        if counts[delimiter] >= best_count:
            best_count = counts[delimiter]
            best_delimiter = delimiter

    return best_delimiter
