"""
CSV tokenizer for uploaded files.

Uploads use whatever dialect the exporting tool picked:
- Delimiter: detected from the header line (see delimiter.py)
- Quote character: double quote (")
- Escape: doubled quotes ("")
- Line terminator: LF, CRLF or CR; any of them may appear inside quoted fields

This module implements a streaming state-machine tokenizer that handles
all these edge cases without relying on the csv module's dialect guessing.
"""

from __future__ import annotations

from enum import Enum, auto
from typing import TYPE_CHECKING

from .models import Dialect

if TYPE_CHECKING:
    from collections.abc import Iterator


class TokenizerState(Enum):
    """State of the tokenizer state machine."""

    FIELD_START = auto()  # At start of a field
    IN_UNQUOTED = auto()  # Inside an unquoted field
    IN_QUOTED = auto()  # Inside a quoted field
    QUOTE_IN_QUOTED = auto()  # Just saw a quote inside a quoted field


def tokenize_line(
    line: str,
    dialect: Dialect | None = None,
) -> list[str]:
    """
    Tokenize a single line into fields.

    Note: This function assumes the line does NOT contain embedded newlines.
    For multi-line records, use tokenize_stream().

    Args:
        line: The line to tokenize (without line terminator)
        dialect: CSV dialect (defaults to comma-separated)

    Returns:
        List of field values (unquoted and unescaped)
    """
    records = list(tokenize_stream(line, dialect, skip_blank=False))
    return records[0][0] if records else [""]


def tokenize_stream(
    text: str,
    dialect: Dialect | None = None,
    *,
    skip_blank: bool = True,
) -> Iterator[tuple[list[str], int, int]]:
    """
    Tokenize text into records (rows).

    Handles multi-line records where line breaks appear inside quoted fields.

    Args:
        text: The full text to tokenize
        dialect: CSV dialect (defaults to comma-separated)
        skip_blank: Drop records whose fields are all empty. Keep them when
            the caller needs to see blank separator lines.

    Yields:
        Tuples of (fields, start_line, end_line)
        start_line and end_line are 1-indexed line numbers
    """
    if dialect is None:
        dialect = Dialect()

    delimiter = dialect.delimiter
    quotechar = dialect.quotechar

    fields: list[str] = []
    field_buffer: list[str] = []
    state = TokenizerState.FIELD_START

    line_no = 1
    record_start_line = 1

    def keep(record: list[str]) -> bool:
        return not skip_blank or any(f for f in record)

    i = 0
    length = len(text)
    while i < length:
        char = text[i]
        next_char = text[i + 1] if i + 1 < length else None

        is_break = char in ("\r", "\n")
        is_eol = is_break and state != TokenizerState.IN_QUOTED

        if state == TokenizerState.FIELD_START:
            if char == quotechar:
                state = TokenizerState.IN_QUOTED
            elif char == delimiter:
                fields.append("")
            elif not is_eol:
                field_buffer.append(char)
                state = TokenizerState.IN_UNQUOTED

        elif state == TokenizerState.IN_UNQUOTED:
            if char == delimiter:
                fields.append("".join(field_buffer))
                field_buffer = []
                state = TokenizerState.FIELD_START
            elif not is_eol:
                field_buffer.append(char)

        elif state == TokenizerState.IN_QUOTED:
            if char == quotechar:
                state = TokenizerState.QUOTE_IN_QUOTED
            else:
                # Include everything, including line breaks (multi-line field)
                field_buffer.append(char)

        elif state == TokenizerState.QUOTE_IN_QUOTED:
            if char == quotechar:
                # Escaped quote
                field_buffer.append(quotechar)
                state = TokenizerState.IN_QUOTED
            elif char == delimiter:
                fields.append("".join(field_buffer))
                field_buffer = []
                state = TokenizerState.FIELD_START
            elif not is_eol:
                # Content after closing quote
                field_buffer.append(char)
                state = TokenizerState.IN_UNQUOTED

        if is_break:
            # CRLF counts as a single line break
            if char == "\r" and next_char == "\n":
                if state == TokenizerState.IN_QUOTED:
                    field_buffer.append(next_char)
                i += 1
            line_no += 1

        if is_eol:
            fields.append("".join(field_buffer))
            if keep(fields):
                yield fields, record_start_line, line_no - 1
            fields = []
            field_buffer = []
            state = TokenizerState.FIELD_START
            record_start_line = line_no

        i += 1

    # Handle final record if not empty
    if field_buffer or fields or state != TokenizerState.FIELD_START:
        fields.append("".join(field_buffer))
        if keep(fields):
            yield fields, record_start_line, line_no
