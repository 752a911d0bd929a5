"""
CSV rows from normalized upload text.

Exports produced by the application itself start with a three-line preamble
(application banner, blank line, entity name) before the real header row.
That preamble is dropped so re-importing an export works out of the box.
"""

from __future__ import annotations

from ninja_import.core.config import DEFAULT_APP_NAME

from .delimiter import detect_delimiter
from .models import Dialect
from .tokenizer import tokenize_stream

PREAMBLE_ROWS = 3


def get_csv_data(
    text: str,
    *,
    app_name: str = DEFAULT_APP_NAME,
    dialect: Dialect | None = None,
) -> list[list[str]]:
    """
    Parse normalized text into rows.

    Args:
        text: UTF-8 text from the normalizer
        app_name: Banner marking an export preamble in the first cell
        dialect: CSV dialect; the delimiter is detected when omitted

    Returns:
        Rows as lists of cell values, blank lines removed
    """
    if dialect is None:
        dialect = Dialect(delimiter=detect_delimiter(text))

    rows = [fields for fields, _, _ in tokenize_stream(text, dialect, skip_blank=False)]

    if rows and rows[0] and len(rows) > PREAMBLE_ROWS + 1 and app_name in rows[0][0]:
        rows = rows[PREAMBLE_ROWS:]

    return [row for row in rows if any(cell for cell in row)]
