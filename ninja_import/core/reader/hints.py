"""
Column mapping hints.

Suggests which importable field each CSV column holds, so the mapping screen
opens pre-filled. Three passes over the header cells, each stricter match
first; a field matched once is not offered again:

1. "index + label" (spaces removed) contained in the header, e.g.
   "Client Name" or "clientname" for index "Client", label "Name"
2. label contained in the header
3. index contained in the header

All comparisons are case-insensitive substring checks.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from .models import ImportableField


def _contains(haystack: str, needle: str) -> bool:
    return bool(needle) and needle.casefold() in haystack.casefold()


def _squash(value: str) -> str:
    return value.replace(" ", "")


def set_import_hints(
    headers: Sequence[str],
    available: Sequence[ImportableField],
) -> dict[int, str | None]:
    """
    Suggest a field key for every header cell.

    Args:
        headers: First row of the CSV
        available: Importable fields of the target entity

    Returns:
        Column index -> field key, None where nothing matched
    """
    hints: dict[int, str | None] = dict.fromkeys(range(len(headers)))
    remaining = list(available)

    passes: list[Callable[[str, ImportableField], bool]] = [
        lambda header, f: _contains(_squash(header), _squash(f.index + f.label)),
        lambda header, f: _contains(header, f.label),
        lambda header, f: _contains(header, f.index),
    ]

    for matches in passes:
        for column, header in enumerate(headers):
            if hints[column] is not None:
                continue

            for field in remaining:
                if matches(header, field):
                    hints[column] = field.key
                    remaining.remove(field)
                    break

    return hints
