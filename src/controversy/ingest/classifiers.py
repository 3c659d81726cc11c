"""Cell access and classification helpers for card-sheet rows.

Each function takes a row (a sequence of cell strings) or a single cell and
either reads a field tolerantly or classifies the cell as a header marker,
title candidate, or suite literal.  Missing columns are never an error.
"""

from collections.abc import Sequence

from controversy.ingest.patterns import (
    EDITION_MARKER,
    MIN_TITLE_BYTES,
    PROMPT_LITERAL,
    RESPONSE_LITERAL,
    SET_MARKER,
    SPECIAL_MARKER,
)
from controversy.ingest.schema import Suite

_SUITE_LITERALS = {
    PROMPT_LITERAL: Suite.PROMPT,
    RESPONSE_LITERAL: Suite.RESPONSE,
}


def cell_at(row: Sequence[str], idx: int) -> str:
    """Return the cell at *idx*, or ``""`` when the row is shorter than that."""
    if 0 <= idx < len(row):
        return row[idx]
    return ""


def parse_suite(value: str) -> Suite | None:
    """Map an exact suite literal ('Prompt' / 'Response') to a Suite, else None."""
    return _SUITE_LITERALS.get(value)


def is_set_marker(cell: str) -> bool:
    """Return True if the cell is the header over a set's suite column."""
    return cell == SET_MARKER


def is_special_marker(cell: str) -> bool:
    """Return True if the cell is the header over a set's special column."""
    return cell == SPECIAL_MARKER


def is_edition_marker(cell: str) -> bool:
    """Return True if the cell opens a block of edition columns."""
    return cell == EDITION_MARKER


def is_title_candidate(cell: str) -> bool:
    """Return True if the cell is long enough to be a set title."""
    # Measured in UTF-8 bytes, not characters
    return len(cell.encode("utf-8")) > MIN_TITLE_BYTES
