"""Set-header and edition-header detection within a single row.

Operates on one row at a time, with no knowledge of earlier rows, to find
where new card sets start (their column groups) and which columns carry
edition (regional/version) flags.  Boundary decisions that need history
(when a set ends) live in accumulator.py.
"""

import logging
from collections.abc import Sequence

from controversy.ingest.classifiers import (
    is_edition_marker,
    is_set_marker,
    is_special_marker,
    is_title_candidate,
)
from controversy.ingest.schema import ColumnGroup, EditionColumn

logger = logging.getLogger(__name__)


# ─── Column Group Detection ──────────────────────────────────────────────────


def detect_column_groups(row: Sequence[str]) -> list[ColumnGroup]:
    """Return every (suite, text, special) column group announced by *row*, left to right.

    A single scan keeps three cursors.  A ``Set`` cell sets the suite cursor
    and a ``Special`` cell sets the special cursor.  The first long-enough
    cell after the suite cursor, and before any special cursor, becomes the
    text (title) cursor.  Once all three are set a group is emitted and the
    cursors reset so the scan can find further groups on the same row.

    Cursors of an incomplete attempt are NOT reset: they carry forward and
    may combine with markers found later in the row, and a later ``Set``
    simply overwrites an unconsumed suite cursor.
    """
    suite_pos: int | None = None
    text_pos: int | None = None
    special_pos: int | None = None
    groups: list[ColumnGroup] = []

    for idx, cell in enumerate(row):
        if is_set_marker(cell):
            suite_pos = idx
        elif is_special_marker(cell):
            special_pos = idx
        elif (
            text_pos is None  # latched: only the first qualifying cell is the title
            and suite_pos is not None
            and special_pos is None
            and idx > suite_pos
            and is_title_candidate(cell)
        ):
            text_pos = idx

        if suite_pos is not None and text_pos is not None and special_pos is not None:
            groups.append(ColumnGroup(suite_col=suite_pos, text_col=text_pos, special_col=special_pos))
            suite_pos = text_pos = special_pos = None

    if groups:
        logger.debug("Row announces %d column group(s): %s", len(groups), [g.as_tuple() for g in groups])
    return groups


# ─── Edition Detection ───────────────────────────────────────────────────────


def detect_edition_columns(row: Sequence[str]) -> list[EditionColumn]:
    """Return the edition columns announced by *row*.

    An ``Edition`` cell opens a block; every following non-empty cell, up to
    the next ``Edition`` cell, is one edition column of that block labelled
    with the cell's text.  Cells before the first ``Edition`` are ignored.
    """
    marker_col: int | None = None
    columns: list[EditionColumn] = []

    for idx, cell in enumerate(row):
        if is_edition_marker(cell):
            marker_col = idx
        elif cell and marker_col is not None:
            columns.append(EditionColumn(marker_col=marker_col, column=idx, label=cell))

    return columns
