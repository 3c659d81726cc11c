"""Streaming reconstruction of card sets from sheet rows.

The accumulator owns every set that is still open, keyed by its column
group.  Each row is handled in three steps, in this order:

  1. extraction     -- read a card out of the row for every open set
  2. detection      -- find column groups announced by the same row
  3. reconciliation -- a new group whose (suite, text, special) triple equals
                       an open set's triple closes that set; then every new
                       group opens a fresh set

A set therefore only ends when a new table starts at exactly the same
column positions, or when the row stream runs out (``finish``).
"""

import logging
import uuid
from collections.abc import Sequence

from controversy.ingest.classifiers import cell_at, parse_suite
from controversy.ingest.detection import detect_column_groups, detect_edition_columns
from controversy.ingest.schema import Card, CardSet, ColumnGroup, Edition

logger = logging.getLogger(__name__)


# ─── Open Set State ──────────────────────────────────────────────────────────


class _OpenSet:
    """Mutable state for one set that is still accepting cards."""

    def __init__(self, name: str, group: ColumnGroup):
        self.id = uuid.uuid4()
        self.name = name
        self.group = group
        self.cards: list[Card] = []
        self.editions: list[Edition] = []

    def extract(self, row: Sequence[str]) -> Card | None:
        """Append and return the card this row holds for the set, if any."""
        suite = parse_suite(cell_at(row, self.group.suite_col))
        if suite is None:
            return None
        flagged = tuple(e.id for e in self.editions if cell_at(row, e.column))
        card = Card(
            suite=suite,
            text=cell_at(row, self.group.text_col),
            special=cell_at(row, self.group.special_col),
            editions=flagged,
        )
        self.cards.append(card)
        return card

    def finalize(self) -> CardSet:
        """Freeze the accumulated state into an immutable CardSet."""
        return CardSet(id=self.id, name=self.name, cards=tuple(self.cards), editions=tuple(self.editions))


# ─── Accumulator ─────────────────────────────────────────────────────────────


class SetAccumulator:
    """Turn a row stream into finalized card sets.

    Call ``process`` once per row, in row order, then ``finish`` exactly
    once.  Finalized sets are available from ``finished`` as they close, and
    ``finish`` returns all of them in output order: sets closed during
    processing first (in closing order), then sets still open at the end in
    the order they were opened.
    """

    def __init__(self):
        # Insertion-ordered: flush order at finish() is opening order
        self._open: dict[ColumnGroup, _OpenSet] = {}
        self.finished: list[CardSet] = []
        self.rows_seen = 0
        self.close_events = 0
        self._done = False

    @property
    def open_groups(self) -> list[ColumnGroup]:
        """Column groups of the sets currently open, in opening order."""
        return list(self._open)

    def process(self, row: Sequence[str]) -> list[CardSet]:
        """Consume one row; return the sets this row closed (possibly empty)."""
        if self._done:
            raise RuntimeError("SetAccumulator.process() called after finish()")
        self.rows_seen += 1

        # ── 1. Extract cards for every set opened on earlier rows ────────
        for open_set in self._open.values():
            open_set.extract(row)

        # ── 2. Detect groups announced by this row ───────────────────────
        new_groups = detect_column_groups(row)

        # ── 3. Close recurring groups, then open every new group ─────────
        closed: list[CardSet] = []
        for group in new_groups:
            previous = self._open.pop(group, None)
            if previous is None:
                continue
            card_set = previous.finalize()
            closed.append(card_set)
            self.close_events += 1
            logger.debug(
                "Row %d: closed set %r at columns %s with %d cards",
                self.rows_seen,
                card_set.name,
                group.as_tuple(),
                len(card_set.cards),
            )

        for group in new_groups:
            name = cell_at(row, group.text_col)
            self._open[group] = _OpenSet(name, group)
            logger.debug("Row %d: opened set %r at columns %s", self.rows_seen, name, group.as_tuple())

        # ── 4. Attach edition columns (best effort) ──────────────────────
        self._attach_editions(row)

        self.finished.extend(closed)
        return closed

    def finish(self) -> list[CardSet]:
        """Finalize every set still open and return all finalized sets."""
        if self._done:
            raise RuntimeError("SetAccumulator.finish() called twice")
        self._done = True

        still_open = len(self._open)
        for open_set in self._open.values():
            self.finished.append(open_set.finalize())
        self._open.clear()

        logger.info(
            "Reconstructed %d sets from %d rows (%d closed mid-stream, %d open at end)",
            len(self.finished),
            self.rows_seen,
            self.close_events,
            still_open,
        )
        return list(self.finished)

    def _attach_editions(self, row: Sequence[str]) -> None:
        """Assign edition columns in *row* to the open set they sit under.

        An edition block belongs to the open set with the greatest suite
        column at or left of the block's ``Edition`` marker.  A column the set
        already has (same column and label) is not added again.
        """
        for column in detect_edition_columns(row):
            owner = None
            for open_set in self._open.values():
                if open_set.group.suite_col > column.marker_col:
                    continue
                if owner is None or open_set.group.suite_col > owner.group.suite_col:
                    owner = open_set
            if owner is None:
                logger.debug("Row %d: no open set for edition %r at column %d", self.rows_seen, column.label, column.column)
                continue
            if any(e.column == column.column and e.label == column.label for e in owner.editions):
                continue
            owner.editions.append(Edition(set_id=owner.id, column=column.column, label=column.label))
