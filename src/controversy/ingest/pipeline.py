"""Card-set import pipeline: row source in, finalized sets out.

Wires the CSV row source (reader.py) to the SetAccumulator and exposes the
three ways callers consume the result: all at once from rows or from a
file, or incrementally as each set closes.
"""

import json
import logging
import sys
from collections.abc import Iterable, Iterator, Sequence
from pathlib import Path

from controversy.ingest.accumulator import SetAccumulator
from controversy.ingest.reader import open_rows
from controversy.ingest.schema import CardSet

logger = logging.getLogger(__name__)


def iter_card_sets(rows: Iterable[Sequence[str]]) -> Iterator[CardSet]:
    """Yield finalized sets as soon as they close, then the sets left open at the end.

    A read error raised by *rows* propagates after any sets already yielded.
    """
    accumulator = SetAccumulator()
    for row in rows:
        yield from accumulator.process(row)
    # finish() returns every finalized set; only the tail was not yielded yet
    already = accumulator.close_events
    yield from accumulator.finish()[already:]


def parse_rows(rows: Iterable[Sequence[str]]) -> list[CardSet]:
    """Reconstruct every card set in *rows*; either all sets or the read error."""
    accumulator = SetAccumulator()
    for row in rows:
        accumulator.process(row)
    return accumulator.finish()


def parse_csv_file(path: str | Path, *, skip_header_row: bool = True, strict: bool = True) -> list[CardSet]:
    """Reconstruct every card set in the CSV export at *path*."""
    logger.info("Parsing card sets from %s", path)
    return parse_rows(open_rows(path, skip_header_row=skip_header_row, strict=strict))


def card_sets_to_json(card_sets: Sequence[CardSet]) -> list[dict]:
    """Convert sets (cards and editions nested) into plain JSON-ready dicts."""
    return [card_set.model_dump(mode="json") for card_set in card_sets]


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG, format="%(asctime)s - %(levelname)s - %(message)s")

    result = parse_csv_file(sys.argv[1])
    json.dump(card_sets_to_json(result), sys.stdout, indent=2, ensure_ascii=False)
