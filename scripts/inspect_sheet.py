"""Debug script: show how a sheet export is split into card sets, row by row.

For every record prints the column groups the row announces, the sets it
closes, and a running count of open sets; then a per-set summary.  Useful
when a new export lays its decks out differently and a set comes out empty
or merged with its neighbour.

Usage:
  python scripts/inspect_sheet.py "data/CAH Main Deck.csv"
  python scripts/inspect_sheet.py deck.csv --rows 40 --no-skip-header
"""

import argparse
import logging

from controversy.ingest.accumulator import SetAccumulator
from controversy.ingest.detection import detect_column_groups
from controversy.ingest.reader import open_rows

# ─── Setup ────────────────────────────────────────────────────────────────────

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)


# ─── Main ─────────────────────────────────────────────────────────────────────


def main():
    parser = argparse.ArgumentParser(description="Trace set detection over a CSV sheet export")
    parser.add_argument("file", help="CSV export to inspect")
    parser.add_argument("--rows", type=int, default=None, help="Only trace the first N rows (all rows are still parsed)")
    parser.add_argument("--no-skip-header", dest="skip_header_row", action="store_false", help="Treat the first record as data")
    args = parser.parse_args()

    acc = SetAccumulator()
    for i, row in enumerate(open_rows(args.file, skip_header_row=args.skip_header_row), start=1):
        groups = detect_column_groups(row)
        closed = acc.process(row)
        if args.rows is not None and i > args.rows:
            continue
        if groups or closed:
            print(f"row {i}:")
            for group in groups:
                print(f"    group {group.as_tuple()} -> {row[group.text_col]!r}")
            for card_set in closed:
                print(f"    closed {card_set.name!r} ({len(card_set.cards)} cards)")
            print(f"    open sets: {len(acc.open_groups)}")

    print()
    for card_set in acc.finish():
        preview = card_set.cards[0].text[:60] if card_set.cards else ""
        print(f"{card_set.name!r:40} {len(card_set.prompts):5} prompts {len(card_set.responses):5} responses  {preview}")


if __name__ == "__main__":
    main()
