"""Command-line entry point for importing card sets from a CSV export.

Usage:
  python -m controversy.cli parse "data/CAH Main Deck.csv" --json sets.json
  python -m controversy.cli parse deck.csv --store
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from controversy import config
from controversy.ingest.pipeline import card_sets_to_json, parse_csv_file
from controversy.ingest.reader import RowReadError
from controversy.storage import SetStore

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for the ``controversy`` command."""
    parser = argparse.ArgumentParser(description="Reconstruct card sets from a spreadsheet CSV export")
    sub = parser.add_subparsers(dest="command", required=True)

    parse = sub.add_parser("parse", help="Parse a CSV export into card sets")
    parse.add_argument("file", type=Path, help="CSV export to parse")
    parse.add_argument("--json", type=Path, default=None, help="Write the parsed sets (with cards) to this JSON file")
    parse.add_argument("--store", action="store_true", help="Persist the parsed sets to the set store")
    parse.add_argument(
        "--no-skip-header",
        dest="skip_header_row",
        action="store_false",
        default=config.SKIP_HEADER_ROW,
        help="Treat the first record as data instead of a header",
    )
    parse.add_argument(
        "--lenient",
        dest="strict",
        action="store_false",
        default=config.STRICT_ROWS,
        help="Accept records whose field count differs from the first record",
    )
    return parser


def run_parse(args: argparse.Namespace) -> int:
    """Execute the ``parse`` command; return the process exit code."""
    try:
        card_sets = parse_csv_file(args.file, skip_header_row=args.skip_header_row, strict=args.strict)
    except (RowReadError, OSError) as exc:
        logger.error("Could not read %s: %s", args.file, exc)
        return 1

    for card_set in card_sets:
        logger.info(
            "%s: %d cards (%d prompts, %d responses)",
            card_set.name,
            len(card_set.cards),
            len(card_set.prompts),
            len(card_set.responses),
        )

    if args.json is not None:
        args.json.parent.mkdir(parents=True, exist_ok=True)
        args.json.write_text(json.dumps(card_sets_to_json(card_sets), indent=2, ensure_ascii=False), encoding="utf-8")
        logger.info("Wrote %d sets to %s", len(card_sets), args.json)

    if args.store:
        SetStore().add_sets(card_sets)

    logger.info("Done: %d sets", len(card_sets))
    return 0


def main(argv: list[str] | None = None) -> int:
    """Parse arguments, configure logging and dispatch."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
    if args.command == "parse":
        return run_parse(args)
    return 2


if __name__ == "__main__":
    sys.exit(main())
