"""Sequential CSV row source for card-sheet exports.

Yields one list of cell strings per record and never holds more than the
current record in memory.  Any record that cannot be tokenized is fatal:
it raises RowReadError and reading stops.
"""

import csv
import logging
import re
from collections.abc import Iterator
from pathlib import Path
from typing import TextIO

logger = logging.getLogger(__name__)

# Lone surrogates left by errors="surrogateescape" for bytes that are not UTF-8
_UNDECODABLE_RE = re.compile("[\udc80-\udcff]")


class RowReadError(ValueError):
    """A record in the row source could not be read."""

    def __init__(self, message: str, line: int | None = None):
        self.line = line
        super().__init__(f"line {line}: {message}" if line is not None else message)


def iter_rows(stream: TextIO, *, skip_header_row: bool = True, strict: bool = True) -> Iterator[list[str]]:
    """Yield the records of a CSV text stream as lists of cell strings.

    With *skip_header_row* the first record is consumed and not yielded.
    With *strict* every record must have as many fields as the first record
    (header included); a mismatch raises RowReadError.  Blank lines are
    skipped.  Streams decoded with ``errors="surrogateescape"`` report
    undecodable bytes against the record that holds them.
    """
    reader = csv.reader(stream, strict=True)
    expected_width: int | None = None
    record_no = 0

    while True:
        try:
            record = next(reader)
        except StopIteration:
            break
        except csv.Error as exc:
            raise RowReadError(str(exc), line=reader.line_num) from exc
        except UnicodeDecodeError as exc:
            raise RowReadError(f"invalid UTF-8 ({exc.reason})", line=reader.line_num + 1) from exc

        # Blank lines are not records
        if not record:
            continue

        if any(_UNDECODABLE_RE.search(cell) for cell in record):
            raise RowReadError("invalid UTF-8", line=reader.line_num)

        record_no += 1
        if expected_width is None:
            expected_width = len(record)
        elif strict and len(record) != expected_width:
            raise RowReadError(
                f"found record with {len(record)} fields, but the previous record has {expected_width} fields",
                line=reader.line_num,
            )

        if record_no == 1 and skip_header_row:
            continue
        yield record

    logger.debug("Read %d records", record_no)


def open_rows(path: str | Path, *, skip_header_row: bool = True, strict: bool = True) -> Iterator[list[str]]:
    """Open *path* as UTF-8 (BOM tolerated) and yield its rows; the file is closed when exhausted."""
    with open(path, "r", encoding="utf-8-sig", errors="surrogateescape", newline="") as fopen:
        yield from iter_rows(fopen, skip_header_row=skip_header_row, strict=strict)
