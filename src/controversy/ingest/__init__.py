"""Card-set reconstruction from wide spreadsheet exports.

Submodules:
  patterns     -- header marker literals and thresholds
  classifiers  -- tolerant cell access and cell classification helpers
  schema       -- ColumnGroup, Card, Edition, CardSet Pydantic models
  detection    -- per-row set-header and edition-header detection
  accumulator  -- streaming open/close reconciliation of sets across rows
  reader       -- sequential CSV row source
  pipeline     -- parse_rows / parse_csv_file / iter_card_sets entry points
"""

from controversy.ingest.accumulator import SetAccumulator
from controversy.ingest.detection import detect_column_groups, detect_edition_columns
from controversy.ingest.pipeline import iter_card_sets, parse_csv_file, parse_rows
from controversy.ingest.reader import RowReadError, iter_rows, open_rows
from controversy.ingest.schema import Card, CardSet, ColumnGroup, Edition, Suite

__all__ = [
    "Card",
    "CardSet",
    "ColumnGroup",
    "Edition",
    "RowReadError",
    "SetAccumulator",
    "Suite",
    "detect_column_groups",
    "detect_edition_columns",
    "iter_card_sets",
    "iter_rows",
    "open_rows",
    "parse_csv_file",
    "parse_rows",
]
