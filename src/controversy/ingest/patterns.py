"""Marker literals and thresholds for card-sheet header detection.

The sheet exports lay several card sets side by side.  A set's header row
holds a ``Set`` cell over the suite column, the set title over the text
column, and a ``Special`` cell over the special-instructions column.
Used by classifiers.py and detection.py.
"""

# ─── Header Markers ──────────────────────────────────────────────────────────

# Exact cell text over a set's suite column
SET_MARKER = "Set"

# Exact cell text over a set's special-instructions column
SPECIAL_MARKER = "Special"

# Exact cell text that opens a block of edition (regional/version) columns
EDITION_MARKER = "Edition"

# A title cell must be longer than this many bytes (UTF-8) to count
MIN_TITLE_BYTES = 3


# ─── Suite Literals ──────────────────────────────────────────────────────────

PROMPT_LITERAL = "Prompt"
RESPONSE_LITERAL = "Response"
