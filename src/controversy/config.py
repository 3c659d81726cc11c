"""Shared configuration for the card-set importer, read from the environment and ROOT/.env."""

import os
from pathlib import Path

from dotenv import load_dotenv

ROOT = Path(__file__).parent.parent.parent.resolve()
load_dotenv(ROOT / ".env")


def _env_flag(name: str, default: bool) -> bool:
    """Read a boolean environment variable ('1', 'true', 'yes', 'on' are true)."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


# Root directory for persisted sets (one JSON file per set under sets/)
DATA_DIR = Path(os.getenv("CONTROVERSY_DATA_DIR", str(ROOT / "data")))

# Sheet exports carry a leading header record that holds no set data
SKIP_HEADER_ROW = _env_flag("CONTROVERSY_SKIP_HEADER_ROW", True)

# Reject records whose field count differs from the first record
STRICT_ROWS = _env_flag("CONTROVERSY_STRICT_ROWS", True)

# Upload server bind address
HOST = os.getenv("CONTROVERSY_HOST", "127.0.0.1")
PORT = int(os.getenv("CONTROVERSY_PORT", "12001"))

# Persist parsed uploads to the set store instead of only reporting them
PERSIST_UPLOADS = _env_flag("CONTROVERSY_PERSIST_UPLOADS", False)

# Number of card texts echoed back per set by the upload endpoint
UPLOAD_SAMPLE_SIZE = 10


def sets_dir(data_dir: Path | None = None) -> Path:
    """Return the directory holding one JSON file per stored set."""
    return (data_dir or DATA_DIR) / "sets"
