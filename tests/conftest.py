"""Shared test configuration and fixtures."""

from pathlib import Path

import pytest
from dotenv import load_dotenv

# Load .env from project root for all tests
root = Path(__file__).parent.parent.resolve()
load_dotenv(root / ".env")

DATA_DIR = Path(__file__).parent / "data"


@pytest.fixture
def two_decks_csv() -> Path:
    """Sheet export with two side-by-side decks, an edition row and a recurring header."""
    return DATA_DIR / "two_decks.csv"
