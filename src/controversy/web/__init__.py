"""Upload server for card-sheet exports."""
