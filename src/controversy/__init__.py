"""Import card sets (prompt and response cards) from wide spreadsheet exports."""
