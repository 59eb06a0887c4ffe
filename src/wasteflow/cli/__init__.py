"""Command-line interface for WasteFlow."""
