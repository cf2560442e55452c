"""Command-line interface for margee-lib."""
