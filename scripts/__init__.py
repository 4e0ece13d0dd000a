"""Command-line tools for the inventory reconciliation engine."""
