"""Command-line interface for billscan."""
