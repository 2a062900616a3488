"""Command-line host."""
