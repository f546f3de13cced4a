"""Command-line interface for woff2-batch."""
