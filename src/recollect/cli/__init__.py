"""Command-line interface for recollect."""
