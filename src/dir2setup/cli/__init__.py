"""Command-line interface for dir2setup."""
