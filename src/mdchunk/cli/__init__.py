"""Command-line interface for mdchunk."""
