"""Command-line interface for the tracklist application."""
