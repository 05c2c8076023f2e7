"""CLI display and formatting utilities."""

from .formatters import (
    display_ordered_entries,
    display_playlists,
    display_statistics,
    display_tracks,
    format_duration,
)

__all__ = [
    "display_ordered_entries",
    "display_playlists",
    "display_statistics",
    "display_tracks",
    "format_duration",
]
