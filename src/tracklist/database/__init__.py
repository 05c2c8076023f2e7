"""Database package for the track catalog and ordered collections.

This package only contains the persistence layer (models and service). Ordering
logic lives in tracklist.core.collections.
"""

from .models import (
    Artist,
    Base,
    CollectionKind,
    Playlist,
    PlaylistTrack,
    Track,
)
from .service import DatabaseService

__all__ = [
    # Models
    "Artist",
    "Base",
    "Track",
    "Playlist",
    "PlaylistTrack",
    "CollectionKind",
    # Database service
    "DatabaseService",
]
