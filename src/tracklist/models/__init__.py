"""Models for the tracklist application."""

from .models import ArtistData, CollectionKind, PlaylistData, TrackData

__all__ = [
    "ArtistData",
    "TrackData",
    "PlaylistData",
    "CollectionKind",
]
