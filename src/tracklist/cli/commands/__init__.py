"""CLI command modules."""

from .app import TracklistApp
from .catalog import catalog
from .database import db
from .playlist import playlist

__all__ = [
    "TracklistApp",
    "catalog",
    "db",
    "playlist",
]
