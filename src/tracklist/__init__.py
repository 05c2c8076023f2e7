"""tracklist.

Ordered playlists and play queues on top of a relational track catalog. Provides
append-at-end membership, gap-tolerant removal, atomic reordering and ordered reads.
"""

__version__ = "1.0.0"

from .config import Config
from .core.collections import (
    CollectionService,
    DuplicateMembership,
    OrderedEntry,
    ReorderFailed,
)
from .database import DatabaseService

__all__ = [
    "Config",
    "DatabaseService",
    "CollectionService",
    "OrderedEntry",
    "DuplicateMembership",
    "ReorderFailed",
]
