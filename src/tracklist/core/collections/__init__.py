"""Ordered collection membership.

Position allocation, membership storage, atomic reordering and ordered reads for
playlists and play queues.
"""

from .errors import (
    CollectionError,
    CollectionNotFound,
    DuplicateMembership,
    ItemNotFound,
    ReorderFailed,
)
from .membership import MembershipStore
from .ordered_read import CollectionSummary, OrderedEntry, OrderedReader
from .positions import PositionAllocator
from .reorder import ReorderTransaction
from .service import CollectionService

__all__ = [
    # Components
    "PositionAllocator",
    "MembershipStore",
    "ReorderTransaction",
    "OrderedReader",
    "CollectionService",
    # Results
    "OrderedEntry",
    "CollectionSummary",
    # Errors
    "CollectionError",
    "CollectionNotFound",
    "DuplicateMembership",
    "ItemNotFound",
    "ReorderFailed",
]
