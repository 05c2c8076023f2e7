"""Application-facing service for playlists and play queues."""

import logging
from typing import Callable, Iterable, List, Optional, Tuple

from sqlalchemy.orm import Session

from ...config import Config
from ...database.models import PlaylistTrack
from ...database.service import DatabaseService
from .errors import ReorderFailed
from .membership import MembershipStore
from .ordered_read import CollectionSummary, OrderedEntry, OrderedReader
from .reorder import ReorderTransaction

logger = logging.getLogger(__name__)


class CollectionService:
    """Ordered membership operations for one data store.

    The data store is injected as a session factory; nothing is read from global
    state. The actor identity is passed per call.
    """

    def __init__(
        self, session_factory: Callable[[], Session], max_retries: int = 5
    ) -> None:
        """Initialize collection service.

        Args:
            session_factory: Callable returning a new SQLAlchemy session
            max_retries: Attempts for an add that keeps losing position races
        """
        self.memberships = MembershipStore(session_factory, max_retries=max_retries)
        self.reorderer = ReorderTransaction(session_factory)
        self.reader = OrderedReader(session_factory)

    @classmethod
    def from_database(
        cls, db_service: DatabaseService, config: Optional[Config] = None
    ) -> "CollectionService":
        """Build a service on top of a DatabaseService."""
        max_retries = config.add_retries if config is not None else 5
        return cls(db_service.get_session, max_retries=max_retries)

    def add_item(self, collection_id: int, item_id: int, actor_id: str) -> PlaylistTrack:
        """Append a track; raises DuplicateMembership if it is already present."""
        return self.memberships.add_item(collection_id, item_id, added_by=actor_id)

    def remove_item(self, collection_id: int, item_id: int) -> bool:
        """Remove a track; False if it was not a member."""
        return self.memberships.remove_item(collection_id, item_id)

    def is_member(self, collection_id: int, item_id: int) -> bool:
        """Check whether a track is in a collection."""
        return self.memberships.is_member(collection_id, item_id)

    def reorder(
        self, collection_id: int, new_order: Iterable[Tuple[int, int]]
    ) -> None:
        """Apply (track ID, position) pairs atomically; raises ReorderFailed."""
        self.reorderer.apply(collection_id, new_order)

    def list_ordered(self, collection_id: int) -> List[OrderedEntry]:
        """List tracks in position order."""
        return self.reader.list_ordered(collection_id)

    def summarize(self, collection_id: int) -> CollectionSummary:
        """Track count and total duration of a collection."""
        return self.reader.summarize(collection_id)

    def clear(self, collection_id: int) -> int:
        """Remove every track from a collection."""
        return self.memberships.clear(collection_id)

    def reorder_items(
        self, collection_id: int, item_ids: Iterable[int]
    ) -> List[Tuple[int, int]]:
        """Persist a full new order given as a sequence of track IDs.

        The collection's current position values are reassigned in the given
        order.

        Raises:
            ReorderFailed: item_ids is not a permutation of the current members
        """
        requested = [int(item_id) for item_id in item_ids]
        entries = self.list_ordered(collection_id)
        if sorted(requested) != sorted(entry.item_id for entry in entries):
            raise ReorderFailed(
                collection_id, "new order must list every member exactly once"
            )

        assignments = list(zip(requested, [entry.position for entry in entries]))
        self.reorder(collection_id, assignments)
        return assignments

    def move_item(
        self, collection_id: int, from_index: int, to_index: int
    ) -> List[Tuple[int, int]]:
        """Move the track at one index to another and persist the new order.

        Indices are 0-based over the current order. The collection's existing
        position values are kept and handed out again in the new order, so gaps
        survive a move. Intended to run once when a drag gesture ends.

        Args:
            collection_id: Playlist database ID
            from_index: Current index of the track to move
            to_index: Index the track should end up at

        Returns:
            The (track ID, position) assignments that were applied

        Raises:
            IndexError: An index is outside the collection
            ReorderFailed: The collection changed underneath the move
        """
        entries = self.list_ordered(collection_id)
        size = len(entries)
        for name, index in (("from_index", from_index), ("to_index", to_index)):
            if not 0 <= index < size:
                raise IndexError(
                    f"{name} {index} out of range for collection of {size} track(s)"
                )

        order = [entry.item_id for entry in entries]
        order.insert(to_index, order.pop(from_index))
        positions = [entry.position for entry in entries]
        assignments = list(zip(order, positions))

        if from_index != to_index:
            self.reorder(collection_id, assignments)
            logger.debug(
                "Moved track %s in collection %s from index %s to %s",
                order[to_index],
                collection_id,
                from_index,
                to_index,
            )
        return assignments
