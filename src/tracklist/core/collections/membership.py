"""Membership store: which tracks belong to which collection, at which position.

Adds append at ``max(position) + 1``. Concurrent adds against the same collection
are made safe by computing the position inside the INSERT statement and by the
``uq_playlist_position`` constraint: an insert that loses a position race fails
with an integrity error and is retried with a freshly computed position.
Removals never renumber the surviving rows.
"""

import logging
from typing import Callable

from sqlalchemy import delete, insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...database.models import Playlist, PlaylistTrack, Track, utcnow
from .errors import CollectionNotFound, DuplicateMembership, ItemNotFound
from .positions import PositionAllocator

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], Session]


class MembershipStore:
    """Maps (collection ID, track ID) to a position."""

    def __init__(self, session_factory: SessionFactory, max_retries: int = 5) -> None:
        """Initialize membership store.

        Args:
            session_factory: Callable returning a new SQLAlchemy session
            max_retries: Attempts for an add that keeps losing position races
        """
        if max_retries < 1:
            raise ValueError("max_retries must be at least 1")
        self._session_factory = session_factory
        self.max_retries = max_retries

    def add_item(self, collection_id: int, item_id: int, added_by: str) -> PlaylistTrack:
        """Append a track to a collection.

        Args:
            collection_id: Playlist database ID
            item_id: Track database ID
            added_by: Identifier of the actor adding the track

        Returns:
            The created PlaylistTrack

        Raises:
            DuplicateMembership: The track is already in the collection
            CollectionNotFound: The collection does not exist
            ItemNotFound: The track does not exist
            ValueError: added_by is empty
            IntegrityError: Position conflicts persisted past max_retries, or the
                insert broke a constraint other than position uniqueness
        """
        if not added_by:
            raise ValueError("added_by must identify the actor adding the track")

        last_error: IntegrityError
        for attempt in range(1, self.max_retries + 1):
            with self._session_factory() as session:
                try:
                    session.execute(
                        insert(PlaylistTrack).values(
                            playlist_id=collection_id,
                            track_id=item_id,
                            position=PositionAllocator.next_position_clause(
                                collection_id
                            ),
                            added_by=added_by,
                            added_at=utcnow(),
                        )
                    )
                    membership = session.scalars(
                        select(PlaylistTrack).where(
                            PlaylistTrack.playlist_id == collection_id,
                            PlaylistTrack.track_id == item_id,
                        )
                    ).one()
                    session.commit()
                    session.refresh(membership)
                except IntegrityError as exc:
                    session.rollback()
                    self._raise_for_conflict(session, collection_id, item_id, exc)
                    logger.debug(
                        "Position conflict adding track %s to collection %s "
                        "(attempt %s/%s)",
                        item_id,
                        collection_id,
                        attempt,
                        self.max_retries,
                    )
                    last_error = exc
                    continue

            logger.info(
                "Added track %s to collection %s at position %s",
                item_id,
                collection_id,
                membership.position,
            )
            return membership

        logger.error(
            "Giving up adding track %s to collection %s after %s attempts",
            item_id,
            collection_id,
            self.max_retries,
        )
        raise last_error

    @staticmethod
    def _raise_for_conflict(
        session: Session, collection_id: int, item_id: int, exc: IntegrityError
    ) -> None:
        """Translate an insert failure unless it was a lost position race."""
        if MembershipStore._exists(session, collection_id, item_id):
            raise DuplicateMembership(collection_id, item_id) from exc
        if session.get(Playlist, collection_id) is None:
            raise CollectionNotFound(collection_id) from exc
        if session.get(Track, item_id) is None:
            raise ItemNotFound(item_id) from exc
        if not MembershipStore._is_position_conflict(exc):
            raise exc

    @staticmethod
    def _is_position_conflict(exc: IntegrityError) -> bool:
        # SQLite names the columns, other backends name the constraint
        constraint_name = getattr(exc.orig, "constraint_name", "") or ""
        message = str(exc.orig)
        return (
            "uq_playlist_position" in constraint_name
            or "uq_playlist_position" in message
            or "playlist_tracks.position" in message
        )

    def remove_item(self, collection_id: int, item_id: int) -> bool:
        """Remove a track from a collection.

        Args:
            collection_id: Playlist database ID
            item_id: Track database ID

        Returns:
            True if a membership was deleted, False if the track was not a member
        """
        with self._session_factory() as session:
            result = session.execute(
                delete(PlaylistTrack).where(
                    PlaylistTrack.playlist_id == collection_id,
                    PlaylistTrack.track_id == item_id,
                )
            )
            removed = bool(result.rowcount)
            session.commit()

        if removed:
            logger.info("Removed track %s from collection %s", item_id, collection_id)
        else:
            logger.debug(
                "Track %s is not in collection %s, nothing removed",
                item_id,
                collection_id,
            )
        return removed

    def is_member(self, collection_id: int, item_id: int) -> bool:
        """Check whether a track is in a collection."""
        with self._session_factory() as session:
            return self._exists(session, collection_id, item_id)

    def clear(self, collection_id: int) -> int:
        """Remove every track from a collection.

        Returns:
            Number of memberships deleted
        """
        with self._session_factory() as session:
            result = session.execute(
                delete(PlaylistTrack).where(PlaylistTrack.playlist_id == collection_id)
            )
            cleared = int(result.rowcount or 0)
            session.commit()

        logger.info("Cleared %s track(s) from collection %s", cleared, collection_id)
        return cleared

    @staticmethod
    def _exists(session: Session, collection_id: int, item_id: int) -> bool:
        stmt = (
            select(PlaylistTrack.id)
            .where(
                PlaylistTrack.playlist_id == collection_id,
                PlaylistTrack.track_id == item_id,
            )
            .limit(1)
        )
        return session.scalar(stmt) is not None
