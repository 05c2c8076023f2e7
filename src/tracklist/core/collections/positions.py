"""Next-position computation for ordered collections."""

from typing import Any

from sqlalchemy import func, select
from sqlalchemy.orm import Session, aliased

from ...database.models import PlaylistTrack


class PositionAllocator:
    """Computes the append position for a collection (max + 1, or 1 if empty)."""

    @staticmethod
    def next_position(session: Session, collection_id: int) -> int:
        """Read the next insertion position for a collection.

        Args:
            session: Open database session
            collection_id: Playlist database ID

        Returns:
            1 + the current maximum position, or 1 for an empty collection
        """
        stmt = select(func.coalesce(func.max(PlaylistTrack.position), 0)).where(
            PlaylistTrack.playlist_id == collection_id
        )
        return int(session.scalar(stmt) or 0) + 1

    @staticmethod
    def next_position_clause(collection_id: int) -> Any:
        """Same computation as a scalar subquery.

        Embedding this in the INSERT makes the read of max(position) and the insert
        a single statement.
        """
        existing = aliased(PlaylistTrack, name="existing")
        return (
            select(func.coalesce(func.max(existing.position), 0) + 1)
            .where(existing.playlist_id == collection_id)
            .scalar_subquery()
        )
