"""Reading a collection back in position order."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ...database.models import Artist, PlaylistTrack, Track

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OrderedEntry:
    """One membership joined with its track and artist."""

    item_id: int
    position: int
    added_at: datetime
    added_by: str
    title: str
    artist_id: int
    artist_name: str
    duration: int
    audio_url: str
    cover_url: Optional[str] = None
    genres: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert entry to a JSON-friendly dictionary."""
        return {
            "item_id": self.item_id,
            "position": self.position,
            "added_at": self.added_at.isoformat(),
            "added_by": self.added_by,
            "title": self.title,
            "artist_id": self.artist_id,
            "artist_name": self.artist_name,
            "duration": self.duration,
            "audio_url": self.audio_url,
            "cover_url": self.cover_url,
            "genres": list(self.genres),
        }


@dataclass(frozen=True)
class CollectionSummary:
    """Aggregate figures for a collection."""

    collection_id: int
    track_count: int
    total_duration: int  # seconds


class OrderedReader:
    """Materializes collections in ascending position order."""

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        """Initialize with a callable returning a new SQLAlchemy session."""
        self._session_factory = session_factory

    def list_ordered(self, collection_id: int) -> List[OrderedEntry]:
        """List a collection's tracks ordered by position.

        An empty or unknown collection yields an empty list.
        """
        stmt = (
            select(
                PlaylistTrack.track_id,
                PlaylistTrack.position,
                PlaylistTrack.added_at,
                PlaylistTrack.added_by,
                Track.title,
                Track.artist_id,
                Artist.name.label("artist_name"),
                Track.duration,
                Track.audio_url,
                Track.cover_url,
                Track.genres,
            )
            .join(Track, Track.id == PlaylistTrack.track_id)
            .join(Artist, Artist.id == Track.artist_id)
            .where(PlaylistTrack.playlist_id == collection_id)
            .order_by(PlaylistTrack.position)
        )

        with self._session_factory() as session:
            rows = session.execute(stmt).all()

        entries = [
            OrderedEntry(
                item_id=row.track_id,
                position=row.position,
                added_at=row.added_at,
                added_by=row.added_by,
                title=row.title,
                artist_id=row.artist_id,
                artist_name=row.artist_name,
                duration=row.duration,
                audio_url=row.audio_url,
                cover_url=row.cover_url,
                genres=list(row.genres or []),
            )
            for row in rows
        ]
        logger.debug("Read %s track(s) from collection %s", len(entries), collection_id)
        return entries

    def summarize(self, collection_id: int) -> CollectionSummary:
        """Count a collection's tracks and sum their durations."""
        stmt = (
            select(
                func.count(PlaylistTrack.id),
                func.coalesce(func.sum(Track.duration), 0),
            )
            .join(Track, Track.id == PlaylistTrack.track_id)
            .where(PlaylistTrack.playlist_id == collection_id)
        )
        with self._session_factory() as session:
            track_count, total_duration = session.execute(stmt).one()

        return CollectionSummary(
            collection_id=collection_id,
            track_count=int(track_count),
            total_duration=int(total_duration),
        )
