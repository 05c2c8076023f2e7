"""All-or-nothing reordering of a collection."""

import logging
from typing import Callable, Iterable, List, Tuple

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError, OperationalError, StatementError
from sqlalchemy.orm import Session

from ...database.models import PlaylistTrack
from .errors import ReorderFailed

logger = logging.getLogger(__name__)

Assignment = Tuple[int, int]


class ReorderTransaction:
    """Applies a batch of (track ID, position) assignments as one transaction.

    Positions are unique per collection, so a swap cannot be written row by row.
    Moved rows are first parked on negative positions (never used by appends) and
    then given their targets. Any failure rolls back the whole batch.
    """

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        """Initialize with a callable returning a new SQLAlchemy session."""
        self._session_factory = session_factory

    def apply(self, collection_id: int, assignments: Iterable[Assignment]) -> None:
        """Apply new positions to the listed tracks of a collection.

        The caller supplies the final position of every track it moves. Tracks not
        listed keep their position.

        Args:
            collection_id: Playlist database ID
            assignments: (track ID, new position) pairs

        Raises:
            ReorderFailed: A track is not a member, is listed twice, an ID or
                position is not an integer or is out of range, or the new positions
                collide. Nothing is applied.
            OperationalError: The database itself failed; propagated unchanged.
        """
        batch = self._validate(collection_id, assignments)
        if not batch:
            logger.debug("Empty reorder for collection %s", collection_id)
            return

        with self._session_factory() as session:
            try:
                with session.begin():
                    for slot, (item_id, _) in enumerate(batch, start=1):
                        parked = self._set_position(
                            session, collection_id, item_id, -slot
                        )
                        if parked != 1:
                            raise ReorderFailed(
                                collection_id, f"track {item_id} is not a member"
                            )
                    for item_id, position in batch:
                        self._set_position(session, collection_id, item_id, position)
            except IntegrityError as exc:
                logger.warning(
                    "Reorder of collection %s rolled back: position conflict",
                    collection_id,
                )
                raise ReorderFailed(collection_id, "position conflict") from exc
            except OperationalError:
                raise
            except (StatementError, OverflowError) as exc:
                logger.warning(
                    "Reorder of collection %s rolled back: update rejected: %s",
                    collection_id,
                    exc,
                )
                raise ReorderFailed(collection_id, f"update rejected: {exc}") from exc
            except ReorderFailed as exc:
                logger.warning(
                    "Reorder of collection %s rolled back: %s", collection_id, exc.reason
                )
                raise

        logger.info("Reordered %s track(s) in collection %s", len(batch), collection_id)

    @staticmethod
    def _validate(
        collection_id: int, assignments: Iterable[Assignment]
    ) -> List[Assignment]:
        try:
            batch = [
                (int(item_id), int(position)) for item_id, position in assignments
            ]
        except (TypeError, ValueError) as exc:
            raise ReorderFailed(collection_id, f"invalid assignment: {exc}") from exc

        seen = set()
        for item_id, position in batch:
            if item_id in seen:
                raise ReorderFailed(collection_id, f"track {item_id} listed twice")
            if position < 1:
                raise ReorderFailed(
                    collection_id, f"position {position} for track {item_id} < 1"
                )
            seen.add(item_id)
        return batch

    @staticmethod
    def _set_position(
        session: Session, collection_id: int, item_id: int, position: int
    ) -> int:
        result = session.execute(
            update(PlaylistTrack)
            .where(
                PlaylistTrack.playlist_id == collection_id,
                PlaylistTrack.track_id == item_id,
            )
            .values(position=position)
            .execution_options(synchronize_session=False)
        )
        return int(result.rowcount or 0)
