"""Tests for the membership store."""

from unittest.mock import patch

import pytest
from sqlalchemy import literal
from sqlalchemy.exc import IntegrityError

from tracklist.core.collections import (
    CollectionNotFound,
    DuplicateMembership,
    ItemNotFound,
    MembershipStore,
    PositionAllocator,
)


@pytest.fixture
def store(db):
    """Membership store bound to the temporary database."""
    return MembershipStore(db.get_session, max_retries=3)


def positions(service, collection_id):
    """Return [(track ID, position)] in order."""
    return [(e.item_id, e.position) for e in service.list_ordered(collection_id)]


class TestAddItem:
    """Test appending tracks."""

    def test_first_item_gets_position_one(self, store, playlist, make_tracks):
        """Test adding to an empty collection."""
        (track,) = make_tracks(1)

        membership = store.add_item(playlist.id, track.id, added_by="user-1")

        assert membership.position == 1
        assert membership.playlist_id == playlist.id
        assert membership.track_id == track.id
        assert membership.added_by == "user-1"
        assert membership.added_at is not None

    def test_appends_after_maximum(self, store, service, playlist, make_tracks):
        """Test that each add lands one past the current maximum."""
        tracks = make_tracks(3)
        for track in tracks:
            store.add_item(playlist.id, track.id, added_by="user-1")

        assert positions(service, playlist.id) == [
            (tracks[0].id, 1),
            (tracks[1].id, 2),
            (tracks[2].id, 3),
        ]

    def test_gap_is_not_filled(self, store, service, playlist, make_tracks):
        """Test that removing a middle track leaves its position unused."""
        tracks = make_tracks(4)
        for track in tracks[:3]:
            store.add_item(playlist.id, track.id, added_by="user-1")
        store.remove_item(playlist.id, tracks[1].id)

        membership = store.add_item(playlist.id, tracks[3].id, added_by="user-1")

        assert membership.position == 4
        assert [p for _, p in positions(service, playlist.id)] == [1, 3, 4]

    def test_duplicate_is_rejected(self, store, service, playlist, make_tracks):
        """Test that a track can be in a collection only once."""
        (track,) = make_tracks(1)
        store.add_item(playlist.id, track.id, added_by="user-1")

        with pytest.raises(DuplicateMembership) as exc_info:
            store.add_item(playlist.id, track.id, added_by="user-2")

        assert exc_info.value.collection_id == playlist.id
        assert exc_info.value.item_id == track.id
        assert positions(service, playlist.id) == [(track.id, 1)]

    def test_same_track_in_two_collections(self, db, store, make_tracks):
        """Test that membership is per collection."""
        (track,) = make_tracks(1)
        first = db.create_playlist({"owner_id": "user-1", "name": "First"})
        second = db.create_playlist({"owner_id": "user-1", "name": "Second"})

        assert store.add_item(first.id, track.id, added_by="user-1").position == 1
        assert store.add_item(second.id, track.id, added_by="user-1").position == 1

    def test_missing_collection(self, store, make_tracks):
        """Test adding to a collection that does not exist."""
        (track,) = make_tracks(1)
        with pytest.raises(CollectionNotFound):
            store.add_item(999, track.id, added_by="user-1")

    def test_missing_track(self, store, playlist):
        """Test adding a track that does not exist."""
        with pytest.raises(ItemNotFound):
            store.add_item(playlist.id, 999, added_by="user-1")

    def test_lost_position_race_is_retried(self, store, playlist, make_tracks):
        """Test that a position collision is retried with a fresh position."""
        first, second = make_tracks(2)
        store.add_item(playlist.id, first.id, added_by="user-1")

        real_clause = PositionAllocator.next_position_clause
        calls = []

        def stale_then_real(collection_id):
            calls.append(collection_id)
            if len(calls) == 1:
                # Simulates a concurrent add having taken position 1 already
                return literal(1)
            return real_clause(collection_id)

        with patch.object(
            PositionAllocator, "next_position_clause", side_effect=stale_then_real
        ):
            membership = store.add_item(playlist.id, second.id, added_by="user-1")

        assert len(calls) == 2
        assert membership.position == 2

    def test_retries_are_bounded(self, store, playlist, make_tracks):
        """Test that persistent collisions surface after max_retries attempts."""
        first, second = make_tracks(2)
        store.add_item(playlist.id, first.id, added_by="user-1")

        with patch.object(
            PositionAllocator, "next_position_clause", return_value=literal(1)
        ) as clause:
            with pytest.raises(IntegrityError):
                store.add_item(playlist.id, second.id, added_by="user-1")

        assert clause.call_count == 3
        assert store.is_member(playlist.id, second.id) is False

    @pytest.mark.parametrize("added_by", [None, ""])
    def test_actor_required(self, store, playlist, make_tracks, added_by):
        """Test that an add without an actor is rejected before touching the store."""
        (track,) = make_tracks(1)

        with pytest.raises(ValueError, match="added_by"):
            store.add_item(playlist.id, track.id, added_by=added_by)

        assert store.is_member(playlist.id, track.id) is False

    def test_other_constraint_failures_are_not_retried(
        self, store, playlist, make_tracks
    ):
        """Test that only position collisions are retried."""
        (track,) = make_tracks(1)

        with patch("tracklist.core.collections.membership.utcnow", return_value=None):
            with patch.object(
                PositionAllocator,
                "next_position_clause",
                wraps=PositionAllocator.next_position_clause,
            ) as clause:
                with pytest.raises(IntegrityError):
                    store.add_item(playlist.id, track.id, added_by="user-1")

        assert clause.call_count == 1
        assert store.is_member(playlist.id, track.id) is False

    def test_max_retries_must_be_positive(self, db):
        """Test constructor validation."""
        with pytest.raises(ValueError):
            MembershipStore(db.get_session, max_retries=0)


class TestRemoveItem:
    """Test removing tracks."""

    def test_remove_member(self, store, playlist, make_tracks):
        """Test removing a member returns True."""
        (track,) = make_tracks(1)
        store.add_item(playlist.id, track.id, added_by="user-1")

        assert store.remove_item(playlist.id, track.id) is True
        assert store.is_member(playlist.id, track.id) is False

    def test_remove_non_member(self, store, playlist, make_tracks):
        """Test removing a track that is not a member is a no-op."""
        (track,) = make_tracks(1)
        assert store.remove_item(playlist.id, track.id) is False

    def test_remove_does_not_renumber(self, store, service, playlist, make_tracks):
        """Test that survivors keep their positions."""
        tracks = make_tracks(3)
        for track in tracks:
            store.add_item(playlist.id, track.id, added_by="user-1")

        store.remove_item(playlist.id, tracks[0].id)

        assert positions(service, playlist.id) == [
            (tracks[1].id, 2),
            (tracks[2].id, 3),
        ]

    def test_track_can_be_added_again(self, store, playlist, make_tracks):
        """Test that a removed track may be re-added at the end."""
        first, second = make_tracks(2)
        store.add_item(playlist.id, first.id, added_by="user-1")
        store.add_item(playlist.id, second.id, added_by="user-1")
        store.remove_item(playlist.id, first.id)

        assert store.add_item(playlist.id, first.id, added_by="user-1").position == 3


class TestClear:
    """Test clearing a collection."""

    def test_clear(self, store, service, playlist, make_tracks):
        """Test that clear removes every membership and reports the count."""
        for track in make_tracks(3):
            store.add_item(playlist.id, track.id, added_by="user-1")

        assert store.clear(playlist.id) == 3
        assert service.list_ordered(playlist.id) == []

    def test_clear_empty(self, store, playlist):
        """Test clearing an empty collection."""
        assert store.clear(playlist.id) == 0

    def test_positions_restart_after_clear(self, store, playlist, make_tracks):
        """Test that an emptied collection appends at position 1 again."""
        first, second = make_tracks(2)
        store.add_item(playlist.id, first.id, added_by="user-1")
        store.clear(playlist.id)

        assert store.add_item(playlist.id, second.id, added_by="user-1").position == 1
