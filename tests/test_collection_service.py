"""Tests for the collection service facade."""

import random
import threading

import pytest

from tracklist.config import Config
from tracklist.core.collections import (
    CollectionService,
    DuplicateMembership,
    ReorderFailed,
)


def positions(service, collection_id):
    """Return [(track ID, position)] in order."""
    return [(e.item_id, e.position) for e in service.list_ordered(collection_id)]


class TestCollectionService:
    """Test the end-to-end membership lifecycle."""

    def test_add_reorder_remove(self, service, playlist, make_tracks):
        """Test add, swap, then remove on one playlist."""
        t1, t2 = make_tracks(2)

        assert service.add_item(playlist.id, t1.id, actor_id="user-1").position == 1
        assert service.add_item(playlist.id, t2.id, actor_id="user-1").position == 2

        service.reorder(playlist.id, [(t1.id, 2), (t2.id, 1)])
        assert [e.item_id for e in service.list_ordered(playlist.id)] == [t2.id, t1.id]

        assert service.remove_item(playlist.id, t2.id) is True
        assert positions(service, playlist.id) == [(t1.id, 2)]

    def test_duplicate_add(self, service, playlist, make_tracks):
        """Test that adding a member twice raises."""
        (track,) = make_tracks(1)
        service.add_item(playlist.id, track.id, actor_id="user-1")

        with pytest.raises(DuplicateMembership):
            service.add_item(playlist.id, track.id, actor_id="user-1")

    def test_is_member_and_clear(self, service, playlist, make_tracks):
        """Test membership checks around clear."""
        first, second = make_tracks(2)
        service.add_item(playlist.id, first.id, actor_id="user-1")
        service.add_item(playlist.id, second.id, actor_id="user-1")

        assert service.is_member(playlist.id, first.id) is True
        assert service.clear(playlist.id) == 2
        assert service.is_member(playlist.id, first.id) is False
        assert service.summarize(playlist.id).track_count == 0

    def test_queue_behaves_like_playlist(self, db, service, make_tracks):
        """Test that play queues share the same membership rules."""
        queue = db.create_playlist(
            {"owner_id": "user-1", "name": "Up next", "kind": "queue"}
        )
        first, second = make_tracks(2)
        service.add_item(queue.id, first.id, actor_id="user-1")
        service.add_item(queue.id, second.id, actor_id="user-1")

        service.move_item(queue.id, 1, 0)

        assert positions(service, queue.id) == [(second.id, 1), (first.id, 2)]

    def test_from_database_uses_configured_retries(self, db, monkeypatch, tmp_path):
        """Test building the service from a DatabaseService and Config."""
        monkeypatch.setenv("TRACKLIST_DATABASE_PATH", str(tmp_path / "cfg.db"))
        monkeypatch.setenv("TRACKLIST_ADD_RETRIES", "7")

        service = CollectionService.from_database(db, Config())

        assert service.memberships.max_retries == 7
        assert CollectionService.from_database(db).memberships.max_retries == 5


class TestConcurrentAdds:
    """Test that simultaneous adds never share a position."""

    def test_parallel_adds_get_distinct_positions(
        self, service, playlist, make_tracks
    ):
        """Test four threads appending different tracks at the same moment."""
        tracks = make_tracks(4)
        barrier = threading.Barrier(len(tracks))
        results = {}
        errors = []

        def add(track_id):
            barrier.wait()
            try:
                membership = service.add_item(playlist.id, track_id, actor_id="user-1")
                results[track_id] = membership.position
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=add, args=(t.id,)) for t in tracks]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=60)

        assert errors == []
        assert sorted(results.values()) == [1, 2, 3, 4]
        assert sorted(p for _, p in positions(service, playlist.id)) == [1, 2, 3, 4]

    def test_parallel_duplicate_adds(self, service, playlist, make_tracks):
        """Test that only one of two simultaneous adds of a track succeeds."""
        (track,) = make_tracks(1)
        barrier = threading.Barrier(2)
        outcomes = []

        def add():
            barrier.wait()
            try:
                service.add_item(playlist.id, track.id, actor_id="user-1")
                outcomes.append("added")
            except DuplicateMembership:
                outcomes.append("duplicate")

        threads = [threading.Thread(target=add) for _ in range(2)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=60)

        assert sorted(outcomes) == ["added", "duplicate"]
        assert positions(service, playlist.id) == [(track.id, 1)]


class TestPositionInvariants:
    """Test that positions stay unique and ordered through mixed operations."""

    def test_random_operation_sequence(self, service, playlist, make_tracks):
        """Test uniqueness after a seeded sequence of adds, removes and moves."""
        rng = random.Random(1234)
        track_ids = [track.id for track in make_tracks(8)]

        for _ in range(60):
            members = [e.item_id for e in service.list_ordered(playlist.id)]
            outsiders = [t for t in track_ids if t not in members]
            action = rng.choice(["add", "remove", "move"])

            if action == "add" and outsiders:
                service.add_item(playlist.id, rng.choice(outsiders), actor_id="u")
            elif action == "remove" and members:
                service.remove_item(playlist.id, rng.choice(members))
            elif action == "move" and len(members) > 1:
                service.move_item(
                    playlist.id,
                    rng.randrange(len(members)),
                    rng.randrange(len(members)),
                )

            current = positions(service, playlist.id)
            values = [p for _, p in current]
            assert len(values) == len(set(values))
            assert values == sorted(values)
            assert all(p >= 1 for p in values)
            assert len({item for item, _ in current}) == len(current)


class TestReorderItems:
    """Test persisting a full order given as track IDs."""

    def test_permutation(self, service, playlist, make_tracks):
        """Test that the existing positions are handed out in the new order."""
        t1, t2, t3 = make_tracks(3)
        for track in (t1, t2, t3):
            service.add_item(playlist.id, track.id, actor_id="user-1")
        service.remove_item(playlist.id, t2.id)
        service.add_item(playlist.id, t2.id, actor_id="user-1")

        applied = service.reorder_items(playlist.id, [t2.id, t3.id, t1.id])

        assert applied == [(t2.id, 1), (t3.id, 3), (t1.id, 4)]
        assert positions(service, playlist.id) == applied

    @pytest.mark.parametrize("drop_last, extra", [(True, False), (False, True)])
    def test_not_a_permutation(
        self, service, playlist, make_tracks, drop_last, extra
    ):
        """Test that missing or foreign tracks are rejected."""
        tracks = make_tracks(3)
        for track in tracks[:2]:
            service.add_item(playlist.id, track.id, actor_id="user-1")
        order = [tracks[1].id, tracks[0].id]
        if drop_last:
            order = order[:1]
        if extra:
            order.append(tracks[2].id)

        with pytest.raises(ReorderFailed):
            service.reorder_items(playlist.id, order)

        assert positions(service, playlist.id) == [
            (tracks[0].id, 1),
            (tracks[1].id, 2),
        ]


class TestMoveItem:
    """Test index-based moves."""

    @pytest.fixture
    def members(self, service, playlist, make_tracks):
        """Three members at positions 1, 2 and 3."""
        tracks = make_tracks(3)
        for track in tracks:
            service.add_item(playlist.id, track.id, actor_id="user-1")
        return [track.id for track in tracks]

    def test_move_forward(self, service, playlist, members):
        """Test moving the first track to the end."""
        a, b, c = members

        service.move_item(playlist.id, 0, 2)

        assert positions(service, playlist.id) == [(b, 1), (c, 2), (a, 3)]

    def test_move_backward(self, service, playlist, members):
        """Test moving the last track to the front."""
        a, b, c = members

        service.move_item(playlist.id, 2, 0)

        assert positions(service, playlist.id) == [(c, 1), (a, 2), (b, 3)]

    def test_move_keeps_gaps(self, service, playlist, members):
        """Test that position values survive a move."""
        a, b, c = members
        service.remove_item(playlist.id, b)

        service.move_item(playlist.id, 1, 0)

        assert positions(service, playlist.id) == [(c, 1), (a, 3)]

    def test_same_index_is_noop(self, service, playlist, members):
        """Test that moving onto itself changes nothing."""
        before = positions(service, playlist.id)

        assert service.move_item(playlist.id, 1, 1) == before
        assert positions(service, playlist.id) == before

    @pytest.mark.parametrize("from_index, to_index", [(3, 0), (0, 3), (-1, 0)])
    def test_out_of_range(self, service, playlist, members, from_index, to_index):
        """Test that indices must address an existing track."""
        with pytest.raises(IndexError):
            service.move_item(playlist.id, from_index, to_index)
