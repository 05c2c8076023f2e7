"""Tests for validated input models."""

import pytest
from pydantic import ValidationError

from tracklist.models import ArtistData, CollectionKind, PlaylistData, TrackData


class TestArtistData:
    """Test artist input validation."""

    def test_name_is_stripped(self):
        """Test whitespace handling."""
        assert ArtistData(name="  Nina Simone ").name == "Nina Simone"

    def test_blank_name_rejected(self):
        """Test that a whitespace-only name is rejected."""
        with pytest.raises(ValidationError):
            ArtistData(name="   ")


class TestTrackData:
    """Test track input validation."""

    def test_defaults(self):
        """Test optional fields."""
        data = TrackData(
            artist_id=1, title="Song", duration=120, audio_url="s3://a.mp3"
        )
        assert data.genres == []
        assert data.cover_url is None
        assert data.is_explicit is False

    def test_genres_cleaned(self):
        """Test that blank genres are dropped and None means none."""
        data = TrackData(
            artist_id=1,
            title="Song",
            duration=120,
            audio_url="s3://a.mp3",
            genres=[" jazz ", "", "  "],
        )
        assert data.genres == ["jazz"]

        data = TrackData(
            artist_id=1, title="Song", duration=120, audio_url="s3://a.mp3", genres=None
        )
        assert data.genres == []

    def test_negative_duration_rejected(self):
        """Test duration bounds."""
        with pytest.raises(ValidationError):
            TrackData(artist_id=1, title="Song", duration=-1, audio_url="s3://a.mp3")


class TestPlaylistData:
    """Test collection input validation."""

    def test_default_kind(self):
        """Test that collections are playlists unless stated otherwise."""
        data = PlaylistData(owner_id="user-1", name="Mix")
        assert data.model_dump()["kind"] == "playlist"
        assert data.is_public is True

    def test_queue_kind(self):
        """Test that kinds are stored as plain strings."""
        data = PlaylistData(owner_id="user-1", name="Up next", kind="queue")
        assert data.kind == CollectionKind.QUEUE.value

    def test_unknown_kind_rejected(self):
        """Test that only known kinds validate."""
        with pytest.raises(ValidationError):
            PlaylistData(owner_id="user-1", name="Bad", kind="album")

    def test_owner_required(self):
        """Test that a collection needs an owner."""
        with pytest.raises(ValidationError):
            PlaylistData(owner_id="", name="Orphan")
