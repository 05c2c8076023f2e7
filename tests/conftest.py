"""Shared test fixtures."""

import logging

import pytest

from tracklist.core.collections import CollectionService
from tracklist.database.service import DatabaseService


@pytest.fixture
def db(tmp_path):
    """Create a temporary database for testing."""
    db_service = DatabaseService(tmp_path / "collections.db")
    yield db_service
    db_service.close()


@pytest.fixture
def service(db):
    """Collection service bound to the temporary database."""
    return CollectionService(db.get_session, max_retries=5)


@pytest.fixture
def playlist(db):
    """An empty playlist owned by user-1."""
    return db.create_playlist({"owner_id": "user-1", "name": "Test Playlist"})


@pytest.fixture
def make_tracks(db):
    """Factory creating catalog tracks, one artist each."""

    def _make(count, duration=180):
        tracks = []
        for index in range(1, count + 1):
            artist = db.create_artist({"name": f"Artist {index}"})
            tracks.append(
                db.create_track(
                    {
                        "artist_id": artist.id,
                        "title": f"Track {index}",
                        "duration": duration,
                        "audio_url": f"s3://audio/track-{index}.mp3",
                        "genres": ["house"],
                    }
                )
            )
        return tracks

    return _make


@pytest.fixture
def restore_logging():
    """Restore root handlers and tracklist logger levels after a test."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    for handler in root_logger.handlers:
        if handler not in handlers:
            handler.close()
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)
    for name in list(logging.root.manager.loggerDict):
        if name.startswith("tracklist"):
            logging.getLogger(name).setLevel(logging.NOTSET)
