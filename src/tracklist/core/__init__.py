"""Core business logic modules for the tracklist application.

- collections: ordered membership of tracks in playlists and play queues
"""

__all__: list[str] = []
