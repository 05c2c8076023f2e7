"""Database service for the track catalog and collection records."""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from sqlalchemy import create_engine, event, func, inspect, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from alembic import command
from alembic.config import Config as AlembicConfig

from ..models import ArtistData, CollectionKind, PlaylistData, TrackData
from .models import Artist, Base, Playlist, PlaylistTrack, Track, utcnow

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class DatabaseService:
    """Service for engine/session management and catalog/collection CRUD."""

    def __init__(
        self,
        db_path: Optional[Path] = None,
        db_url: Optional[str] = None,
        echo: bool = False,
    ) -> None:
        """Initialize database service.

        Args:
            db_path: Path to SQLite database file.
                    If None, uses default ~/.tracklist/tracklist.db
            db_url: Full SQLAlchemy URL; takes precedence over db_path
            echo: Echo SQL statements through the sqlalchemy logger
        """
        self.db_path: Optional[Path] = None
        is_new = False

        if db_url is None:
            if db_path is None:
                db_path = Path.home() / ".tracklist" / "tracklist.db"
            self.db_path = Path(db_path)
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            is_new = not self.db_path.exists()
            db_url = f"sqlite:///{self.db_path}"

        self.db_url = db_url
        self.engine = self._create_engine(db_url, echo)

        self.SessionLocal = sessionmaker(
            autocommit=False, autoflush=False, expire_on_commit=False, bind=self.engine
        )

        logger.info("Database initialized at: %s", self.engine.url)

        if is_new:
            logger.info("New database detected, initializing schema...")
            self.init_db()

    @staticmethod
    def _create_engine(db_url: str, echo: bool) -> Engine:
        if db_url.startswith("sqlite"):
            engine = create_engine(
                db_url,
                echo=echo,
                connect_args={"check_same_thread": False, "timeout": 30},
            )
            # ON DELETE CASCADE is only honoured with foreign keys enabled
            event.listen(engine, "connect", _enable_sqlite_foreign_keys)
            return engine
        return create_engine(db_url, echo=echo, pool_pre_ping=True)

    def init_db(self) -> None:
        """Initialize database schema.

        Creates all tables from the ORM metadata and stamps Alembic so the database
        is marked as current.
        """
        Base.metadata.create_all(bind=self.engine)
        logger.info("Database schema created successfully")
        self._stamp_migrations()

    def _alembic_config(self) -> Optional[AlembicConfig]:
        # alembic.ini and alembic/ live in the project root, above src/tracklist/
        project_dir = Path(__file__).parent.parent.parent.parent
        alembic_ini = project_dir / "alembic.ini"
        alembic_dir = project_dir / "alembic"

        if not alembic_ini.exists() or not alembic_dir.exists():
            logger.warning("Alembic not found at %s, skipping", project_dir)
            return None

        alembic_cfg = AlembicConfig(str(alembic_ini))
        alembic_cfg.set_main_option("script_location", str(alembic_dir))
        alembic_cfg.set_main_option("sqlalchemy.url", self.db_url)
        return alembic_cfg

    def _stamp_migrations(self) -> None:
        """Stamp database as being at the latest migration version."""
        alembic_cfg = self._alembic_config()
        if alembic_cfg is None:
            return
        try:
            command.stamp(alembic_cfg, "head")
            logger.info("Database stamped with latest migration version")
        except Exception as e:
            logger.error("Failed to stamp migrations: %s", e)
            logger.warning("Database may need manual migration")

    def run_migrations(self) -> bool:
        """Run Alembic migrations to upgrade database to latest version.

        Returns:
            True if migrations ran, False if no Alembic setup was found
        """
        alembic_cfg = self._alembic_config()
        if alembic_cfg is None:
            return False
        command.upgrade(alembic_cfg, "head")
        logger.info("Database migrations applied successfully")
        return True

    def get_session(self) -> Session:
        """Get a new database session.

        Returns:
            SQLAlchemy Session object

        Note:
            Caller is responsible for closing the session
        """
        return self.SessionLocal()

    def is_initialized(self) -> bool:
        """Check whether the required tables exist and a session can be opened."""
        try:
            inspector = inspect(self.engine)
            for table in ("artists", "tracks", "playlists", "playlist_tracks"):
                if not inspector.has_table(table):
                    logger.debug("Required table missing: %s", table)
                    return False

            with self.SessionLocal() as session:
                session.execute(select(1))
            return True
        except Exception as e:
            logger.debug("Database initialization check failed: %s", e)
            return False

    # =========================================================================
    # Catalog Operations
    # =========================================================================

    def create_artist(self, artist_data: Dict[str, Any]) -> Artist:
        """Create a new artist.

        Args:
            artist_data: Artist data dictionary

        Returns:
            Created Artist object

        Raises:
            ValueError: If the data does not validate
        """
        data = ArtistData.model_validate(artist_data)
        with self.get_session() as session:
            artist = Artist(**data.model_dump())
            session.add(artist)
            session.commit()
            session.refresh(artist)
            logger.info("Created artist: %s (ID: %s)", artist.name, artist.id)
            return artist

    def get_artist_by_id(self, artist_id: int) -> Optional[Artist]:
        """Get artist by database ID."""
        with self.get_session() as session:
            return session.get(Artist, artist_id)

    def create_track(self, track_data: Dict[str, Any]) -> Track:
        """Create a new catalog track.

        Args:
            track_data: Track data dictionary (artist_id, title, duration, audio_url,
                and optionally cover_url, genres, is_explicit)

        Returns:
            Created Track object

        Raises:
            ValueError: If the data does not validate or the artist does not exist
        """
        data = TrackData.model_validate(track_data)
        with self.get_session() as session:
            if session.get(Artist, data.artist_id) is None:
                raise ValueError(f"Artist not found: {data.artist_id}")

            track = Track(**data.model_dump())
            session.add(track)
            session.commit()
            session.refresh(track)
            logger.info("Created track: %s (ID: %s)", track.title, track.id)
            return track

    def get_track_by_id(self, track_id: int) -> Optional[Track]:
        """Get track by database ID.

        Args:
            track_id: Track database ID

        Returns:
            Track object or None if not found
        """
        with self.get_session() as session:
            return session.get(Track, track_id)

    def get_all_tracks(self) -> List[Track]:
        """Get all catalog tracks ordered by ID."""
        with self.get_session() as session:
            stmt = select(Track).order_by(Track.id)
            return list(session.scalars(stmt).all())

    def delete_track(self, track_id: int) -> bool:
        """Delete a catalog track.

        Every membership referencing the track is removed with it. Positions of the
        remaining members are left as they are.

        Args:
            track_id: Track database ID

        Returns:
            True if deleted, False if not found
        """
        with self.get_session() as session:
            track = session.get(Track, track_id)
            if not track:
                logger.warning("Track not found for deletion: %s", track_id)
                return False
            session.delete(track)
            session.commit()
            logger.info("Deleted track: %s", track_id)
            return True

    # =========================================================================
    # Collection Operations
    # =========================================================================

    def create_playlist(self, playlist_data: Dict[str, Any]) -> Playlist:
        """Create a new collection.

        Args:
            playlist_data: Playlist data dictionary; requires owner_id and name

        Returns:
            Created Playlist object

        Raises:
            ValueError: If the data does not validate (for example an unknown kind)
        """
        data = PlaylistData.model_validate(playlist_data)
        with self.get_session() as session:
            playlist = Playlist(**data.model_dump())
            session.add(playlist)
            session.commit()
            session.refresh(playlist)
            logger.info(
                "Created %s: %s (ID: %s)", playlist.kind, playlist.name, playlist.id
            )
            return playlist

    def get_playlist_by_id(self, playlist_id: int) -> Optional[Playlist]:
        """Get collection by database ID.

        Args:
            playlist_id: Playlist database ID

        Returns:
            Playlist object or None if not found
        """
        with self.get_session() as session:
            return session.get(Playlist, playlist_id)

    def get_playlists_by_owner(
        self, owner_id: str, kind: Optional[str] = None
    ) -> List[Playlist]:
        """Get an actor's collections, newest first."""
        with self.get_session() as session:
            stmt = select(Playlist).where(Playlist.owner_id == owner_id)
            if kind is not None:
                stmt = stmt.where(Playlist.kind == CollectionKind(kind).value)
            stmt = stmt.order_by(Playlist.created_at.desc(), Playlist.id.desc())
            return list(session.scalars(stmt).all())

    def get_public_playlists(self, limit: int = 50, offset: int = 0) -> List[Playlist]:
        """Get public playlists, most recently updated first."""
        with self.get_session() as session:
            stmt = (
                select(Playlist)
                .where(
                    Playlist.is_public.is_(True),
                    Playlist.kind == CollectionKind.PLAYLIST.value,
                )
                .order_by(Playlist.updated_at.desc(), Playlist.id.desc())
                .limit(limit)
                .offset(offset)
            )
            return list(session.scalars(stmt).all())

    def update_playlist(
        self, playlist_id: int, playlist_data: Dict[str, Any]
    ) -> Playlist:
        """Update an existing collection.

        Args:
            playlist_id: Playlist database ID
            playlist_data: Playlist data dictionary with fields to update

        Returns:
            Updated Playlist object
        """
        with self.get_session() as session:
            playlist = session.get(Playlist, playlist_id)
            if not playlist:
                raise ValueError(f"Playlist not found: {playlist_id}")

            for key, value in playlist_data.items():
                # Ownership and kind are fixed at creation
                if key in ("id", "owner_id", "kind"):
                    continue
                if hasattr(playlist, key):
                    setattr(playlist, key, value)

            playlist.updated_at = utcnow()
            session.commit()
            session.refresh(playlist)
            logger.debug("Updated playlist: %s", playlist.id)
            return playlist

    def delete_playlist(self, playlist_id: int) -> bool:
        """Delete a collection and all of its memberships.

        Args:
            playlist_id: Playlist database ID

        Returns:
            True if deleted, False if not found
        """
        with self.get_session() as session:
            playlist = session.get(Playlist, playlist_id)
            if not playlist:
                logger.warning("Playlist not found for deletion: %s", playlist_id)
                return False
            session.delete(playlist)
            session.commit()
            logger.info("Deleted playlist: %s", playlist_id)
            return True

    # =========================================================================
    # Utility Methods
    # =========================================================================

    def get_playlist_name(self, playlist_id: int) -> str:
        """Get playlist name by ID for logging/display."""
        playlist = self.get_playlist_by_id(playlist_id)
        return playlist.name if playlist else f"ID:{playlist_id}"

    def get_statistics(self) -> Dict[str, Any]:
        """Get database statistics.

        Returns:
            Dictionary with row counts and the database location
        """
        with self.get_session() as session:

            def count(model: Any) -> int:
                return session.scalar(select(func.count()).select_from(model)) or 0

            return {
                "artists": count(Artist),
                "tracks": count(Track),
                "playlists": count(Playlist),
                "playlist_tracks": count(PlaylistTrack),
                "database": str(self.db_path) if self.db_path else self.db_url,
            }

    def close(self) -> None:
        """Close database connection."""
        self.engine.dispose()
        logger.info("Database connection closed")
