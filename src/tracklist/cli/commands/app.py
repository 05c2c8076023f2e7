"""Shared application state for CLI commands."""

import logging
from typing import Any, Optional

from ...config import Config, get_config
from ...core.collections import CollectionService
from ...database import DatabaseService

logger = logging.getLogger(__name__)


class TracklistApp:
    """Holds configuration and lazily opened services for one CLI invocation."""

    def __init__(self, config_override: Optional[dict[str, Any]] = None) -> None:
        """Initialize application.

        Args:
            config_override: Optional configuration overrides
        """
        self.config: Config = get_config()
        if config_override:
            for key, value in config_override.items():
                setattr(self.config, key, value)

        self._db_service: Optional[DatabaseService] = None
        self._collections: Optional[CollectionService] = None

    @property
    def db_service(self) -> DatabaseService:
        """Database service, opened on first use."""
        if self._db_service is None:
            self._db_service = DatabaseService(
                db_path=self.config.database_path,
                db_url=self.config.database_url,
                echo=self.config.sql_echo,
            )
        return self._db_service

    @property
    def collections(self) -> CollectionService:
        """Collection service bound to the database service."""
        if self._collections is None:
            self._collections = CollectionService.from_database(
                self.db_service, self.config
            )
        return self._collections

    def close(self) -> None:
        """Release the database connection if one was opened."""
        if self._db_service is not None:
            self._db_service.close()
            self._db_service = None
            self._collections = None
