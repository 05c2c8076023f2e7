"""Configuration management for the tracklist application."""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load .env file from config directory or project root
config_env = Path(__file__).parent.parent.parent / "config" / ".env"
if config_env.exists():
    load_dotenv(config_env)
else:
    # Fallback to project root .env
    load_dotenv()


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    """Application configuration."""

    def __init__(self) -> None:
        """Initialize configuration from environment variables."""
        # Database settings
        default_db_path = str(Path.home() / ".tracklist" / "tracklist.db")
        self.database_path = Path(
            os.getenv("TRACKLIST_DATABASE_PATH", default_db_path)
        ).expanduser()
        self.database_url: Optional[str] = os.getenv("TRACKLIST_DATABASE_URL") or None
        self.sql_echo = _env_flag("TRACKLIST_SQL_ECHO")

        # Membership settings
        self.add_retries = int(os.getenv("TRACKLIST_ADD_RETRIES", "5"))

        # Logging
        self.log_level = os.getenv("TRACKLIST_LOG_LEVEL", "INFO").upper()

        # Ensure directories exist
        self._ensure_directories()

    def _ensure_directories(self) -> None:
        """Ensure required directories exist."""
        if self.database_url is None:
            self.database_path.parent.mkdir(parents=True, exist_ok=True)


def get_config() -> Config:
    """Get application configuration."""
    return Config()
