"""Validated input models for catalog and collection records."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CollectionKind(str, Enum):
    """Kinds of ordered collections."""

    PLAYLIST = "playlist"
    QUEUE = "queue"


class ArtistData(BaseModel):
    """Fields accepted when creating an artist."""

    name: str = Field(min_length=1, max_length=255)
    is_verified: bool = False

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        """Strip surrounding whitespace."""
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v


class TrackData(BaseModel):
    """Fields accepted when creating a catalog track."""

    artist_id: int
    title: str = Field(min_length=1, max_length=500)
    duration: int = Field(ge=0)  # Duration in seconds
    audio_url: str = Field(min_length=1, max_length=1000)
    cover_url: Optional[str] = Field(default=None, max_length=1000)
    genres: List[str] = []
    is_explicit: bool = False

    @field_validator("genres", mode="before")
    @classmethod
    def clean_genres(cls, v: Optional[List[str]]) -> List[str]:
        """Drop blank genre names; None means no genres."""
        if v is None:
            return []
        return [genre.strip() for genre in v if genre and genre.strip()]


class PlaylistData(BaseModel):
    """Fields accepted when creating a playlist or play queue."""

    owner_id: str = Field(min_length=1, max_length=255)
    name: str = Field(min_length=1, max_length=500)
    kind: CollectionKind = Field(
        default=CollectionKind.PLAYLIST, validate_default=True
    )
    description: Optional[str] = None
    cover_url: Optional[str] = Field(default=None, max_length=1000)
    is_public: bool = True
    is_collaborative: bool = False

    model_config = ConfigDict(use_enum_values=True)
