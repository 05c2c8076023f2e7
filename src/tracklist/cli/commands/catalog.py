"""Catalog CLI commands (artists and tracks)."""

import logging
from typing import Optional, Tuple

import click
from rich.console import Console

from ..display import display_tracks
from .app import TracklistApp

console = Console()
logger = logging.getLogger(__name__)


@click.group("catalog")
def catalog() -> None:
    """Manage the artist and track catalog."""
    pass


@catalog.command(name="add-artist")
@click.argument("name")
@click.option("--verified", is_flag=True, help="Mark the artist as verified")
@click.pass_obj
def add_artist(app: TracklistApp, name: str, verified: bool) -> None:
    """Add an artist.

    Examples:
        tracklist catalog add-artist "Nina Simone"
    """
    try:
        artist = app.db_service.create_artist({"name": name, "is_verified": verified})
    except ValueError as e:
        console.print(f"[red]✗ {e}[/red]")
        raise click.ClickException(str(e))

    console.print(f"[green]✓ Artist {artist.name} created (ID: {artist.id})[/green]")


@catalog.command(name="add-track")
@click.argument("title")
@click.option("--artist-id", type=int, required=True, help="Owning artist ID")
@click.option("--duration", type=int, required=True, help="Duration in seconds")
@click.option("--audio-url", required=True, help="Location of the audio file")
@click.option("--cover-url", default=None, help="Cover image location")
@click.option("--genre", "genres", multiple=True, help="Genre (repeatable)")
@click.option("--explicit", is_flag=True, help="Mark the track as explicit")
@click.pass_obj
def add_track(
    app: TracklistApp,
    title: str,
    artist_id: int,
    duration: int,
    audio_url: str,
    cover_url: Optional[str],
    genres: Tuple[str, ...],
    explicit: bool,
) -> None:
    """Add a track to the catalog.

    Examples:
        tracklist catalog add-track "Feeling Good" --artist-id 1 \\
            --duration 173 --audio-url s3://tracks/feeling-good.mp3 --genre jazz
    """
    try:
        track = app.db_service.create_track(
            {
                "artist_id": artist_id,
                "title": title,
                "duration": duration,
                "audio_url": audio_url,
                "cover_url": cover_url,
                "genres": list(genres),
                "is_explicit": explicit,
            }
        )
    except ValueError as e:
        console.print(f"[red]✗ {e}[/red]")
        raise click.ClickException(str(e))

    console.print(f"[green]✓ Track {track.title} created (ID: {track.id})[/green]")


@catalog.command(name="tracks")
@click.pass_obj
def list_tracks(app: TracklistApp) -> None:
    """List catalog tracks."""
    display_tracks(app.db_service.get_all_tracks())


@catalog.command(name="delete-track")
@click.argument("track_id", type=int)
@click.pass_obj
def delete_track(app: TracklistApp, track_id: int) -> None:
    """Delete a track; it is dropped from every collection too."""
    if not app.db_service.delete_track(track_id):
        raise click.ClickException(f"Track not found: {track_id}")
    console.print(f"[green]✓ Track {track_id} deleted[/green]")
