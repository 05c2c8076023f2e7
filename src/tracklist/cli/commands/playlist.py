"""Playlist and queue CLI commands."""

import logging
from typing import Optional, Tuple

import click
from rich.console import Console

from ...core.collections import (
    CollectionError,
    DuplicateMembership,
    ReorderFailed,
)
from ...database import Playlist
from ...models import CollectionKind
from ..display import display_ordered_entries, display_playlists
from .app import TracklistApp

console = Console()
logger = logging.getLogger(__name__)


def _require_playlist(app: TracklistApp, playlist_id: int) -> Playlist:
    playlist = app.db_service.get_playlist_by_id(playlist_id)
    if playlist is None:
        raise click.ClickException(f"Playlist not found: {playlist_id}")
    return playlist


@click.group("playlist")
def playlist() -> None:
    """Manage playlists and play queues."""
    pass


@playlist.command(name="create")
@click.argument("name")
@click.option("--owner", required=True, help="Owning actor ID")
@click.option(
    "--kind",
    type=click.Choice([kind.value for kind in CollectionKind]),
    default=CollectionKind.PLAYLIST.value,
    show_default=True,
)
@click.option("--description", default=None, help="Free-text description")
@click.option("--public/--private", default=True, show_default=True)
@click.option("--collaborative", is_flag=True, help="Let others add tracks")
@click.pass_obj
def create_playlist(
    app: TracklistApp,
    name: str,
    owner: str,
    kind: str,
    description: Optional[str],
    public: bool,
    collaborative: bool,
) -> None:
    """Create a playlist or queue.

    Examples:
        tracklist playlist create "Road trip" --owner user-1
        tracklist playlist create "Up next" --owner user-1 --kind queue --private
    """
    try:
        created = app.db_service.create_playlist(
            {
                "owner_id": owner,
                "name": name,
                "kind": kind,
                "description": description,
                "is_public": public,
                "is_collaborative": collaborative,
            }
        )
    except ValueError as e:
        console.print(f"[red]✗ {e}[/red]")
        raise click.ClickException(str(e))

    console.print(f"[green]✓ {created.kind.title()} created (ID: {created.id})[/green]")


@playlist.command(name="list")
@click.option("--owner", default=None, help="Only this actor's collections")
@click.option("--kind", type=click.Choice([kind.value for kind in CollectionKind]))
@click.pass_obj
def list_playlists(app: TracklistApp, owner: Optional[str], kind: Optional[str]) -> None:
    """List an actor's collections, or public playlists without --owner."""
    if owner is None:
        display_playlists(app.db_service.get_public_playlists())
    else:
        display_playlists(app.db_service.get_playlists_by_owner(owner, kind=kind))


@playlist.command(name="show")
@click.argument("playlist_id", type=int)
@click.pass_obj
def show_playlist(app: TracklistApp, playlist_id: int) -> None:
    """Show a collection's tracks in order."""
    found = _require_playlist(app, playlist_id)
    display_ordered_entries(
        found,
        app.collections.list_ordered(playlist_id),
        app.collections.summarize(playlist_id),
    )


@playlist.command(name="add")
@click.argument("playlist_id", type=int)
@click.argument("track_id", type=int)
@click.option("--actor", required=True, help="Actor ID recorded as added_by")
@click.pass_obj
def add_track(app: TracklistApp, playlist_id: int, track_id: int, actor: str) -> None:
    """Append a track to a collection."""
    try:
        membership = app.collections.add_item(playlist_id, track_id, actor)
    except DuplicateMembership:
        console.print(
            f"[yellow]Track {track_id} is already in playlist {playlist_id}[/yellow]"
        )
        return
    except (CollectionError, ValueError) as e:
        console.print(f"[red]✗ {e}[/red]")
        raise click.ClickException(str(e))

    console.print(
        f"[green]✓ Track {track_id} added at position {membership.position}[/green]"
    )


@playlist.command(name="remove")
@click.argument("playlist_id", type=int)
@click.argument("track_id", type=int)
@click.pass_obj
def remove_track(app: TracklistApp, playlist_id: int, track_id: int) -> None:
    """Remove a track from a collection."""
    if app.collections.remove_item(playlist_id, track_id):
        console.print(f"[green]✓ Track {track_id} removed[/green]")
    else:
        console.print(
            f"[yellow]Track {track_id} is not in playlist {playlist_id}[/yellow]"
        )


@playlist.command(name="reorder")
@click.argument("playlist_id", type=int)
@click.argument("track_ids", type=int, nargs=-1, required=True)
@click.pass_obj
def reorder_tracks(
    app: TracklistApp, playlist_id: int, track_ids: Tuple[int, ...]
) -> None:
    """Set the full order of a collection.

    Every current track must be listed exactly once, first to last.

    Examples:
        tracklist playlist reorder 3 12 7 9
    """
    try:
        app.collections.reorder_items(playlist_id, track_ids)
    except ReorderFailed as e:
        console.print(f"[red]✗ {e}[/red]")
        console.print("[dim]Run 'tracklist playlist show' for the current order[/dim]")
        raise click.ClickException(str(e))

    console.print(f"[green]✓ Reordered {len(track_ids)} track(s)[/green]")


@playlist.command(name="move")
@click.argument("playlist_id", type=int)
@click.argument("from_index", type=int)
@click.argument("to_index", type=int)
@click.pass_obj
def move_track(
    app: TracklistApp, playlist_id: int, from_index: int, to_index: int
) -> None:
    """Move the track at FROM_INDEX to TO_INDEX (0-based)."""
    try:
        app.collections.move_item(playlist_id, from_index, to_index)
    except (IndexError, ReorderFailed) as e:
        console.print(f"[red]✗ {e}[/red]")
        raise click.ClickException(str(e))

    console.print(f"[green]✓ Moved track from {from_index} to {to_index}[/green]")


@playlist.command(name="clear")
@click.argument("playlist_id", type=int)
@click.pass_obj
def clear_playlist(app: TracklistApp, playlist_id: int) -> None:
    """Remove every track from a collection."""
    _require_playlist(app, playlist_id)
    cleared = app.collections.clear(playlist_id)
    console.print(f"[green]✓ Removed {cleared} track(s)[/green]")


@playlist.command(name="delete")
@click.argument("playlist_id", type=int)
@click.pass_obj
def delete_playlist(app: TracklistApp, playlist_id: int) -> None:
    """Delete a collection and its memberships."""
    if not app.db_service.delete_playlist(playlist_id):
        raise click.ClickException(f"Playlist not found: {playlist_id}")
    console.print(f"[green]✓ Playlist {playlist_id} deleted[/green]")
