"""Display formatters and UI helpers for CLI."""

import logging
from typing import Any, Dict, List, Sequence

from rich.console import Console
from rich.table import Table

from ...core.collections import CollectionSummary, OrderedEntry
from ...database import Playlist, Track

console = Console()
logger = logging.getLogger(__name__)


def format_duration(seconds: int) -> str:
    """Format seconds as m:ss, or h:mm:ss past one hour."""
    hours, remainder = divmod(max(int(seconds), 0), 3600)
    minutes, secs = divmod(remainder, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def display_statistics(stats: Dict[str, Any]) -> None:
    """Display database statistics.

    Args:
        stats: Dictionary from DatabaseService.get_statistics()
    """
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Metric", style="cyan")
    table.add_column("Count", style="green", justify="right")

    table.add_row("Artists", str(stats.get("artists", 0)))
    table.add_row("Tracks", str(stats.get("tracks", 0)))
    table.add_row("Collections", str(stats.get("playlists", 0)))
    table.add_row("Memberships", str(stats.get("playlist_tracks", 0)))

    console.print(table)
    console.print(f"[dim]Database: {stats.get('database')}[/dim]")


def display_tracks(tracks: Sequence[Track]) -> None:
    """Display catalog tracks."""
    if not tracks:
        console.print("[yellow]No tracks in the catalog[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Title", style="white")
    table.add_column("Artist ID", style="dim", justify="right")
    table.add_column("Duration", style="green", justify="right")
    table.add_column("Genres", style="dim")

    for track in tracks:
        table.add_row(
            str(track.id),
            track.title,
            str(track.artist_id),
            format_duration(track.duration),
            ", ".join(track.genres or []),
        )
    console.print(table)


def display_playlists(playlists: Sequence[Playlist]) -> None:
    """Display a list of collections."""
    if not playlists:
        console.print("[yellow]No collections found[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Name", style="white")
    table.add_column("Kind", style="dim")
    table.add_column("Public", justify="center")
    table.add_column("Collaborative", justify="center")

    for playlist in playlists:
        table.add_row(
            str(playlist.id),
            playlist.name,
            playlist.kind,
            "✓" if playlist.is_public else "",
            "✓" if playlist.is_collaborative else "",
        )
    console.print(table)


def display_ordered_entries(
    playlist: Playlist, entries: List[OrderedEntry], summary: CollectionSummary
) -> None:
    """Display a collection's tracks in position order."""
    console.print(
        f"\n[bold cyan]{playlist.name}[/bold cyan] "
        f"[dim]({playlist.kind}, owner {playlist.owner_id})[/dim]"
    )

    if not entries:
        console.print("[yellow]Collection is empty[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Pos", style="cyan", justify="right")
    table.add_column("Track ID", style="dim", justify="right")
    table.add_column("Title", style="white")
    table.add_column("Artist", style="white")
    table.add_column("Duration", style="green", justify="right")
    table.add_column("Added by", style="dim")

    for entry in entries:
        table.add_row(
            str(entry.position),
            str(entry.item_id),
            entry.title,
            entry.artist_name,
            format_duration(entry.duration),
            entry.added_by,
        )
    console.print(table)
    console.print(
        f"[dim]{summary.track_count} track(s), "
        f"{format_duration(summary.total_duration)} total[/dim]"
    )
