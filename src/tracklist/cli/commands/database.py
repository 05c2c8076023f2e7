"""Database maintenance CLI commands."""

import logging

import click
from rich.console import Console

from ..display import display_statistics
from .app import TracklistApp

console = Console()
logger = logging.getLogger(__name__)


@click.group("db")
def db() -> None:
    """Database maintenance commands."""
    pass


@db.command(name="init")
@click.pass_obj
def db_init(app: TracklistApp) -> None:
    """Create the schema if it does not exist yet.

    Examples:
        tracklist db init
    """
    try:
        db_service = app.db_service
        if not db_service.is_initialized():
            db_service.init_db()
    except Exception as e:
        logger.exception("Database initialization failed")
        console.print(f"\n[red]✗ Initialization failed: {e}[/red]")
        raise click.ClickException(str(e))

    console.print("[green]✓ Database ready[/green]")


@db.command(name="migrate")
@click.pass_obj
def db_migrate(app: TracklistApp) -> None:
    """Upgrade the database to the latest schema revision.

    Examples:
        tracklist db migrate
    """
    try:
        applied = app.db_service.run_migrations()
    except Exception as e:
        logger.exception("Migration failed")
        console.print(f"\n[red]✗ Migration failed: {e}[/red]")
        raise click.ClickException(str(e))

    if applied:
        console.print("[green]✓ Migrations applied[/green]")
    else:
        console.print("[yellow]No Alembic setup found, nothing migrated[/yellow]")


@db.command(name="stats")
@click.pass_obj
def db_stats(app: TracklistApp) -> None:
    """Show row counts.

    Examples:
        tracklist db stats
    """
    display_statistics(app.db_service.get_statistics())
