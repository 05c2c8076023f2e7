"""Command-line interface for the tracklist application.

This is the main entry point that delegates to command modules.
"""

from pathlib import Path
from typing import Any, Optional

import click

from ..utils.logging_config import configure_third_party_loggers, setup_logging
from .commands import TracklistApp, catalog, db, playlist


@click.group()
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    help="Set logging level (default: TRACKLIST_LOG_LEVEL, else INFO)",
)
@click.option("--log-file", type=click.Path(), help="Log to file")
@click.option("--database", type=click.Path(), help="SQLite database file")
@click.pass_context
def cli(
    ctx: Any, log_level: Optional[str], log_file: str, database: Optional[str]
) -> None:
    """Tracklist.

    Ordered playlists and play queues over a track catalog.
    """
    config_override: dict[str, Any] = {}
    if database:
        config_override["database_path"] = Path(database)
        config_override["database_url"] = None

    app = TracklistApp(config_override)
    ctx.obj = app
    ctx.call_on_close(app.close)

    setup_logging(
        log_level=log_level or app.config.log_level,
        log_file=Path(log_file) if log_file else None,
    )
    configure_third_party_loggers()


cli.add_command(db)
cli.add_command(catalog)
cli.add_command(playlist)


if __name__ == "__main__":
    cli()
