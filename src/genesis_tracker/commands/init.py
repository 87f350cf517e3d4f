"""Initialize project command."""

import click

from ..config import get_settings
from ..db import init_db
from .base import async_command, build_context, echo_info, echo_success


@click.command()
@async_command
async def init():
    """Initialize the data directory and database.

    Creates the local store directory and the SQLite database holding the
    user and record tables.
    """
    settings = get_settings()
    echo_info(f"Initializing genesis-tracker in {settings.data_dir}")

    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.local_store_dir.mkdir(parents=True, exist_ok=True)

    await init_db(settings.database_path)
    echo_success("Database initialized")

    seeded = await build_context(settings).tracker.seed_default_habits()
    if seeded:
        echo_success(f"Added {seeded} default habits")

    click.echo()
    click.echo("genesis-tracker is ready to use!")
    click.echo()
    click.echo("Next steps:")
    click.echo("  1. Track without an account (stored locally):")
    click.echo("     genesis-tracker body add --weight 80")
    click.echo()
    click.echo("  2. Create an account and sign in (local data is moved over):")
    click.echo("     genesis-tracker signup you@example.com")
    click.echo("     genesis-tracker login you@example.com")
