"""Local data commands."""

from pathlib import Path

import click

from ..errors import GenesisError
from ..storage.namespaces import MIGRATED_NAMESPACES
from .base import build_context, echo_error, echo_info, echo_success, echo_warning


@click.group()
def data():
    """Back up, restore or wipe locally stored data.

    Only data stored on this machine is affected; records in your account
    are untouched.
    """
    pass


@data.command()
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path),
              help="Write to file instead of stdout")
def export(output):
    """Export all local namespaces as JSON."""
    app = build_context()
    document = app.local.export_json(MIGRATED_NAMESPACES)
    if output:
        output.write_text(document)
        echo_success(f"Exported local data to {output}")
    else:
        click.echo(document)


@data.command(name="import")
@click.argument("source", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def import_cmd(ctx, source):
    """Restore local namespaces from an export file."""
    app = build_context()
    try:
        written = app.local.import_json(source.read_text(), MIGRATED_NAMESPACES)
    except (ValueError, GenesisError) as e:
        echo_error(str(e))
        ctx.exit(1)
    echo_success(f"Imported {len(written)} namespace(s)")


@data.command()
@click.option("--force", "-f", is_flag=True, help="Skip confirmation")
def wipe(force):
    """Delete all locally stored tracking data."""
    if not force:
        echo_warning("This deletes all tracking data stored on this machine.")
        if not click.confirm("Continue?"):
            echo_info("Cancelled")
            return

    app = build_context()
    app.local.clear(MIGRATED_NAMESPACES)
    echo_success("Local data wiped")
