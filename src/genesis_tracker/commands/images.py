"""Progress photo commands."""

import base64
import mimetypes
from datetime import datetime
from pathlib import Path

import click

from ..models import ProgressImage
from .base import async_command, build_context, echo_error, echo_info, echo_success, format_table


def to_data_uri(path: Path) -> str:
    """Encode an image file as a ``data:`` URI."""
    mime = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
    encoded = base64.b64encode(path.read_bytes()).decode("ascii")
    return f"data:{mime};base64,{encoded}"


@click.group()
def images():
    """Store and browse progress photos."""
    pass


@images.command()
@click.argument("source")
@click.option("--notes")
@click.option("--tag", "tags", multiple=True, help="Tag (repeatable)")
@click.option("--favorite", is_flag=True)
@async_command
async def add(source, notes, tags, favorite):
    """Add a photo from a file path or URL."""
    app = build_context()
    path = Path(source)
    image_url = to_data_uri(path) if path.is_file() else source

    now = datetime.now()
    image = ProgressImage(
        date=now.date().isoformat(),
        time=now.strftime("%H:%M"),
        image_url=image_url,
        notes=notes,
        is_favorite=favorite,
        tags=list(tags),
    )
    await app.tracker.add_image(image)
    echo_success(f"Photo saved ({image.taken_at})")


@images.command(name="list")
@click.option("--favorites", is_flag=True, help="Only favorites")
@async_command
async def list_images(favorites):
    """List photos, newest first."""
    app = build_context()
    items = await app.tracker.list_images(favorites_only=favorites)
    if not items:
        echo_info("No photos found")
        return

    headers = ["Taken", "Fav", "Tags", "Notes", "ID"]
    rows = [
        [
            i.taken_at,
            "*" if i.is_favorite else "",
            ", ".join(i.tags),
            (i.notes or "")[:30],
            i.id or "-",
        ]
        for i in items
    ]
    click.echo()
    click.echo(format_table(headers, rows))


@images.command()
@click.argument("image_id")
@click.pass_context
@async_command
async def favorite(ctx, image_id):
    """Toggle the favorite flag of a photo."""
    app = build_context()
    result = await app.tracker.toggle_image_favorite(image_id)
    if result is None:
        echo_error(f"Photo not found: {image_id}")
        ctx.exit(1)
    echo_success("Marked as favorite" if result else "Removed from favorites")


@images.command()
@click.argument("image_id")
@click.pass_context
@async_command
async def delete(ctx, image_id):
    """Delete a photo."""
    app = build_context()
    if not await app.tracker.delete_image(image_id):
        echo_error(f"Photo not found: {image_id}")
        ctx.exit(1)
    echo_success("Photo deleted")
