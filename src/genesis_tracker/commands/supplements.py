"""Supplement commands."""

import click

from ..models import Supplement
from ..models.common import today_iso
from ..models.supplements import SupplementTiming
from .base import (
    async_command,
    build_context,
    date_option,
    echo_error,
    echo_info,
    echo_success,
    format_table,
)


@click.group()
def supplements():
    """Manage supplements and tick them off daily."""
    pass


@supplements.command()
@click.argument("name")
@click.option("--dosage", default="")
@click.option(
    "--timing",
    type=click.Choice([t.value for t in SupplementTiming]),
    default=SupplementTiming.MORNING.value,
    show_default=True,
)
@click.option("--category", default="")
@async_command
async def add(name, dosage, timing, category):
    """Add a supplement called NAME."""
    app = build_context()
    await app.tracker.save_supplement(
        Supplement(name=name, dosage=dosage, timing=timing, category=category)
    )
    echo_success(f"Supplement '{name}' added")


@supplements.command(name="list")
@date_option
@async_command
async def list_supplements(on_date):
    """List supplements and whether they were taken."""
    app = build_context()
    on_date = on_date or today_iso()
    items = await app.tracker.list_supplements()
    if not items:
        echo_info("No supplements yet. Add one with 'genesis-tracker supplements add'")
        return

    taken = {
        c.supplement_id
        for c in await app.tracker.list_supplement_completions()
        if c.date == on_date and c.taken
    }
    headers = ["Supplement", "Dosage", "Timing", "Taken", "ID"]
    rows = [
        [s.name, s.dosage or "-", s.timing, "yes" if s.id in taken else "no", s.id or "-"]
        for s in items
    ]
    click.echo()
    click.echo(format_table(headers, rows))


@supplements.command()
@click.argument("supplement")
@date_option
@click.pass_context
@async_command
async def take(ctx, supplement, on_date):
    """Toggle whether SUPPLEMENT (name or id) was taken."""
    app = build_context()
    found = next(
        (
            s
            for s in await app.tracker.list_supplements()
            if s.id == supplement or s.name.lower() == supplement.lower()
        ),
        None,
    )
    if found is None:
        echo_error(f"Supplement not found: {supplement}")
        ctx.exit(1)

    taken = await app.tracker.toggle_supplement(found.id, on_date)
    echo_success(f"{found.name}: {'taken' if taken else 'not taken'}")
