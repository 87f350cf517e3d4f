"""Strength training commands."""

import click

from ..models import StrengthRecord
from ..models.common import today_iso
from ..models.strength import best_lifts
from .base import (
    async_command,
    build_context,
    date_option,
    echo_info,
    echo_success,
    fmt,
    format_table,
)


@click.group()
def strength():
    """Log lifts and review personal bests."""
    pass


@strength.command()
@click.argument("exercise")
@click.option("--sets", type=click.IntRange(min=1), required=True)
@click.option("--reps", type=click.IntRange(min=1), required=True)
@click.option("--weight", type=float, required=True, help="Weight in kg")
@date_option
@click.option("--notes")
@async_command
async def add(exercise, sets, reps, weight, on_date, notes):
    """Log a set of EXERCISE."""
    app = build_context()
    record = StrengthRecord(
        date=on_date or today_iso(),
        exercise=exercise,
        sets=sets,
        reps=reps,
        weight=weight,
        notes=notes,
    )
    await app.tracker.add_strength_record(record)
    echo_success(
        f"Logged {exercise}: {sets}x{reps} @ {fmt(weight)} kg "
        f"(e1RM {record.estimated_1rm:.1f} kg)"
    )


@strength.command(name="list")
@click.option("--exercise", "-e", help="Only show this exercise")
@click.option("--limit", "-n", type=int, default=20, show_default=True)
@async_command
async def list_records(exercise, limit):
    """List logged lifts, newest first."""
    app = build_context()
    records = await app.tracker.list_strength_records()
    if exercise:
        records = [r for r in records if r.exercise.lower() == exercise.lower()]
    if not records:
        echo_info("No strength records found")
        return

    headers = ["Date", "Exercise", "Sets x Reps", "Weight", "e1RM"]
    rows = [
        [r.date, r.exercise, f"{r.sets}x{r.reps}", fmt(r.weight, " kg"), f"{r.estimated_1rm:.1f}"]
        for r in records[:limit]
    ]
    click.echo()
    click.echo(format_table(headers, rows))


@strength.command()
@async_command
async def best():
    """Show the best estimated 1RM per exercise."""
    app = build_context()
    bests = best_lifts(await app.tracker.list_strength_records())
    if not bests:
        echo_info("No strength records found")
        return

    headers = ["Exercise", "e1RM", "Set", "Date"]
    rows = [
        [name, f"{r.estimated_1rm:.1f} kg", f"{r.sets}x{r.reps} @ {fmt(r.weight)}", r.date]
        for name, r in sorted(bests.items())
    ]
    click.echo()
    click.echo(format_table(headers, rows))
