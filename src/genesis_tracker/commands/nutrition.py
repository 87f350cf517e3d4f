"""Nutrition commands."""

import click

from .base import async_command, build_context, date_option, echo_success, fmt


def _bar(percent: float, width: int = 20) -> str:
    filled = int(round(percent / 100 * width))
    return "#" * filled + "." * (width - filled)


@click.group()
def nutrition():
    """Track daily calories, protein and water."""
    pass


@nutrition.command()
@click.option("--calories", "-c", type=float, default=0)
@click.option("--protein", "-p", type=float, default=0, help="Protein in grams")
@click.option("--water", "-w", type=float, default=0, help="Water in ml")
@date_option
@async_command
async def add(calories, protein, water, on_date):
    """Add intake to the day's totals."""
    app = build_context()
    record = await app.tracker.add_nutrition(calories, protein, water, on_date)
    echo_success(
        f"{record.date}: {fmt(record.calories)} kcal, "
        f"{fmt(record.protein)} g protein, {fmt(record.water)} ml water"
    )


@nutrition.command()
@date_option
@async_command
async def show(on_date):
    """Show intake against the day's targets."""
    app = build_context()
    record = await app.tracker.get_nutrition(on_date)
    progress = record.progress()

    click.echo()
    click.echo(click.style(f"Nutrition for {record.date}", bold=True))
    click.echo("=" * 50)
    for label, key, unit in (
        ("Calories", "calories", "kcal"),
        ("Protein", "protein", "g"),
        ("Water", "water", "ml"),
    ):
        value = getattr(record, key)
        target = getattr(record, f"target_{key}")
        click.echo(
            f"{label:<9} [{_bar(progress[key])}] {progress[key]:5.1f}%  "
            f"{fmt(value)}/{fmt(target)} {unit}"
        )
