"""Profile commands."""

import click

from ..questionnaire import ProfileQuestionnaire
from .base import async_command, build_context, echo_success


@click.group()
def profile():
    """View and edit personal data."""
    pass


@profile.command()
@async_command
async def show():
    """Show the current profile."""
    app = build_context()
    current = await app.tracker.get_profile()

    click.echo()
    click.echo(click.style("Profile", bold=True))
    click.echo("=" * 40)
    click.echo(current.get_summary())


@profile.command()
@click.option("--name", help="Display name")
@click.option("--age", type=int)
@click.option("--height", type=float, help="Height in cm")
@click.option("--weight", type=float, help="Weight in kg")
@click.option("--body-fat", type=float, help="Body fat in percent")
@click.option("--calories", type=float, help="Daily calorie target")
@click.option("--protein", type=float, help="Daily protein target (g)")
@click.option("--sleep", type=float, help="Sleep target (hours)")
@click.option("--training-days", type=click.IntRange(1, 7))
@async_command
async def edit(**fields):
    """Edit the profile.

    Without options an interactive questionnaire is shown. With options,
    only the given fields are changed.
    """
    app = build_context()
    current = await app.tracker.get_profile()

    changes = {k: v for k, v in fields.items() if v is not None}
    if changes:
        for key, value in changes.items():
            setattr(current, key, value)
        updated = current
    else:
        updated = await ProfileQuestionnaire().collect_profile(current)

    await app.tracker.save_profile(updated)
    app.tracker.state.persist(app.local)
    echo_success("Profile saved")
