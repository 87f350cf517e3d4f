"""Habit commands."""

import click

from ..models import Habit
from .base import (
    async_command,
    build_context,
    date_option,
    echo_error,
    echo_info,
    echo_success,
    format_table,
)


async def _resolve(app, name_or_id: str) -> Habit | None:
    for habit in await app.tracker.list_habits():
        if habit.id == name_or_id or habit.name.lower() == name_or_id.lower():
            return habit
    return None


@click.group()
def habits():
    """Define habits and record daily completions."""
    pass


@habits.command()
@click.argument("name")
@click.option("--target", type=click.IntRange(min=1), default=1, show_default=True,
              help="Completions per day")
@click.option("--icon", default="CircleCheck", show_default=True)
@click.option("--description")
@async_command
async def add(name, target, icon, description):
    """Create a habit called NAME."""
    app = build_context()
    habit = Habit(name=name, target=target, icon=icon, description=description)
    await app.tracker.save_habit(habit)
    echo_success(f"Habit '{name}' created")


@habits.command(name="list")
@date_option
@async_command
async def list_habits(on_date):
    """Show habits with the day's progress and current streak."""
    app = build_context()
    status = await app.tracker.habit_status(on_date)
    if not status:
        echo_info("No habits yet. Create one with 'genesis-tracker habits add'")
        return

    headers = ["Habit", "Today", "Done", "Streak", "ID"]
    rows = [
        [habit.name, f"{count}/{habit.target}", "yes" if done else "no", str(streak), habit.id or "-"]
        for habit, count, done, streak in status
    ]
    click.echo()
    click.echo(format_table(headers, rows))


@habits.command()
@click.argument("habit")
@click.option("--count", type=click.IntRange(min=0), help="Set the count instead of adding one")
@date_option
@click.pass_context
@async_command
async def done(ctx, habit, count, on_date):
    """Record a completion of HABIT (name or id)."""
    app = build_context()
    found = await _resolve(app, habit)
    if found is None:
        echo_error(f"Habit not found: {habit}")
        ctx.exit(1)

    if count is None:
        status = {h.id: c for h, c, _, _ in await app.tracker.habit_status(on_date)}
        count = status.get(found.id, 0) + 1

    completion = await app.tracker.record_habit(found.id, count, on_date)
    echo_success(f"{found.name}: {completion.count}/{found.target} on {completion.date}")


@habits.command()
@click.argument("habit")
@click.option("--force", "-f", is_flag=True, help="Skip confirmation")
@click.pass_context
@async_command
async def delete(ctx, habit, force):
    """Delete HABIT (name or id)."""
    app = build_context()
    found = await _resolve(app, habit)
    if found is None:
        echo_error(f"Habit not found: {habit}")
        ctx.exit(1)

    if not force and not click.confirm(f"Delete habit '{found.name}'?"):
        echo_info("Cancelled")
        return

    await app.tracker.delete_habit(found.id)
    echo_success(f"Habit '{found.name}' deleted")
