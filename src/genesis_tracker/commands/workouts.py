"""Workout plan commands."""

import click

from ..models import WorkoutDay, WorkoutPlan
from .base import async_command, build_context, echo_info, echo_success


def parse_day(value: str) -> WorkoutDay:
    """Parse ``Day:Focus:Exercise A,Exercise B``."""
    parts = value.split(":", 2)
    if not parts[0].strip():
        raise click.BadParameter(f"Invalid day: {value}")
    focus = parts[1].strip() if len(parts) > 1 else ""
    exercises = [e.strip() for e in parts[2].split(",") if e.strip()] if len(parts) > 2 else []
    return WorkoutDay(day=parts[0].strip(), focus=focus, exercises=exercises)


@click.group()
def workouts():
    """Manage training splits."""
    pass


@workouts.command()
@click.argument("split_name")
@click.option(
    "--day",
    "days",
    multiple=True,
    help="Day as 'Day:Focus:Exercise A,Exercise B' (repeatable)",
)
@async_command
async def add(split_name, days):
    """Save a training split called SPLIT_NAME."""
    app = build_context()
    plan = WorkoutPlan(split_name=split_name, days=[parse_day(d) for d in days])
    await app.tracker.save_workout_plan(plan)
    echo_success(f"Workout plan '{split_name}' saved ({len(plan.days)} days)")


@workouts.command(name="list")
@async_command
async def list_plans():
    """Show saved training splits."""
    app = build_context()
    plans = await app.tracker.list_workout_plans()
    if not plans:
        echo_info("No workout plans yet")
        return

    for plan in plans:
        click.echo()
        click.echo(click.style(plan.split_name, bold=True))
        for day in plan.days:
            exercises = ", ".join(day.exercises) or "-"
            click.echo(f"  {day.day}: {day.focus or 'Rest'} ({exercises})")
