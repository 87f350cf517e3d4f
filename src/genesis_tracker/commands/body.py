"""Body measurement commands."""

import click

from ..events import BodyMetric
from ..models import BodyMeasurement, Measurement
from ..models.common import latest_points, today_iso
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
def body():
    """Track weight, body composition and circumferences."""
    pass


@body.command()
@date_option
@click.option("--weight", type=float, help="Weight in kg")
@click.option("--height", type=float, help="Height in cm")
@click.option("--body-fat", type=float, help="Body fat in percent")
@click.option("--muscle-mass", type=float, help="Muscle mass in kg")
@click.option("--notes")
@async_command
async def add(on_date, weight, height, body_fat, muscle_mass, notes):
    """Record a body measurement. One entry per day is kept."""
    app = build_context()
    measurement = BodyMeasurement(
        date=on_date or today_iso(),
        weight=weight,
        height=height,
        body_fat=body_fat,
        muscle_mass=muscle_mass,
        notes=notes,
    )
    await app.tracker.add_body_measurement(measurement)
    echo_success(f"Body measurement saved for {measurement.date}")


@body.command(name="set")
@click.argument("metric", type=click.Choice([m.value for m in BodyMetric]))
@click.argument("value", type=float)
@date_option
@async_command
async def set_metric(metric, value, on_date):
    """Update height, weight or bodyFat everywhere it is shown."""
    app = build_context()
    await app.tracker.update_metric(BodyMetric(metric), value, on_date)
    app.tracker.state.persist(app.local)
    echo_success(f"{metric} set to {fmt(value)}")


@body.command(name="list")
@click.option("--limit", "-n", type=int, default=10, show_default=True)
@async_command
async def list_measurements(limit):
    """List body measurements, newest first."""
    app = build_context()
    records = await app.tracker.list_body_measurements()
    if not records:
        echo_info("No body measurements yet. Add one with 'genesis-tracker body add'")
        return

    headers = ["Date", "Weight", "Body fat", "Muscle", "BMI"]
    rows = [
        [r.date, fmt(r.weight, " kg"), fmt(r.body_fat, "%"), fmt(r.muscle_mass, " kg"), fmt(r.bmi)]
        for r in records[:limit]
    ]
    click.echo()
    click.echo(format_table(headers, rows))

    points = latest_points(records, "weight")
    if len(points) > 1:
        change = points[-1][1] - points[0][1]
        click.echo()
        click.echo(f"Weight change over last {len(points)} entries: {change:+.1f} kg")


@body.command()
@date_option
@click.option("--chest", type=float)
@click.option("--waist", type=float)
@click.option("--hips", type=float)
@click.option("--arm", type=float)
@click.option("--thigh", type=float)
@click.option("--neck", type=float)
@click.option("--shoulders", type=float)
@click.option("--forearm", type=float)
@async_command
async def measure(on_date, **circumferences):
    """Record circumferences in cm."""
    app = build_context()
    measurement = Measurement(date=on_date or today_iso(), **circumferences)
    await app.tracker.add_measurement(measurement)
    echo_success(f"Measurements saved for {measurement.date}")


@body.command()
@click.option("--limit", "-n", type=int, default=10, show_default=True)
@async_command
async def circumferences(limit):
    """List circumference measurements, newest first."""
    app = build_context()
    records = await app.tracker.list_measurements()
    if not records:
        echo_info("No measurements yet. Add one with 'genesis-tracker body measure'")
        return

    headers = ["Date", "Chest", "Waist", "Hips", "Arm", "Thigh"]
    rows = [
        [r.date, fmt(r.chest), fmt(r.waist), fmt(r.hips), fmt(r.arm), fmt(r.thigh)]
        for r in records[:limit]
    ]
    click.echo()
    click.echo(format_table(headers, rows))
