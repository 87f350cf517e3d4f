"""Shared CLI utilities."""

import asyncio
from dataclasses import dataclass
from functools import wraps

import click

from ..config import Settings, get_settings
from ..errors import GenesisError
from ..services.auth import AuthService
from ..services.tracker import TrackerService
from ..state import BodyMetricsState
from ..storage.local import LocalStore
from ..storage.remote import RemoteStore


def async_command(f):
    """Decorator to run async Click commands.

    Domain errors are reported and turned into exit code 1.
    """

    @wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return asyncio.run(f(*args, **kwargs))
        except GenesisError as e:
            echo_error(str(e))
            raise click.exceptions.Exit(1) from e

    return wrapper


@dataclass
class AppContext:
    """Stores and services wired for one CLI invocation."""

    settings: Settings
    local: LocalStore
    auth: AuthService
    remote: RemoteStore
    tracker: TrackerService


def build_context(settings: Settings | None = None) -> AppContext:
    """Wire the stores and services from settings."""
    settings = settings or get_settings()
    local = LocalStore.open(settings.local_store_dir)
    auth = AuthService(local, settings.database_path)
    remote = RemoteStore(auth, settings.database_path)
    tracker = TrackerService(
        local,
        remote,
        auth,
        state=BodyMetricsState.load(local),
        nutrition_targets={
            "target_calories": settings.target_calories,
            "target_protein": settings.target_protein,
            "target_water": settings.target_water,
        },
    )
    return AppContext(settings=settings, local=local, auth=auth, remote=remote, tracker=tracker)


def _iso_date(ctx: click.Context, param: click.Parameter, value):
    return value.date().isoformat() if value is not None else None


def date_option(f):
    """Add a validated ``--date YYYY-MM-DD`` option passed on as ``on_date``."""
    return click.option(
        "--date",
        "on_date",
        type=click.DateTime(formats=["%Y-%m-%d"]),
        callback=_iso_date,
        help="Date (YYYY-MM-DD), defaults to today",
    )(f)


def ensure_initialized(ctx: click.Context) -> None:
    """Ensure the database is initialized."""
    if not get_settings().database_path.exists():
        click.echo(
            click.style("Error: ", fg="red")
            + "Project not initialized. Run 'genesis-tracker init' first."
        )
        ctx.exit(1)


def echo_success(message: str) -> None:
    """Print a success message."""
    click.echo(click.style("[OK] ", fg="green") + message)


def echo_error(message: str) -> None:
    """Print an error message."""
    click.echo(click.style("[ERROR] ", fg="red") + message)


def echo_info(message: str) -> None:
    """Print an info message."""
    click.echo(click.style("[INFO] ", fg="blue") + message)


def echo_warning(message: str) -> None:
    """Print a warning message."""
    click.echo(click.style("[WARN] ", fg="yellow") + message)


def format_table(headers: list[str], rows: list[list[str]], padding: int = 2) -> str:
    """Format data as a simple table."""
    if not rows:
        return ""

    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(str(cell)))

    lines = ["".join(h.ljust(widths[i] + padding) for i, h in enumerate(headers))]
    lines.append("".join("-" * w + " " * padding for w in widths))
    for row in rows:
        lines.append("".join(str(cell).ljust(widths[i] + padding) for i, cell in enumerate(row)))

    return "\n".join(line.rstrip() for line in lines)


def fmt(value, suffix: str = "") -> str:
    """Render an optional number for table output."""
    if value is None:
        return "-"
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return f"{value}{suffix}"
