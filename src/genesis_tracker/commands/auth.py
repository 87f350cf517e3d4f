"""Account commands."""

import click

from ..services.migration import ClearPolicy, migrate_after_sign_in
from .base import (
    async_command,
    build_context,
    echo_info,
    echo_success,
    echo_warning,
    ensure_initialized,
)


@click.command()
@click.argument("email")
@click.password_option()
@click.pass_context
@async_command
async def signup(ctx: click.Context, email: str, password: str):
    """Create an account with EMAIL and a password."""
    ensure_initialized(ctx)
    app = build_context()
    user = await app.auth.sign_up(email, password)
    echo_success(f"Account created for {user.email}")
    click.echo("Run 'genesis-tracker login " + user.email + "' to sign in.")


@click.command()
@click.argument("email")
@click.option("--password", prompt=True, hide_input=True)
@click.pass_context
@async_command
async def login(ctx: click.Context, email: str, password: str):
    """Sign in and move locally stored data to your account.

    The move runs once per sign-in. Local data is cleared afterwards.
    """
    ensure_initialized(ctx)
    app = build_context()
    user = await app.auth.sign_in(email, password)
    echo_success(f"Signed in as {user.email}")

    report = await migrate_after_sign_in(
        app.local, app.remote, ClearPolicy(app.settings.migration_clear_policy)
    )
    if report.migrated:
        echo_info("Local data moved to your account:")
        for namespace, count in report.migrated.items():
            click.echo(f"  - {namespace}: {count}")
    for failure in report.failures:
        echo_warning(str(failure))


@click.command()
@async_command
async def logout():
    """Sign out. New data is stored locally until the next login."""
    app = build_context()
    app.auth.sign_out()
    echo_success("Signed out")


@click.command()
@click.pass_context
@async_command
async def whoami(ctx: click.Context):
    """Show the signed-in account."""
    ensure_initialized(ctx)
    app = build_context()
    user = await app.auth.get_current_user()
    if user is None:
        echo_info("Not signed in (data is stored locally)")
        return
    click.echo(f"{user.email} ({user.id})")
