"""CLI entry point for genesis-tracker."""

import logging

import click

from . import __version__
from .commands import (
    body,
    data,
    habits,
    images,
    init,
    login,
    logout,
    nutrition,
    profile,
    signup,
    strength,
    supplements,
    whoami,
    workouts,
)
from .config import get_settings


@click.group()
@click.version_option(version=__version__, prog_name="genesis-tracker")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(verbose: bool):
    """genesis-tracker: personal fitness and habit tracker.

    Works without an account by storing data on this machine. After
    signing in, data is kept in your account and anything stored locally
    is moved over once.

    Example usage:

        # Initialize the project
        genesis-tracker init

        # Track without an account
        genesis-tracker body add --weight 80.5
        genesis-tracker nutrition add --calories 650 --protein 45

        # Create an account and move local data into it
        genesis-tracker signup you@example.com
        genesis-tracker login you@example.com
    """
    level = logging.DEBUG if verbose else get_settings().log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# Register commands
main.add_command(init)
main.add_command(signup)
main.add_command(login)
main.add_command(logout)
main.add_command(whoami)
main.add_command(profile)
main.add_command(body)
main.add_command(strength)
main.add_command(nutrition)
main.add_command(habits)
main.add_command(supplements)
main.add_command(images)
main.add_command(workouts)
main.add_command(data)


def run():
    """Run the CLI."""
    main()


if __name__ == "__main__":
    run()
