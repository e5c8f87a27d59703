# ABOUTME: CLI package for Shelfsense, built on Click.
# ABOUTME: Defines the root command group, logging setup, and registers subcommands.

import logging

import click
from rich.logging import RichHandler

from shelfsense.cli.commands import (
    library_cmd,
    lookup_cmd,
    recommend_cmd,
    recommended_cmd,
    resolve_cmd,
)


@click.group()
@click.version_option(package_name="shelfsense")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Show debug logging.")
def cli(verbose: bool) -> None:
    """Shelfsense - find your next book from the ones you already have."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(name)s: %(message)s",
        handlers=[RichHandler(show_time=False, show_path=False)],
    )


cli.add_command(resolve_cmd.resolve)
cli.add_command(lookup_cmd.lookup)
cli.add_command(recommend_cmd.recommend)
cli.add_command(library_cmd.library)
cli.add_command(recommended_cmd.recommended)
