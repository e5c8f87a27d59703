# ABOUTME: Shared Click options and factories for Shelfsense CLI commands.
# ABOUTME: Provides reusable decorators for --db and --language plus catalog client construction.

from pathlib import Path

import click

from shelfsense.catalog.client import CatalogClient
from shelfsense.config import DEFAULT_DB_PATH, ShelfsenseConfig

db_option = click.option(
    "--db",
    "db_path",
    type=click.Path(path_type=Path),
    default=None,
    help=f"Path to library database (default: {DEFAULT_DB_PATH})",
)

language_option = click.option(
    "--language",
    "-l",
    default="ja",
    show_default=True,
    help="Preferred language code for catalog searches and reasons.",
)


def create_catalog(config: ShelfsenseConfig) -> CatalogClient:
    """Build the default catalog client (Google Books + Open Library)."""
    return CatalogClient.from_config(config)


def resolve_db_path(db_path: Path | None, config: ShelfsenseConfig) -> Path:
    return db_path or config.db_path
