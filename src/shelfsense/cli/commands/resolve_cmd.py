# ABOUTME: The `shelfsense resolve` command for matching a title against the catalogs.
# ABOUTME: Shows the best Google Books / Open Library match and its score.

import asyncio

import click
from rich.console import Console
from rich.table import Table

from shelfsense.catalog.client import CatalogClient
from shelfsense.catalog.types import Seed
from shelfsense.cli.options import create_catalog, language_option
from shelfsense.config import ShelfsenseConfig
from shelfsense.core.resolver import ResolvedSeed, resolve_seed

console = Console()


def _create_catalog(config: ShelfsenseConfig) -> CatalogClient:
    return create_catalog(config)


async def _resolve(seed: Seed, language: str, config: ShelfsenseConfig) -> ResolvedSeed:
    async with _create_catalog(config) as catalog:
        return await resolve_seed(catalog, seed, language)


@click.command("resolve")
@click.argument("title")
@click.option("--author", "-a", default=None, help="Author name to narrow the search.")
@click.option("--isbn", default=None, help="ISBN; takes priority over the title.")
@language_option
def resolve(title: str, author: str | None, isbn: str | None, language: str) -> None:
    """Find the catalog record that best matches TITLE."""
    seed = Seed.from_dict({"title": title, "authors": author, "isbn": isbn})
    resolved = asyncio.run(_resolve(seed, language, ShelfsenseConfig.from_env()))

    if resolved.entry is None:
        console.print(f"[yellow]No match found for '{title}'.[/yellow]")
        return

    entry = resolved.entry
    table = Table(show_header=False)
    table.add_column("Field", style="bold cyan")
    table.add_column("Value")
    table.add_row("Title", entry.title)
    table.add_row("Author", entry.author or "[dim]unknown[/dim]")
    table.add_row("ISBN-13", entry.isbn13 or "")
    table.add_row("Year", str(entry.published_year or ""))
    table.add_row("Language", entry.language or "?")
    table.add_row("Source", f"{entry.source}:{entry.source_id or ''}")
    table.add_row("Score", f"{resolved.score:.2f}")
    console.print(table)
