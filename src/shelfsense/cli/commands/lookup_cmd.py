# ABOUTME: The `shelfsense lookup` command for barcode-style ISBN lookups.
# ABOUTME: Looks the ISBN up on Google Books, then Open Library, and adds the hit to the library.

import asyncio
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from shelfsense.catalog.client import CatalogClient
from shelfsense.catalog.types import CatalogEntry
from shelfsense.cli.options import create_catalog, db_option, resolve_db_path
from shelfsense.config import ShelfsenseConfig
from shelfsense.db import BookStore, entry_to_row, open_store

console = Console()


def _create_catalog(config: ShelfsenseConfig) -> CatalogClient:
    return create_catalog(config)


async def _lookup(isbn: str, config: ShelfsenseConfig) -> list[CatalogEntry]:
    async with _create_catalog(config) as catalog:
        return await catalog.lookup_isbn(isbn)


@click.command("lookup")
@click.argument("isbn")
@db_option
@click.option("--no-save", is_flag=True, default=False, help="Only show the match.")
def lookup(isbn: str, db_path: Path | None, no_save: bool) -> None:
    """Look up ISBN and add the matching book to the library."""
    isbn = isbn.replace("-", "").replace(" ", "")
    config = ShelfsenseConfig.from_env()
    entries = asyncio.run(_lookup(isbn, config))

    if not entries:
        console.print(f"[red]No book found for ISBN {isbn}.[/red]")
        raise SystemExit(1)

    table = Table()
    table.add_column("Title", style="bold")
    table.add_column("Author")
    table.add_column("Year", width=5)
    table.add_column("Source")
    for entry in entries:
        table.add_row(
            entry.title,
            entry.author or "[dim]unknown[/dim]",
            str(entry.published_year or ""),
            entry.source,
        )
    console.print(table)

    if no_save:
        return

    conn = open_store(resolve_db_path(db_path, config))
    try:
        [book_id] = BookStore(conn).save_to_library([entry_to_row(entries[0])])
    finally:
        conn.close()
    console.print(f"Added [bold]{entries[0].title}[/bold] to the library (id {book_id}).")
