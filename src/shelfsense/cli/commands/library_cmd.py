# ABOUTME: The `shelfsense library` command group for the books the user owns.
# ABOUTME: Provides ls, rm, and toggle subcommands over the library list.

import sqlite3
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from shelfsense.cli.options import db_option, resolve_db_path
from shelfsense.config import ShelfsenseConfig
from shelfsense.db import BookNotFoundError, BookStore, open_store

console = Console()


def _open(db_path: Path | None) -> sqlite3.Connection:
    return open_store(resolve_db_path(db_path, ShelfsenseConfig.from_env()))


@click.group("library")
def library() -> None:
    """Manage the books you own."""


@library.command("ls")
@db_option
def library_ls(db_path: Path | None) -> None:
    """List library books, most recently added first."""
    conn = _open(db_path)
    try:
        records = BookStore(conn).list_library()
    finally:
        conn.close()

    if not records:
        console.print("[yellow]No books in the library.[/yellow]")
        return

    table = Table()
    table.add_column("ID", style="dim", width=4)
    table.add_column("Title", style="bold")
    table.add_column("Author")
    table.add_column("ISBN-13")
    table.add_column("Source")
    for record in records:
        table.add_row(
            str(record.id),
            record.title,
            record.author or "[dim]unknown[/dim]",
            record.isbn13 or "",
            record.source,
        )
    console.print(table)
    console.print(f"\n[dim]{len(records)} book(s)[/dim]")


@library.command("rm")
@click.argument("book_ids", nargs=-1, type=int, required=True)
@db_option
def library_rm(book_ids: tuple[int, ...], db_path: Path | None) -> None:
    """Remove BOOK_IDS from the library."""
    conn = _open(db_path)
    try:
        removed = BookStore(conn).remove_from_library(book_ids)
    finally:
        conn.close()
    console.print(f"Removed {removed} book(s) from the library.")


@library.command("toggle")
@click.argument("book_id", type=int)
@db_option
def library_toggle(book_id: int, db_path: Path | None) -> None:
    """Add BOOK_ID to the library, or remove it if already there."""
    conn = _open(db_path)
    try:
        state = BookStore(conn).toggle_library(book_id)
    except BookNotFoundError as exc:
        console.print(f"[red]{exc}[/red]")
        raise SystemExit(1) from exc
    finally:
        conn.close()
    console.print(f"Book {book_id} library: [cyan]{state}[/cyan]")
