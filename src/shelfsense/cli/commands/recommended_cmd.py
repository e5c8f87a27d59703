# ABOUTME: The `shelfsense recommended` command group for saved recommendations.
# ABOUTME: Provides ls and toggle subcommands over the recommended list.

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from shelfsense.cli.options import db_option, resolve_db_path
from shelfsense.config import ShelfsenseConfig
from shelfsense.db import BookNotFoundError, BookStore, open_store

console = Console()


@click.group("recommended")
def recommended() -> None:
    """Manage saved recommendations."""


@recommended.command("ls")
@db_option
def recommended_ls(db_path: Path | None) -> None:
    """List saved recommendations, newest first."""
    conn = open_store(resolve_db_path(db_path, ShelfsenseConfig.from_env()))
    try:
        items = BookStore(conn).list_recommended()
    finally:
        conn.close()

    if not items:
        console.print("[yellow]No saved recommendations.[/yellow]")
        return

    table = Table()
    table.add_column("ID", style="dim", width=4)
    table.add_column("Title", style="bold")
    table.add_column("Author")
    table.add_column("Reason")
    for record, reason in items:
        table.add_row(
            str(record.id),
            record.title,
            record.author or "[dim]unknown[/dim]",
            reason,
        )
    console.print(table)
    console.print(f"\n[dim]{len(items)} recommendation(s)[/dim]")


@recommended.command("toggle")
@click.argument("book_id", type=int)
@click.option("--reason", default="", help="Reason to store when adding.")
@db_option
def recommended_toggle(book_id: int, reason: str, db_path: Path | None) -> None:
    """Add BOOK_ID to the recommended list, or remove it if already there."""
    conn = open_store(resolve_db_path(db_path, ShelfsenseConfig.from_env()))
    try:
        state = BookStore(conn).toggle_recommended(book_id, reason)
    except BookNotFoundError as exc:
        console.print(f"[red]{exc}[/red]")
        raise SystemExit(1) from exc
    finally:
        conn.close()
    console.print(f"Book {book_id} recommended: [cyan]{state}[/cyan]")
