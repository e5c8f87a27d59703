# ABOUTME: The `shelfsense recommend` command: run the full recommendation pipeline.
# ABOUTME: Seeds come from title arguments, --isbn options, and an optional OCR text file.

import asyncio
import logging
from collections.abc import Sequence
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from shelfsense.catalog.client import CatalogClient
from shelfsense.catalog.types import Seed
from shelfsense.cli.options import create_catalog, db_option, language_option, resolve_db_path
from shelfsense.config import ShelfsenseConfig
from shelfsense.core.pipeline import (
    InvalidSeedsError,
    RecommendationPipeline,
    RecommendationRun,
    validate_request,
)
from shelfsense.db import BookStore, open_store, recommendation_to_row
from shelfsense.llm.openai_recommender import OpenAIRecommender

logger = logging.getLogger(__name__)

console = Console()


def _create_catalog(config: ShelfsenseConfig) -> CatalogClient:
    return create_catalog(config)


def _create_recommender(config: ShelfsenseConfig) -> OpenAIRecommender:
    """Create the default recommender (OpenAI chat completions)."""
    if not config.openai_api_key:
        raise click.ClickException("OPENAI_API_KEY is not set.")
    return OpenAIRecommender.from_config(config)


async def _run(
    seeds: Sequence[Seed],
    ocr_text: str | None,
    target_count: int,
    language: str,
    hardness: str,
    config: ShelfsenseConfig,
) -> RecommendationRun:
    recommender = _create_recommender(config)
    if ocr_text:
        extracted = await recommender.extract_seeds(ocr_text)
        logger.info("Extracted %d seeds from OCR text", len(extracted))
        seeds = [*seeds, *extracted]
    async with _create_catalog(config) as catalog:
        pipeline = RecommendationPipeline(catalog, recommender)
        return await pipeline.run(seeds, target_count, language, hardness)


def _print_run(run: RecommendationRun) -> None:
    if run.resolved:
        matched = sum(r.matched for r in run.resolved)
        console.print(
            f"[dim]{matched}/{len(run.resolved)} seed(s) matched, "
            f"{len(run.pool)} candidate(s) in pool[/dim]"
        )

    if not run.recommendations:
        console.print("[yellow]No recommendations.[/yellow]")
        return

    table = Table()
    table.add_column("#", style="dim", width=3)
    table.add_column("Title", style="bold")
    table.add_column("Author")
    table.add_column("Related to")
    table.add_column("Reason")
    for i, rec in enumerate(run.recommendations, start=1):
        table.add_row(
            str(i),
            rec.title,
            rec.author or "[dim]unknown[/dim]",
            ", ".join(rec.related_to),
            rec.reason,
        )
    console.print(table)


@click.command("recommend")
@click.argument("titles", nargs=-1)
@click.option("--isbn", "isbns", multiple=True, help="Seed ISBN (repeatable).")
@click.option(
    "--ocr-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Text captured from book spines; seeds are extracted from it.",
)
@click.option(
    "-n",
    "--count",
    "target_count",
    type=int,
    default=5,
    show_default=True,
    help="Number of recommendations.",
)
@language_option
@click.option(
    "--hardness",
    default="auto",
    show_default=True,
    help="Difficulty hint passed to the model (e.g. beginner, advanced).",
)
@click.option("--save", is_flag=True, default=False, help="Store results in the database.")
@db_option
def recommend(
    titles: tuple[str, ...],
    isbns: tuple[str, ...],
    ocr_file: Path | None,
    target_count: int,
    language: str,
    hardness: str,
    save: bool,
    db_path: Path | None,
) -> None:
    """Recommend books related to the TITLES you already have."""
    seeds = [Seed.from_dict({"title": t}) for t in titles]
    seeds += [Seed.from_dict({"isbn": i}) for i in isbns]
    ocr_text = ocr_file.read_text(encoding="utf-8") if ocr_file else None
    if not seeds and not (ocr_text and ocr_text.strip()):
        raise click.UsageError("Give at least one title, --isbn, or --ocr-file.")

    config = ShelfsenseConfig.from_env()
    try:
        if not ocr_text:
            validate_request(seeds, target_count)
        run = asyncio.run(_run(seeds, ocr_text, target_count, language, hardness, config))
    except InvalidSeedsError as exc:
        raise click.UsageError(str(exc)) from exc

    _print_run(run)

    if save and run.recommendations:
        conn = open_store(resolve_db_path(db_path, config))
        try:
            store = BookStore(conn)
            store.save_to_recommended(
                [recommendation_to_row(rec) for rec in run.recommendations],
                [rec.reason for rec in run.recommendations],
            )
        finally:
            conn.close()
        console.print(f"Saved {len(run.recommendations)} recommendation(s).")
