# ABOUTME: Seed resolution: find the best catalog entry for a noisy seed.
# ABOUTME: Builds query variants, runs them concurrently, and picks the top-scoring match.

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass

from shelfsense.catalog.client import CatalogClient, SearchRequest
from shelfsense.catalog.scoring import score_match
from shelfsense.catalog.types import CatalogEntry, Seed

logger = logging.getLogger(__name__)

_VARIANT_MAX_RESULTS = 6
MAX_RESOLVED_SEEDS = 10


@dataclass(frozen=True)
class ResolvedSeed:
    """A seed paired with its best catalog match, if any."""

    seed: Seed
    entry: CatalogEntry | None = None
    score: float = 0.0

    @property
    def matched(self) -> bool:
        return self.entry is not None

    @property
    def title(self) -> str | None:
        """Authoritative title when matched, otherwise the seed's own."""
        return self.entry.title if self.entry else self.seed.title

    @property
    def authors(self) -> tuple[str, ...]:
        return self.entry.authors if self.entry else self.seed.authors


def build_variants(
    catalog: CatalogClient, seed: Seed, language: str | None
) -> list[SearchRequest]:
    """Build the query variants for one seed.

    ISBN seeds query both providers by ISBN. Title seeds without an ISBN get
    an exact-title Google query plus, with a known author, a title+author one.
    Any seed with a title also queries Open Library with the raw title.
    """
    variants: list[SearchRequest] = []
    plain = catalog.options(max_results=_VARIANT_MAX_RESULTS)

    if seed.isbn:
        variants.append(SearchRequest("google", f"isbn:{seed.isbn}", plain))
        variants.append(SearchRequest("openlibrary", seed.isbn, plain))
    elif seed.title:
        restricted = catalog.options(max_results=_VARIANT_MAX_RESULTS, lang_restrict=language)
        variants.append(SearchRequest("google", f'intitle:"{seed.title}"', restricted))
        if seed.primary_author:
            query = f'intitle:"{seed.title}" inauthor:"{seed.primary_author}"'
            variants.append(SearchRequest("google", query, restricted))

    if seed.title:
        variants.append(SearchRequest("openlibrary", seed.title, plain))

    return variants


def pick_best(
    seed: Seed, entries: Sequence[CatalogEntry]
) -> tuple[CatalogEntry | None, float]:
    """Return the highest-scoring entry and its score. Ties keep the earliest entry."""
    best: CatalogEntry | None = None
    best_score = 0.0
    for entry in entries:
        score = score_match(seed, entry)
        if best is None or score > best_score:
            best, best_score = entry, score
    return best, best_score


async def resolve_seed(
    catalog: CatalogClient, seed: Seed, language: str | None
) -> ResolvedSeed:
    """Resolve one seed against the catalogs.

    A seed with neither title nor ISBN, or one whose queries all come back
    empty, resolves to an unmatched ResolvedSeed; neither case is an error.
    """
    variants = build_variants(catalog, seed, language)
    if not variants:
        return ResolvedSeed(seed=seed)

    results = await catalog.gather(variants)
    entries = [entry for result in results for entry in result.entries]

    best, score = pick_best(seed, entries)
    if best is None:
        logger.info("No catalog match for seed title=%r isbn=%r", seed.title, seed.isbn)
        return ResolvedSeed(seed=seed)

    logger.debug("Resolved %r -> %r (%s, score %.2f)", seed.title, best.title, best.source, score)
    return ResolvedSeed(seed=seed, entry=best, score=score)


async def resolve_seeds(
    catalog: CatalogClient,
    seeds: Sequence[Seed],
    language: str | None,
    *,
    limit: int = MAX_RESOLVED_SEEDS,
) -> list[ResolvedSeed]:
    """Resolve the first ``limit`` seeds concurrently, preserving input order."""
    return list(
        await asyncio.gather(*(resolve_seed(catalog, seed, language) for seed in seeds[:limit]))
    )
