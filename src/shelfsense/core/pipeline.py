# ABOUTME: End-to-end recommendation pipeline: resolve seeds, build the pool, ask the LLM, rank.
# ABOUTME: Validates input up front so bad requests fail before any external call is made.

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from shelfsense.catalog.client import CatalogClient
from shelfsense.catalog.scoring import normalize_title
from shelfsense.catalog.types import CatalogEntry, Seed
from shelfsense.core.pool import MAX_POOL_QUERIES, MAX_POOL_SEEDS, MAX_POOL_SIZE, build_pool
from shelfsense.core.postprocess import post_process
from shelfsense.core.recommendation import Recommendation
from shelfsense.core.resolver import MAX_RESOLVED_SEEDS, ResolvedSeed, resolve_seeds
from shelfsense.llm.prompts import format_candidate_text, format_seed_text
from shelfsense.llm.recommender import RecommendationRequest, Recommender

logger = logging.getLogger(__name__)


class InvalidSeedsError(ValueError):
    """Raised when a recommendation request cannot be served as given."""


@dataclass
class RecommendationRun:
    """Everything one pipeline run produced, for callers that show intermediate state."""

    seeds: list[Seed]
    resolved: list[ResolvedSeed] = field(default_factory=list)
    pool: list[CatalogEntry] = field(default_factory=list)
    recommendations: list[Recommendation] = field(default_factory=list)

    @property
    def seed_titles(self) -> list[str]:
        """Resolved titles plus the raw title of every usable seed, one per normalized form.

        Raw titles cover seeds past the resolution limit and seeds whose catalog
        match carries a longer title than the one the user typed.
        """
        titles: dict[str, str] = {}
        raw = [seed.title for seed in self.seeds if seed.is_usable]
        for title in [r.title for r in self.resolved] + raw:
            key = normalize_title(title)
            if key and key not in titles:
                titles[key] = title
        return list(titles.values())


def validate_request(seeds: Sequence[Seed], target_count: int) -> None:
    """Reject requests that cannot produce recommendations.

    Raises:
        InvalidSeedsError: If target_count < 1, there are no seeds, or no seed
            has a title or an ISBN.
    """
    if target_count < 1:
        raise InvalidSeedsError(f"target count must be at least 1, got {target_count}")
    if not seeds:
        raise InvalidSeedsError("at least one seed is required")
    if not any(seed.is_usable for seed in seeds):
        raise InvalidSeedsError("no seed has a title or an ISBN")


class RecommendationPipeline:
    """Chains seed resolution, pool building, the LLM call, and post-processing.

    Holds no per-request state: the same pipeline can serve concurrent runs.
    """

    def __init__(
        self,
        catalog: CatalogClient,
        recommender: Recommender,
        *,
        max_seeds: int = MAX_RESOLVED_SEEDS,
        pool_seeds: int = MAX_POOL_SEEDS,
        max_queries: int = MAX_POOL_QUERIES,
        max_pool_size: int = MAX_POOL_SIZE,
    ) -> None:
        self._catalog = catalog
        self._recommender = recommender
        self._max_seeds = max_seeds
        self._pool_seeds = pool_seeds
        self._max_queries = max_queries
        self._max_pool_size = max_pool_size

    async def run(
        self,
        seeds: Sequence[Seed],
        target_count: int = 5,
        language: str = "ja",
        hardness: str = "auto",
    ) -> RecommendationRun:
        """Run the whole pipeline for one request.

        Raises:
            InvalidSeedsError: Before any external call, for unusable input.
        """
        validate_request(seeds, target_count)
        usable = [seed for seed in seeds if seed.is_usable]
        run = RecommendationRun(seeds=list(seeds))

        run.resolved = await resolve_seeds(
            self._catalog, usable, language, limit=self._max_seeds
        )
        logger.info(
            "Resolved %d of %d seeds", sum(r.matched for r in run.resolved), len(run.resolved)
        )

        run.pool = await build_pool(
            self._catalog,
            run.resolved,
            language,
            max_seeds=self._pool_seeds,
            max_queries=self._max_queries,
            max_pool_size=self._max_pool_size,
        )

        request = RecommendationRequest(
            seed_text=format_seed_text(run.resolved),
            candidate_text=format_candidate_text(run.pool),
            target_count=target_count,
            language=language,
            hardness=hardness,
        )
        raw = await self._recommender.recommend(request)
        logger.info("Model proposed %d recommendations", len(raw))

        run.recommendations = post_process(
            raw, run.pool, run.resolved, target_count, run.seed_titles
        )
        return run


async def generate_recommendations(
    seeds: Sequence[Seed],
    target_count: int,
    language: str,
    *,
    catalog: CatalogClient,
    recommender: Recommender,
    hardness: str = "auto",
) -> list[Recommendation]:
    """Resolve seeds, build the pool, ask the model, and return ranked recommendations."""
    pipeline = RecommendationPipeline(catalog, recommender)
    run = await pipeline.run(seeds, target_count, language, hardness)
    return run.recommendations
