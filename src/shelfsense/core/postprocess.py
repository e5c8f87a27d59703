# ABOUTME: Post-processing of model recommendations: enrich, exclude self-matches, rank, diversify.
# ABOUTME: A pure function of its inputs, so the same raw output always yields the same list.

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace

from shelfsense.catalog.google_parser import books_url
from shelfsense.catalog.scoring import normalize_title
from shelfsense.catalog.types import CatalogEntry
from shelfsense.core.recommendation import Recommendation, SourceDescriptor
from shelfsense.core.resolver import ResolvedSeed

DEFAULT_CONFIDENCE = 0.5
RELATED_SEED_WEIGHT = 0.22
SINGLE_SEED_PENALTY = 0.15


@dataclass(frozen=True)
class _Ranked:
    """A recommendation plus the scoring state that never leaves this module."""

    recommendation: Recommendation
    score: float
    related: tuple[str, ...]

    @property
    def main_seed(self) -> str:
        return self.related[0] if self.related else ""


def source_descriptor(entry: CatalogEntry) -> SourceDescriptor:
    """Describe the catalog record a recommendation was matched to."""
    info_url = entry.metadata.get("info_link")
    if not info_url and entry.source == "google" and entry.source_id:
        info_url = books_url(entry.source_id)
    if not info_url:
        info_url = entry.metadata.get("info_url")
    return SourceDescriptor(
        api=entry.source,
        id=entry.source_id or entry.isbn13 or "",
        info_url=info_url or None,
    )


def find_candidate(rec: Recommendation, pool: Sequence[CatalogEntry]) -> CatalogEntry | None:
    """First pool entry with the same normalized title or the same primary author."""
    title = normalize_title(rec.title)
    author = rec.primary_author.lower()
    for entry in pool:
        if title and normalize_title(entry.title) == title:
            return entry
        if author and entry.primary_author and entry.primary_author.lower() == author:
            return entry
    return None


def _find_by_title(title: str, pool: Sequence[CatalogEntry]) -> CatalogEntry | None:
    if not title:
        return None
    for entry in pool:
        if normalize_title(entry.title) == title:
            return entry
    return None


def attach_source(rec: Recommendation, pool: Sequence[CatalogEntry]) -> Recommendation:
    """Copy authoritative metadata from the matched pool entry onto a recommendation.

    Candidate values win when present; the model's own values are the
    fallback. Without a match the recommendation carries no source.
    """
    hit = find_candidate(rec, pool)
    if hit is None:
        return replace(rec, source=None)
    return replace(
        rec,
        isbn13=hit.isbn13 or rec.isbn13,
        cover_url=hit.cover_url or rec.cover_url,
        description=hit.description or rec.description,
        language=hit.language or rec.language,
        published_year=hit.published_year or rec.published_year,
        source=source_descriptor(hit),
    )


def is_self_match(
    rec: Recommendation,
    pool: Sequence[CatalogEntry],
    seed_title_set: set[str],
    seed_isbn_set: set[str],
) -> bool:
    """True when a recommendation is one of the seeds.

    Either its normalized title is a seed title, or the pool entry carrying
    its exact title has the ISBN of a resolved seed.
    """
    title = normalize_title(rec.title)
    if title in seed_title_set:
        return True
    hit = _find_by_title(title, pool)
    return bool(hit and hit.isbn13 and hit.isbn13 in seed_isbn_set)


def related_seeds(rec: Recommendation, seed_title_set: set[str]) -> tuple[str, ...]:
    """Normalized seed titles named in ``related_to``, deduplicated, in model order."""
    related: dict[str, None] = {}
    for title in rec.related_to:
        normalized = normalize_title(title)
        if normalized in seed_title_set:
            related[normalized] = None
    return tuple(related)


def relevance_score(confidence: float | None, related_count: int) -> float:
    """Reward ties to several seeds and penalize a tie to exactly one."""
    base = DEFAULT_CONFIDENCE if confidence is None else confidence
    penalty = SINGLE_SEED_PENALTY if related_count == 1 else 0.0
    return base + RELATED_SEED_WEIGHT * related_count - penalty


def diversify(ranked: Sequence[_Ranked], target_count: int) -> list[_Ranked]:
    """Pick up to ``target_count`` items with at most ceil(n/2) per main seed first.

    Items over their seed's cap, and items tied to no seed, wait in an
    overflow list that fills any remaining slots in score order.
    """
    cap = math.ceil(target_count / 2)
    per_seed: dict[str, int] = {}
    picked: list[_Ranked] = []
    overflow: list[_Ranked] = []

    for item in ranked:
        main = item.main_seed
        if main and per_seed.get(main, 0) < cap:
            per_seed[main] = per_seed.get(main, 0) + 1
            picked.append(item)
        else:
            overflow.append(item)
        if len(picked) >= target_count:
            break

    for item in overflow:
        if len(picked) >= target_count:
            break
        picked.append(item)

    return picked[:target_count]


def post_process(
    raw: Iterable[Recommendation],
    pool: Sequence[CatalogEntry],
    resolved_seeds: Sequence[ResolvedSeed],
    target_count: int,
    seed_titles: Iterable[str | None],
) -> list[Recommendation]:
    """Turn raw model recommendations into the final ranked list.

    Steps: attach catalog metadata, drop self-matches, score multi-seed
    relevance, stable-sort by score, diversify under the per-seed cap, and
    truncate to ``target_count``.

    Only resolved seeds that actually matched contribute ISBNs to the
    self-match check.
    """
    if target_count < 1:
        return []

    seed_title_set = {t for t in (normalize_title(s) for s in seed_titles) if t}
    seed_isbn_set = {
        r.entry.isbn13 for r in resolved_seeds if r.entry is not None and r.entry.isbn13
    }

    ranked: list[_Ranked] = []
    for rec in raw:
        enriched = attach_source(rec, pool)
        if is_self_match(enriched, pool, seed_title_set, seed_isbn_set):
            continue
        related = related_seeds(enriched, seed_title_set)
        ranked.append(
            _Ranked(
                recommendation=enriched,
                score=relevance_score(enriched.confidence, len(related)),
                related=related,
            )
        )

    ranked.sort(key=lambda item: item.score, reverse=True)
    return [item.recommendation for item in diversify(ranked, target_count)]
