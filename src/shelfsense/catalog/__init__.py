# ABOUTME: Catalog package: external bibliographic search, normalized records, and text matching.
# ABOUTME: Exports the CatalogClient plus the CatalogEntry / Seed data structures.

from shelfsense.catalog.client import CatalogClient, SearchRequest
from shelfsense.catalog.http import CatalogFetchError
from shelfsense.catalog.provider import CatalogProvider
from shelfsense.catalog.scoring import normalize_title, score_match, title_similarity
from shelfsense.catalog.types import (
    CatalogEntry,
    Seed,
    SearchOptions,
    SearchResult,
    dedupe_entries,
)

__all__ = [
    "CatalogClient",
    "CatalogEntry",
    "CatalogFetchError",
    "CatalogProvider",
    "SearchOptions",
    "SearchRequest",
    "SearchResult",
    "Seed",
    "dedupe_entries",
    "normalize_title",
    "score_match",
    "title_similarity",
]
