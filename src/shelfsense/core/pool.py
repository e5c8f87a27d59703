# ABOUTME: Candidate pool construction from seed books.
# ABOUTME: Derives title/head/author queries, runs them on both catalogs, and dedupes the results.

import logging
import re
from collections.abc import Sequence
from typing import Protocol

from shelfsense.catalog.client import CatalogClient, SearchRequest
from shelfsense.catalog.types import CatalogEntry, dedupe_entries

logger = logging.getLogger(__name__)

FALLBACK_QUERY = "programming"
MAX_POOL_SEEDS = 6
MAX_POOL_QUERIES = 8
MAX_POOL_SIZE = 80

_HEAD_LENGTH = 12
_SHORT_QUERY_LENGTH = 5
_QUERY_MAX_RESULTS = 8
_HEAD_DELIMITER_RE = re.compile(r"[：:\-\s]")


class SeedBook(Protocol):
    """Anything with a title and an author list: seeds, resolved seeds, catalog entries."""

    @property
    def title(self) -> str | None: ...

    @property
    def authors(self) -> tuple[str, ...]: ...


def title_head(title: str) -> str:
    """The part of a title before its first delimiter, capped at 12 characters.

    >>> title_head("Clean Code: A Handbook")
    'Clean'
    """
    head = _HEAD_DELIMITER_RE.split(title, maxsplit=1)[0][:_HEAD_LENGTH]
    return head or title[:_HEAD_LENGTH]


def derive_queries(
    books: Sequence[SeedBook],
    *,
    max_seeds: int = MAX_POOL_SEEDS,
    max_queries: int = MAX_POOL_QUERIES,
) -> list[str]:
    """Derive distinct pool queries from up to ``max_seeds`` books.

    Each titled book contributes an exact-title query and a head query; each
    book with an author contributes an author query. Falls back to a single
    generic term when nothing usable was found.
    """
    queries: dict[str, None] = {}
    for book in books[:max_seeds]:
        if book.title:
            queries[f'intitle:"{book.title}"'] = None
            queries[title_head(book.title)] = None
        if book.authors and book.authors[0]:
            queries[f'inauthor:"{book.authors[0]}"'] = None

    derived = [q for q in queries if q.strip()][:max_queries]
    return derived or [FALLBACK_QUERY]


async def build_pool(
    catalog: CatalogClient,
    books: Sequence[SeedBook],
    language: str | None,
    *,
    max_seeds: int = MAX_POOL_SEEDS,
    max_queries: int = MAX_POOL_QUERIES,
    max_pool_size: int = MAX_POOL_SIZE,
) -> list[CatalogEntry]:
    """Expand seed books into a deduplicated candidate pool.

    Every query runs against both catalogs concurrently. Results keep query
    order (Google before Open Library within a query), are deduplicated by
    dedup_key with the first occurrence winning, and are truncated to
    ``max_pool_size``.
    """
    queries = derive_queries(books, max_seeds=max_seeds, max_queries=max_queries)
    logger.debug("Pool queries: %s", queries)

    requests: list[SearchRequest] = []
    for query in queries:
        order_by = "newest" if len(query) < _SHORT_QUERY_LENGTH else "relevance"
        requests.append(
            SearchRequest(
                "google",
                query,
                catalog.options(
                    max_results=_QUERY_MAX_RESULTS, order_by=order_by, lang_restrict=language
                ),
            )
        )
        requests.append(
            SearchRequest("openlibrary", query, catalog.options(max_results=_QUERY_MAX_RESULTS))
        )

    results = await catalog.gather(requests)
    pool = dedupe_entries(entry for result in results for entry in result.entries)
    logger.info("Candidate pool: %d entries from %d queries", len(pool), len(queries))
    return pool[:max_pool_size]
