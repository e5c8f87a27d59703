# ABOUTME: Google Books catalog provider implementation.
# ABOUTME: Runs volumes searches (with ordering and language restriction) and returns CatalogEntries.

import logging
import re

from shelfsense.catalog.google_parser import parse_volumes
from shelfsense.catalog.http import CatalogFetchError, HttpClient
from shelfsense.catalog.types import CatalogEntry, SearchOptions, SearchResult, dedupe_entries

logger = logging.getLogger(__name__)

_ISBN_LOOKUP_LIMIT = 5


class GoogleBooksProvider:
    """Catalog provider backed by the Google Books volumes API.

    Supports the full query syntax (``intitle:``, ``inauthor:``, ``isbn:``),
    ``orderBy`` and ``langRestrict``. Uses a dependency-injected HttpClient
    for testability.
    """

    def __init__(
        self,
        http_client: HttpClient,
        *,
        base_url: str = "https://www.googleapis.com/books/v1/volumes",
        api_key: str | None = None,
    ) -> None:
        self._http = http_client
        self._base_url = base_url
        self._api_key = api_key

    @property
    def name(self) -> str:
        return "google"

    def _build_params(self, query: str, options: SearchOptions) -> dict[str, str]:
        params: dict[str, str] = {"q": query, "maxResults": str(options.max_results)}
        if options.order_by:
            params["orderBy"] = options.order_by
        if options.lang_restrict:
            params["langRestrict"] = options.lang_restrict
        if self._api_key:
            params["key"] = self._api_key
        return params

    async def search(self, query: str, options: SearchOptions) -> SearchResult:
        """Run one volumes search.

        Provider faults never propagate: they come back as a failed
        SearchResult and are logged as warnings.
        """
        params = self._build_params(query, options)
        try:
            data = await self._http.get(
                self._base_url, params=params, timeout_ms=options.timeout_ms
            )
            entries = parse_volumes(data)
        except CatalogFetchError as exc:
            logger.warning("Google Books search failed for q=%s: %s", query, exc)
            return SearchResult.fault(str(exc))

        return SearchResult(entries=tuple(dedupe_entries(entries)))

    async def lookup_isbn(self, isbn: str, options: SearchOptions) -> list[CatalogEntry]:
        """Look up a book by ISBN via an ``isbn:`` volumes query."""
        clean_isbn = re.sub(r"[\s-]", "", isbn)
        lookup_options = SearchOptions(
            max_results=min(options.max_results, _ISBN_LOOKUP_LIMIT),
            timeout_ms=options.timeout_ms,
        )
        result = await self.search(f"isbn:{clean_isbn}", lookup_options)
        return list(result.entries)
