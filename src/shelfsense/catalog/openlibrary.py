# ABOUTME: Open Library catalog provider implementation.
# ABOUTME: Runs free-text searches against openlibrary.org and looks up editions by ISBN.

import logging
import re

from shelfsense.catalog.http import CatalogFetchError, HttpClient
from shelfsense.catalog.openlibrary_parser import parse_isbn_response, parse_search_results
from shelfsense.catalog.types import CatalogEntry, SearchOptions, SearchResult, dedupe_entries

logger = logging.getLogger(__name__)


class OpenLibraryProvider:
    """Catalog provider backed by the Open Library API.

    Searches accept free text only (no field syntax, ordering or language
    restriction); ``order_by`` and ``lang_restrict`` in the options are ignored.
    Uses a dependency-injected HttpClient for testability.
    """

    def __init__(
        self, http_client: HttpClient, *, base_url: str = "https://openlibrary.org"
    ) -> None:
        self._http = http_client
        self._base_url = base_url.rstrip("/")

    @property
    def name(self) -> str:
        return "openlibrary"

    async def search(self, query: str, options: SearchOptions) -> SearchResult:
        """Run one search.json query; faults come back as a failed SearchResult."""
        params = {"q": query, "limit": str(options.max_results)}
        try:
            data = await self._http.get(
                f"{self._base_url}/search.json", params=params, timeout_ms=options.timeout_ms
            )
            entries = parse_search_results(data)
        except CatalogFetchError as exc:
            logger.warning("Open Library search failed for q=%s: %s", query, exc)
            return SearchResult.fault(str(exc))

        return SearchResult(entries=tuple(dedupe_entries(entries)))

    async def lookup_isbn(self, isbn: str, options: SearchOptions) -> list[CatalogEntry]:
        """Look up an edition via the ISBN endpoint.

        Returns a single-element list on success, empty list on failure.
        """
        clean_isbn = re.sub(r"[\s-]", "", isbn)
        try:
            data = await self._http.get(
                f"{self._base_url}/isbn/{clean_isbn}.json", timeout_ms=options.timeout_ms
            )
            entry = parse_isbn_response(data, clean_isbn)
        except CatalogFetchError as exc:
            logger.warning("ISBN lookup failed for %s: %s", isbn, exc)
            return []
        return [entry] if entry is not None else []
