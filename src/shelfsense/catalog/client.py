# ABOUTME: CatalogClient dispatches searches to named providers and batches them concurrently.
# ABOUTME: Also provides ISBN lookup with a Google Books -> Open Library fallback.

import asyncio
import logging
from collections.abc import Mapping, Sequence
from typing import NamedTuple

import httpx

from shelfsense.catalog.google import GoogleBooksProvider
from shelfsense.catalog.http import ShelfsenseHttpClient
from shelfsense.catalog.openlibrary import OpenLibraryProvider
from shelfsense.catalog.provider import CatalogProvider
from shelfsense.catalog.types import CatalogEntry, SearchOptions, SearchResult, dedupe_entries
from shelfsense.config import ShelfsenseConfig

logger = logging.getLogger(__name__)


class SearchRequest(NamedTuple):
    """One (provider, query, options) triple for CatalogClient.gather."""

    provider: str
    query: str
    options: SearchOptions


class CatalogClient:
    """Front door to the external catalogs.

    Holds the providers by name and owns the shared HTTP client (when built
    via ``from_config``). Use as an async context manager, or call
    ``aclose()``, to release connections.
    """

    def __init__(
        self,
        providers: Mapping[str, CatalogProvider],
        *,
        default_timeout_ms: int = 12_000,
        http_client: ShelfsenseHttpClient | None = None,
    ) -> None:
        self._providers = dict(providers)
        self._default_timeout_ms = default_timeout_ms
        self._http = http_client

    @classmethod
    def from_config(
        cls,
        config: ShelfsenseConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "CatalogClient":
        """Build a client with Google Books and Open Library providers."""
        http = ShelfsenseHttpClient(
            timeout_ms=config.timeout_ms,
            user_agent=config.user_agent,
            transport=transport,
        )
        providers: list[CatalogProvider] = [
            GoogleBooksProvider(
                http, base_url=config.google_books_url, api_key=config.google_api_key
            ),
            OpenLibraryProvider(http, base_url=config.openlibrary_url),
        ]
        return cls(
            {p.name: p for p in providers},
            default_timeout_ms=config.timeout_ms,
            http_client=http,
        )

    @property
    def provider_names(self) -> tuple[str, ...]:
        return tuple(self._providers)

    def options(self, **kwargs) -> SearchOptions:
        """SearchOptions carrying this client's default timeout unless overridden."""
        kwargs.setdefault("timeout_ms", self._default_timeout_ms)
        return SearchOptions(**kwargs)

    def _provider(self, name: str) -> CatalogProvider:
        try:
            return self._providers[name]
        except KeyError:
            msg = f"Unknown catalog provider {name!r} (known: {', '.join(self._providers)})"
            raise ValueError(msg) from None

    async def search(
        self, provider: str, query: str, options: SearchOptions | None = None
    ) -> SearchResult:
        """Search one provider. Never raises for provider faults.

        Raises:
            ValueError: If ``provider`` is not a registered provider name.
        """
        impl = self._provider(provider)
        result = await impl.search(query, options or self.options())
        logger.debug(
            "search %s q=%r -> %d entries%s",
            provider,
            query,
            len(result),
            f" (error: {result.error})" if result.failed else "",
        )
        return result

    async def gather(self, requests: Sequence[SearchRequest]) -> list[SearchResult]:
        """Run several searches concurrently; results come back in request order.

        Each search is bounded by its own timeout, and a failure in one never
        cancels its siblings.
        """
        for request in requests:
            self._provider(request.provider)
        return list(
            await asyncio.gather(*(self.search(r.provider, r.query, r.options) for r in requests))
        )

    async def lookup_isbn(self, isbn: str) -> list[CatalogEntry]:
        """Look up an ISBN on Google Books, falling back to Open Library.

        Returns a deduplicated (possibly empty) list of matches.
        """
        options = self.options(max_results=5)
        matches: list[CatalogEntry] = []
        if "google" in self._providers:
            matches = await self._providers["google"].lookup_isbn(isbn, options)
        if not matches and "openlibrary" in self._providers:
            matches = await self._providers["openlibrary"].lookup_isbn(isbn, options)
        return dedupe_entries(matches)

    async def aclose(self) -> None:
        if self._http is not None:
            await self._http.aclose()

    async def __aenter__(self) -> "CatalogClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
