# ABOUTME: CatalogProvider protocol defining the contract for bibliographic search sources.
# ABOUTME: Google Books and Open Library both implement it; the CatalogClient dispatches by name.

from typing import Protocol, runtime_checkable

from shelfsense.catalog.types import CatalogEntry, SearchOptions, SearchResult


@runtime_checkable
class CatalogProvider(Protocol):
    """Protocol for external catalog search services.

    Implementations must never raise for provider faults: a timeout, a bad
    status or a malformed body comes back as a failed SearchResult.
    """

    @property
    def name(self) -> str: ...

    async def search(self, query: str, options: SearchOptions) -> SearchResult: ...

    async def lookup_isbn(self, isbn: str, options: SearchOptions) -> list[CatalogEntry]: ...
