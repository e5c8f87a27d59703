# ABOUTME: Unit tests for CatalogClient dispatch, batching, and ISBN fallback.
# ABOUTME: Uses fake providers, plus an httpx MockTransport for malformed-record handling.

import asyncio

import httpx
import pytest

from shelfsense.catalog.client import CatalogClient, SearchRequest
from shelfsense.catalog.types import CatalogEntry, SearchOptions
from shelfsense.config import ShelfsenseConfig
from tests.fixtures.fakes import FakeProvider, make_catalog


def _entry(title: str, source: str = "google", source_id: str | None = None) -> CatalogEntry:
    return CatalogEntry(title=title, source=source, source_id=source_id)


class TestFromConfig:
    """Tests for building a client from configuration."""

    def test_registers_both_providers(self) -> None:
        client = CatalogClient.from_config(ShelfsenseConfig())
        assert client.provider_names == ("google", "openlibrary")
        asyncio.run(client.aclose())

    def test_options_carry_configured_timeout(self) -> None:
        client = CatalogClient.from_config(ShelfsenseConfig(timeout_ms=4000))
        assert client.options().timeout_ms == 4000
        assert client.options(timeout_ms=100).timeout_ms == 100
        asyncio.run(client.aclose())


class TestSearch:
    """Tests for single-provider search dispatch."""

    def test_dispatches_to_named_provider(self) -> None:
        client, google, openlibrary = make_catalog(google=lambda q: [_entry("A", source_id="1")])
        result = asyncio.run(client.search("google", "a"))
        assert [e.title for e in result] == ["A"]
        assert len(google.queries) == 1
        assert openlibrary.queries == []

    def test_default_options_used(self) -> None:
        client, google, _ = make_catalog()
        asyncio.run(client.search("google", "a"))
        _, options = google.queries[0]
        assert options == SearchOptions()

    def test_unknown_provider_raises(self) -> None:
        client, _, _ = make_catalog()
        with pytest.raises(ValueError, match="Unknown catalog provider"):
            asyncio.run(client.search("amazon", "a"))


class TestGather:
    """Tests for concurrent batches."""

    def test_results_keep_request_order(self) -> None:
        client, _, _ = make_catalog(
            google=lambda q: [_entry(f"g-{q}", source_id=q)],
            openlibrary=lambda q: [_entry(f"o-{q}", source="openlibrary", source_id=q)],
        )
        options = SearchOptions()
        results = asyncio.run(
            client.gather(
                [
                    SearchRequest("openlibrary", "x", options),
                    SearchRequest("google", "y", options),
                    SearchRequest("google", "z", options),
                ]
            )
        )
        assert [r.entries[0].title for r in results] == ["o-x", "g-y", "g-z"]

    def test_fault_does_not_cancel_siblings(self) -> None:
        client, _, _ = make_catalog(
            google=lambda q: RuntimeError("down"),
            openlibrary=lambda q: [_entry("ok", source="openlibrary", source_id="1")],
        )
        options = SearchOptions()
        results = asyncio.run(
            client.gather(
                [SearchRequest("google", "q", options), SearchRequest("openlibrary", "q", options)]
            )
        )
        assert results[0].failed
        assert [e.title for e in results[1]] == ["ok"]

    def test_unknown_provider_rejected_before_any_call(self) -> None:
        client, google, _ = make_catalog()
        options = SearchOptions()
        with pytest.raises(ValueError):
            asyncio.run(
                client.gather(
                    [SearchRequest("google", "q", options), SearchRequest("nope", "q", options)]
                )
            )
        assert google.queries == []


class TestLookupIsbn:
    """Tests for the Google -> Open Library ISBN fallback."""

    def test_google_hit_skips_openlibrary(self) -> None:
        client, _, openlibrary = make_catalog(google=lambda q: [_entry("G", source_id="g1")])
        entries = asyncio.run(client.lookup_isbn("9780132350884"))
        assert [e.title for e in entries] == ["G"]
        assert openlibrary.queries == []

    def test_falls_back_to_openlibrary(self) -> None:
        client, google, openlibrary = make_catalog(
            openlibrary=lambda q: [_entry("O", source="openlibrary", source_id="o1")]
        )
        entries = asyncio.run(client.lookup_isbn("9780132350884"))
        assert [e.title for e in entries] == ["O"]
        assert len(google.queries) == 1
        assert len(openlibrary.queries) == 1

    def test_lookup_options_capped_at_five(self) -> None:
        google = FakeProvider("google")
        client = CatalogClient({"google": google})
        asyncio.run(client.lookup_isbn("1"))
        _, options = google.queries[0]
        assert options.max_results == 5


def test_async_context_manager_closes_http() -> None:
    """Leaving the async with block closes the shared HTTP client."""

    async def go() -> bool:
        async with CatalogClient.from_config(ShelfsenseConfig()) as client:
            http = client._http
        return http._client.is_closed

    assert asyncio.run(go()) is True


def test_malformed_records_over_http_do_not_abort_batch() -> None:
    """Badly shaped records are skipped; the batch and its siblings still complete."""

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == "www.googleapis.com":
            return httpx.Response(200, json={"items": [{"id": "x", "volumeInfo": ["oops"]}]})
        docs = [{"title": 42}, {"title": "Clean Code", "author_name": "Robert C. Martin"}]
        return httpx.Response(200, json={"docs": docs})

    async def go():
        transport = httpx.MockTransport(handler)
        async with CatalogClient.from_config(ShelfsenseConfig(), transport=transport) as client:
            options = client.options()
            return await client.gather(
                [
                    SearchRequest("google", "clean code", options),
                    SearchRequest("openlibrary", "clean code", options),
                ]
            )

    google, openlibrary = asyncio.run(go())
    assert not google.failed
    assert len(google) == 0
    assert [e.title for e in openlibrary] == ["Clean Code"]
    assert openlibrary.entries[0].authors == ()
