# ABOUTME: Async HTTP client abstraction for catalog provider API calls.
# ABOUTME: Enforces per-request timeouts and JSON responses; injectable transport for testing.

import logging
from typing import Any, Protocol, runtime_checkable

import httpx

logger = logging.getLogger(__name__)


class CatalogFetchError(Exception):
    """Raised when an HTTP request to a catalog provider fails."""


class MalformedResponseError(CatalogFetchError):
    """Raised when a provider response body does not have the expected shape."""


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for HTTP GET operations against catalog APIs."""

    async def get(
        self,
        url: str,
        params: dict[str, str] | None = None,
        *,
        timeout_ms: int | None = None,
    ) -> Any: ...


class ShelfsenseHttpClient:
    """Async HTTP client for catalog API calls.

    Wraps httpx.AsyncClient. Every call is bounded by its own timeout and
    succeeds only on a 2xx response carrying a JSON body. There is no retry
    and no rate limiting: a failed call is reported once and the caller
    decides how to degrade.
    """

    def __init__(
        self,
        *,
        timeout_ms: int = 12_000,
        user_agent: str = "shelfsense/0.1.0",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        client_kwargs: dict[str, Any] = {
            "headers": {"User-Agent": user_agent, "Accept": "application/json"},
            "timeout": timeout_ms / 1000,
            "follow_redirects": True,
        }
        if transport is not None:
            client_kwargs["transport"] = transport
        self._client = httpx.AsyncClient(**client_kwargs)
        self._timeout_ms = timeout_ms

    async def get(
        self,
        url: str,
        params: dict[str, str] | None = None,
        *,
        timeout_ms: int | None = None,
    ) -> Any:
        """Send a GET request and return the decoded JSON body.

        Args:
            url: The URL to request.
            params: Optional query parameters.
            timeout_ms: Overrides the client default for this call only.

        Returns:
            Parsed JSON response body.

        Raises:
            CatalogFetchError: On network faults, timeouts, non-2xx statuses,
                non-JSON content types, or undecodable bodies.
        """
        timeout = (timeout_ms or self._timeout_ms) / 1000
        try:
            response = await self._client.get(url, params=params, timeout=timeout)
        except httpx.TimeoutException as exc:
            raise CatalogFetchError(f"Timed out after {timeout:.1f}s: {url}") from exc
        except httpx.HTTPError as exc:
            raise CatalogFetchError(f"Request failed: {url}: {exc}") from exc

        if not response.is_success:
            raise CatalogFetchError(f"HTTP {response.status_code} from {url}")

        content_type = response.headers.get("content-type", "")
        if "application/json" not in content_type:
            raise CatalogFetchError(
                f"Non-JSON response ({content_type or 'no content-type'}) from {url}"
            )

        try:
            return response.json()
        except ValueError as exc:
            raise CatalogFetchError(f"Malformed JSON from {url}: {exc}") from exc

    async def aclose(self) -> None:
        await self._client.aclose()
        logger.debug("HTTP client closed")
