# ABOUTME: Core catalog data structures: CatalogEntry, Seed, SearchOptions, SearchResult.
# ABOUTME: These are the typed interchange format between providers, the resolver, and the pool.

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, Literal

Source = Literal["google", "openlibrary"]
OrderBy = Literal["relevance", "newest"]

SOURCES: tuple[str, ...] = ("google", "openlibrary")
_ORDER_BY_VALUES = ("relevance", "newest")


@dataclass(frozen=True)
class CatalogEntry:
    """A normalized bibliographic record returned by a catalog search.

    Entries are built fresh from each provider response and never mutated.
    Provider-specific extras (info links, subjects, page counts) live in
    ``metadata`` so the common fields stay the same across sources.
    """

    title: str
    source: Source
    authors: tuple[str, ...] = ()
    isbn13: str | None = None
    language: str | None = None
    published_year: int | None = None
    description: str = ""
    cover_url: str | None = None
    source_id: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict, compare=False)

    def __post_init__(self) -> None:
        if not self.title:
            raise ValueError("CatalogEntry requires a non-empty title")
        if self.source not in SOURCES:
            msg = f"source must be one of {SOURCES}, got {self.source!r}"
            raise ValueError(msg)

    @property
    def dedup_key(self) -> tuple[str, str]:
        """Identity within one result set: (source, source_id or isbn13 or title)."""
        return (self.source, self.source_id or self.isbn13 or self.title)

    @property
    def primary_author(self) -> str:
        return self.authors[0] if self.authors else ""

    @property
    def author(self) -> str:
        """Convenience property: joined author string for display."""
        return ", ".join(self.authors)


def dedupe_entries(entries: Iterable[CatalogEntry]) -> list[CatalogEntry]:
    """Drop entries whose dedup_key was already seen. First occurrence wins."""
    seen: set[tuple[str, str]] = set()
    unique: list[CatalogEntry] = []
    for entry in entries:
        key = entry.dedup_key
        if key in seen:
            continue
        seen.add(key)
        unique.append(entry)
    return unique


def _clean_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


@dataclass(frozen=True)
class Seed:
    """A hint describing a book the user owns or likes.

    Seeds come from typed titles, barcode scans, or OCR/vision extraction and
    are therefore noisy. ``confidence`` is the producer's own guess and is not
    used when resolving.
    """

    title: str | None = None
    authors: tuple[str, ...] = ()
    isbn: str | None = None
    confidence: float | None = None

    def __post_init__(self) -> None:
        if self.confidence is not None and not 0.0 <= self.confidence <= 1.0:
            msg = f"confidence must be between 0.0 and 1.0, got {self.confidence}"
            raise ValueError(msg)

    @property
    def primary_author(self) -> str:
        return self.authors[0] if self.authors else ""

    @property
    def is_usable(self) -> bool:
        """A seed can be resolved only if it carries a title or an ISBN."""
        return bool(self.title or self.isbn)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Seed":
        """Coerce a loosely-typed mapping (JSON payload, LLM output) into a Seed.

        Blank strings become None, a bare author string becomes a one-element
        tuple, and ISBNs lose their hyphens and spaces.
        """
        raw_authors = data.get("authors") or ()
        if isinstance(raw_authors, str):
            raw_authors = (raw_authors,)
        authors = tuple(a for a in (_clean_str(x) for x in raw_authors) if a)

        isbn = _clean_str(data.get("isbn"))
        if isbn:
            isbn = isbn.replace("-", "").replace(" ", "")

        confidence = data.get("confidence")
        return cls(
            title=_clean_str(data.get("title")),
            authors=authors,
            isbn=isbn,
            confidence=float(confidence) if confidence is not None else None,
        )


@dataclass(frozen=True)
class SearchOptions:
    """Per-query knobs. order_by and lang_restrict only apply to Google Books."""

    max_results: int = 10
    order_by: OrderBy | None = None
    lang_restrict: str | None = None
    timeout_ms: int = 12_000

    def __post_init__(self) -> None:
        if self.max_results < 1:
            msg = f"max_results must be at least 1, got {self.max_results}"
            raise ValueError(msg)
        if self.order_by is not None and self.order_by not in _ORDER_BY_VALUES:
            msg = f"order_by must be one of {_ORDER_BY_VALUES}, got {self.order_by!r}"
            raise ValueError(msg)
        if self.timeout_ms <= 0:
            msg = f"timeout_ms must be positive, got {self.timeout_ms}"
            raise ValueError(msg)


@dataclass(frozen=True)
class SearchResult:
    """Outcome of one provider query.

    ``error`` is set when the provider faulted (timeout, bad status, bad body);
    an empty ``entries`` with no error means the provider simply found nothing.
    """

    entries: tuple[CatalogEntry, ...] = ()
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None

    def __iter__(self) -> Iterator[CatalogEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    @classmethod
    def fault(cls, error: str) -> "SearchResult":
        return cls(entries=(), error=error)
