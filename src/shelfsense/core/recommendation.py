# ABOUTME: Recommendation data structures produced by the LLM and enriched by post-processing.
# ABOUTME: SourceDescriptor points back at the catalog record a recommendation was matched to.

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class SourceDescriptor:
    """Where an enriched recommendation's metadata came from."""

    api: str
    id: str
    info_url: str | None = None


@dataclass(frozen=True)
class Recommendation:
    """A book suggestion from the model, optionally enriched with catalog metadata.

    ``related_to`` lists the seed titles the model claims the suggestion is
    relevant to. ``confidence`` is left as None when the model gave none; the
    ranking treats that as 0.5.
    """

    title: str
    reason: str = ""
    authors: tuple[str, ...] = ()
    confidence: float | None = None
    related_to: tuple[str, ...] = ()
    isbn13: str | None = None
    cover_url: str | None = None
    description: str | None = None
    language: str | None = None
    published_year: int | None = None
    source: SourceDescriptor | None = None

    def __post_init__(self) -> None:
        if self.confidence is not None and not 0.0 <= self.confidence <= 1.0:
            msg = f"confidence must be between 0.0 and 1.0, got {self.confidence}"
            raise ValueError(msg)

    @property
    def primary_author(self) -> str:
        return self.authors[0] if self.authors else ""

    @property
    def author(self) -> str:
        return ", ".join(self.authors)

    def to_dict(self) -> dict[str, Any]:
        """JSON-friendly form using the wire names (``relatedTo``)."""
        return {
            "title": self.title,
            "authors": list(self.authors),
            "reason": self.reason,
            "confidence": self.confidence,
            "relatedTo": list(self.related_to),
            "isbn13": self.isbn13,
            "cover_url": self.cover_url,
            "description": self.description,
            "language": self.language,
            "published_year": self.published_year,
            "source": (
                {"api": self.source.api, "id": self.source.id, "info_url": self.source.info_url}
                if self.source
                else None
            ),
        }
