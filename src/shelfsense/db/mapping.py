# ABOUTME: Converts catalog entries and recommendations to SQLite rows and back.
# ABOUTME: Handles JSON serialization for the authors list and the metadata dict.

import json
from dataclasses import dataclass, field
from typing import Any

from shelfsense.catalog.types import CatalogEntry
from shelfsense.core.recommendation import Recommendation

MANUAL_SOURCE = "manual"


@dataclass
class BookRecord:
    """A stored book: the bibliographic fields plus database bookkeeping."""

    id: int
    title: str
    source: str
    source_id: str | None = None
    authors: list[str] = field(default_factory=list)
    isbn13: str | None = None
    language: str | None = None
    published_year: int | None = None
    description: str | None = None
    cover_url: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    date_added: str = ""
    date_modified: str = ""

    @property
    def author(self) -> str:
        return ", ".join(self.authors)


def entry_to_row(entry: CatalogEntry) -> dict[str, Any]:
    """Convert a CatalogEntry to a dict suitable for INSERT.

    Serializes authors as a JSON array and metadata as a JSON object. Empty
    values become NULL so an upsert never blanks out what is already stored.
    """
    return {
        "source": entry.source,
        "source_id": entry.source_id,
        "title": entry.title,
        "authors": json.dumps(list(entry.authors)) if entry.authors else None,
        "isbn13": entry.isbn13,
        "language": entry.language,
        "published_year": entry.published_year,
        "description": entry.description or None,
        "cover_url": entry.cover_url,
        "metadata": json.dumps(entry.metadata) if entry.metadata else None,
    }


def recommendation_to_row(rec: Recommendation) -> dict[str, Any]:
    """Convert a Recommendation to a dict suitable for INSERT.

    Recommendations the post-processor could not match to a catalog record
    are stored under the "manual" source with no source_id.
    """
    metadata: dict[str, Any] = {}
    if rec.source and rec.source.info_url:
        metadata["info_url"] = rec.source.info_url
    return {
        "source": rec.source.api if rec.source else MANUAL_SOURCE,
        "source_id": rec.source.id if rec.source else None,
        "title": rec.title,
        "authors": json.dumps(list(rec.authors)) if rec.authors else None,
        "isbn13": rec.isbn13,
        "language": rec.language,
        "published_year": rec.published_year,
        "description": rec.description,
        "cover_url": rec.cover_url,
        "metadata": json.dumps(metadata) if metadata else None,
    }


def row_to_record(row: Any) -> BookRecord:
    """Convert a books table row (dict-like) to a BookRecord."""
    return BookRecord(
        id=row["id"],
        title=row["title"],
        source=row["source"],
        source_id=row["source_id"],
        authors=json.loads(row["authors"]) if row["authors"] else [],
        isbn13=row["isbn13"],
        language=row["language"],
        published_year=row["published_year"],
        description=row["description"],
        cover_url=row["cover_url"],
        metadata=json.loads(row["metadata"]) if row["metadata"] else {},
        date_added=row["date_added"],
        date_modified=row["date_modified"],
    )
