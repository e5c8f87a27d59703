# ABOUTME: Parsing functions for Google Books API JSON responses.
# ABOUTME: Converts volume records into CatalogEntry instances.

from typing import Any
from urllib.parse import quote

from shelfsense.catalog.fields import count, mapping, parse_year, text, text_list
from shelfsense.catalog.http import MalformedResponseError
from shelfsense.catalog.types import CatalogEntry

_BOOKS_URL = "https://books.google.com/books?id="


def read_isbn13(identifiers: Any) -> str | None:
    """Pick the ISBN_13 identifier out of volumeInfo.industryIdentifiers."""
    if not isinstance(identifiers, list):
        return None
    for ident in identifiers:
        if not isinstance(ident, dict):
            continue
        if str(ident.get("type", "")).upper() == "ISBN_13" and text(ident.get("identifier")):
            return text(ident["identifier"])
    return None


def books_url(volume_id: str) -> str:
    """Public Google Books page for a volume id."""
    return f"{_BOOKS_URL}{quote(volume_id, safe='')}"


def parse_volume(item: dict[str, Any]) -> CatalogEntry | None:
    """Parse one item of a volumes search into a CatalogEntry.

    Returns None for records without a title, which cannot be matched or
    shown. Fields of the wrong JSON type are treated as absent.
    """
    info = mapping(item.get("volumeInfo"))
    title = text(info.get("title"))
    if not title:
        return None

    images = mapping(info.get("imageLinks"))

    return CatalogEntry(
        title=title,
        authors=tuple(text_list(info.get("authors"))),
        description=text(info.get("description")) or "",
        language=text(info.get("language")),
        published_year=parse_year(info.get("publishedDate")),
        cover_url=text(images.get("thumbnail")) or text(images.get("smallThumbnail")),
        source="google",
        source_id=text(item.get("id")),
        isbn13=read_isbn13(info.get("industryIdentifiers")),
        metadata={
            "info_link": text(info.get("infoLink")),
            "categories": text_list(info.get("categories")),
            "page_count": count(info.get("pageCount")),
        },
    )


def parse_volumes(data: Any) -> list[CatalogEntry]:
    """Parse a volumes search response into a list of CatalogEntry.

    A response without ``items`` is a legitimate empty result (Google omits
    the key when totalItems is 0).

    Raises:
        MalformedResponseError: If the body is not an object or items is not a list.
    """
    if not isinstance(data, dict):
        raise MalformedResponseError("volumes response is not a JSON object")
    items = data.get("items")
    if items is None:
        return []
    if not isinstance(items, list):
        raise MalformedResponseError("volumes response 'items' is not a list")

    entries: list[CatalogEntry] = []
    for item in items:
        if not isinstance(item, dict):
            continue
        entry = parse_volume(item)
        if entry is not None:
            entries.append(entry)
    return entries
