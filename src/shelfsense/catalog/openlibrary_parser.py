# ABOUTME: Parsing functions for Open Library API JSON responses.
# ABOUTME: Converts search docs and edition records into CatalogEntry instances.

from typing import Any

from shelfsense.catalog.fields import mapping, parse_year, text, text_list
from shelfsense.catalog.http import MalformedResponseError
from shelfsense.catalog.types import CatalogEntry

_COVERS_BASE_URL = "https://covers.openlibrary.org/b/id"
_OL_BASE = "https://openlibrary.org"


def build_cover_url(cover_id: int | str, size: str = "M") -> str:
    """Build an Open Library cover image URL for a cover id.

    Args:
        cover_id: The ``cover_i`` value of a search doc.
        size: Image size: "S" (small), "M" (medium), or "L" (large).
    """
    return f"{_COVERS_BASE_URL}/{cover_id}-{size}.jpg"


def _first_isbn13(isbns: Any) -> str | None:
    for isbn in text_list(isbns):
        if len(isbn) == 13:
            return isbn
    return None


def _cover_id(value: Any) -> int | None:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return None
    return value


def parse_search_doc(doc: dict[str, Any]) -> CatalogEntry | None:
    """Parse one Open Library search doc.

    Returns None for untitled docs. Fields of the wrong JSON type are
    treated as absent.
    """
    title = text(doc.get("title"))
    if not title:
        return None

    key = text(doc.get("key"))
    languages = text_list(doc.get("language"))
    cover_id = _cover_id(doc.get("cover_i"))

    return CatalogEntry(
        title=title,
        authors=tuple(text_list(doc.get("author_name"))),
        description="",
        language=languages[0] if languages else None,
        published_year=parse_year(doc.get("first_publish_year")),
        cover_url=build_cover_url(cover_id) if cover_id else None,
        source="openlibrary",
        source_id=key,
        isbn13=_first_isbn13(doc.get("isbn")),
        metadata={
            "key": key,
            "info_url": f"{_OL_BASE}{key}" if key else None,
            "subjects": text_list(doc.get("subject")),
        },
    )


def parse_search_results(data: Any) -> list[CatalogEntry]:
    """Parse an Open Library Search API response into a list of CatalogEntry.

    Raises:
        MalformedResponseError: If the body has no ``docs`` list.
    """
    if not isinstance(data, dict) or not isinstance(data.get("docs"), list):
        raise MalformedResponseError("search response has no 'docs' list")

    entries: list[CatalogEntry] = []
    for doc in data["docs"]:
        if not isinstance(doc, dict):
            continue
        entry = parse_search_doc(doc)
        if entry is not None:
            entries.append(entry)
    return entries


def parse_description(value: Any) -> str:
    """Handle the OL quirk where description is a string or {"type", "value"}."""
    if isinstance(value, str):
        return value
    if isinstance(value, dict) and isinstance(value.get("value"), str):
        return value["value"]
    return ""


def parse_isbn_response(data: Any, isbn: str) -> CatalogEntry | None:
    """Parse an Open Library ISBN endpoint (edition) response into a CatalogEntry.

    Edition records carry no author names (those need the authors endpoint),
    so the entry's authors are left empty. The looked-up ISBN is recorded as
    isbn13 because that is what the caller scanned.
    """
    if not isinstance(data, dict):
        raise MalformedResponseError("ISBN response is not a JSON object")
    title = text(data.get("title"))
    if not title:
        return None

    language = None
    languages = data.get("languages")
    if isinstance(languages, list) and languages:
        lang_key = text(mapping(languages[0]).get("key"))
        if lang_key:
            language = lang_key.rsplit("/", 1)[-1] or None

    key = text(data.get("key"))
    return CatalogEntry(
        title=title,
        isbn13=isbn,
        language=language,
        published_year=parse_year(data.get("publish_date")),
        description=parse_description(data.get("description")),
        source="openlibrary",
        source_id=key,
        metadata={
            "key": key,
            "info_url": f"{_OL_BASE}{key}" if key else None,
        },
    )
