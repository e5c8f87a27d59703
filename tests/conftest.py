# ABOUTME: Shared pytest fixtures for Shelfsense tests.
# ABOUTME: Provides sample catalog entries, seeds, and a throwaway book store.

from collections.abc import Iterator
from pathlib import Path

import pytest

from shelfsense.catalog.types import CatalogEntry, Seed
from shelfsense.db import BookStore, open_store


_CONFIG_VARIABLES = (
    "GOOGLE_BOOKS_API_KEY",
    "OPENAI_API_KEY",
    "SHELFSENSE_OPENAI_MODEL",
    "SHELFSENSE_OPENAI_FALLBACK_MODEL",
    "SHELFSENSE_TIMEOUT_MS",
    "SHELFSENSE_GOOGLE_BOOKS_URL",
    "SHELFSENSE_OPENLIBRARY_URL",
    "SHELFSENSE_USER_AGENT",
)


@pytest.fixture(autouse=True)
def clean_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep real keys and overrides from the shell out of ShelfsenseConfig."""
    for name in _CONFIG_VARIABLES:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def clean_code_entry() -> CatalogEntry:
    """Google Books record for Clean Code with a known ISBN."""
    return CatalogEntry(
        title="Clean Code",
        authors=("Robert C. Martin",),
        isbn13="9780132350884",
        language="en",
        published_year=2008,
        description="A handbook of agile software craftsmanship.",
        cover_url="http://books.google.com/books/content?id=_i6bDeoCQzsC&zoom=1",
        source="google",
        source_id="_i6bDeoCQzsC",
        metadata={"info_link": "http://books.google.com/books?id=_i6bDeoCQzsC"},
    )


@pytest.fixture
def refactoring_entry() -> CatalogEntry:
    """Open Library record for Refactoring."""
    return CatalogEntry(
        title="Refactoring",
        authors=("Martin Fowler",),
        isbn13="9780134757599",
        published_year=2018,
        source="openlibrary",
        source_id="/works/OL2653045W",
        metadata={"info_url": "https://openlibrary.org/works/OL2653045W"},
    )


@pytest.fixture
def clean_code_seed() -> Seed:
    """A typed-in seed for Clean Code with its author."""
    return Seed(title="Clean Code", authors=("Robert C. Martin",))


@pytest.fixture
def store(tmp_path: Path) -> Iterator[BookStore]:
    """A BookStore over a fresh database in a temp directory."""
    conn = open_store(tmp_path / "library.db")
    yield BookStore(conn)
    conn.close()
