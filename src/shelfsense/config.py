# ABOUTME: Runtime configuration for Shelfsense (provider URLs, API keys, timeouts).
# ABOUTME: A pydantic-settings model read from the environment and passed to clients.

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DB_PATH = Path.home() / ".shelfsense" / "library.db"

GOOGLE_BOOKS_URL = "https://www.googleapis.com/books/v1/volumes"
OPENLIBRARY_URL = "https://openlibrary.org"

DEFAULT_TIMEOUT_MS = 12_000


class ShelfsenseConfig(BaseSettings):
    """Settings shared by the catalog client, the LLM collaborator, and the store.

    Values come from keyword arguments first, then environment variables,
    then the defaults below. Unaliased fields read ``SHELFSENSE_<FIELD>``.
    Empty variables count as unset. Nothing in Shelfsense reads
    configuration from module globals; callers build one of these and hand
    it to the factories that need it.
    """

    model_config = SettingsConfigDict(
        env_prefix="SHELFSENSE_",
        env_ignore_empty=True,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    google_books_url: str = GOOGLE_BOOKS_URL
    openlibrary_url: str = OPENLIBRARY_URL
    google_api_key: str | None = Field(None, validation_alias="GOOGLE_BOOKS_API_KEY")
    openai_api_key: str | None = Field(None, validation_alias="OPENAI_API_KEY")
    openai_model: str = Field("gpt-4o-mini", validation_alias="SHELFSENSE_OPENAI_MODEL")
    openai_fallback_model: str = Field(
        "gpt-4o", validation_alias="SHELFSENSE_OPENAI_FALLBACK_MODEL"
    )
    timeout_ms: int = Field(DEFAULT_TIMEOUT_MS, gt=0, validation_alias="SHELFSENSE_TIMEOUT_MS")
    user_agent: str = "shelfsense/0.1.0"
    db_path: Path = Field(DEFAULT_DB_PATH, validation_alias="SHELFSENSE_DB")

    @classmethod
    def from_env(cls) -> "ShelfsenseConfig":
        """Build a config from the process environment, falling back to defaults."""
        return cls()
