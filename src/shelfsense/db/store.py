# ABOUTME: Upsert and membership operations for the Shelfsense book store.
# ABOUTME: Books are keyed by provider + provider id; library and recommended are link tables.

import logging
import sqlite3
from collections.abc import Iterable, Sequence
from typing import Any, Literal

from shelfsense.db.mapping import BookRecord, row_to_record

logger = logging.getLogger(__name__)

ToggleState = Literal["on", "off"]

_UPDATABLE = (
    "title",
    "authors",
    "isbn13",
    "language",
    "published_year",
    "description",
    "cover_url",
    "metadata",
)


class BookNotFoundError(LookupError):
    """Raised when a book id does not exist in the store."""


class BookStore:
    """Wraps a sqlite3 connection and provides typed access to books and their lists."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def _find_existing(self, row: dict[str, Any]) -> int | None:
        if row.get("source_id"):
            cursor = self._conn.execute(
                "SELECT id FROM books WHERE source = ? AND source_id = ?",
                (row["source"], row["source_id"]),
            )
        else:
            cursor = self._conn.execute(
                "SELECT id FROM books WHERE source = ? AND source_id IS NULL AND title = ?",
                (row["source"], row["title"]),
            )
        found = cursor.fetchone()
        return found[0] if found else None

    def _upsert(self, row: dict[str, Any]) -> int:
        book_id = self._find_existing(row)
        if book_id is None:
            columns = ", ".join(row.keys())
            placeholders = ", ".join("?" for _ in row)
            cursor = self._conn.execute(
                f"INSERT INTO books ({columns}) VALUES ({placeholders})",
                list(row.values()),
            )
            return cursor.lastrowid  # type: ignore[return-value]

        # Keep stored values where the new row has nothing to say
        fields = [k for k in _UPDATABLE if k in row]
        set_clause = ", ".join(f"{k} = COALESCE(?, {k})" for k in fields)
        set_clause += ", date_modified = strftime('%Y-%m-%dT%H:%M:%f', 'now')"
        self._conn.execute(
            f"UPDATE books SET {set_clause} WHERE id = ?",
            [*(row[k] for k in fields), book_id],
        )
        return book_id

    def upsert_books(self, rows: Iterable[dict[str, Any]]) -> list[int]:
        """Insert or update books, returning their ids in input order.

        A row matches an existing book by (source, source_id), or by
        (source, title) when it has no source_id.
        """
        ids = [self._upsert(row) for row in rows]
        self._conn.commit()
        logger.debug("Upserted %d books", len(ids))
        return ids

    def save_to_library(self, rows: Iterable[dict[str, Any]]) -> list[int]:
        """Upsert books and add them to the library. Idempotent."""
        ids = self.upsert_books(rows)
        self._conn.executemany(
            "INSERT OR IGNORE INTO library_items (book_id) VALUES (?)",
            [(book_id,) for book_id in ids],
        )
        self._conn.commit()
        return ids

    def save_to_recommended(
        self, rows: Sequence[dict[str, Any]], reasons: Sequence[str]
    ) -> list[int]:
        """Upsert books and add them to the recommended list with their reasons.

        A book already on the list has its reason replaced.

        Raises:
            ValueError: If rows and reasons differ in length.
        """
        if len(rows) != len(reasons):
            msg = f"got {len(rows)} rows but {len(reasons)} reasons"
            raise ValueError(msg)
        ids = self.upsert_books(rows)
        self._conn.executemany(
            "INSERT INTO recommended_items (book_id, reason) VALUES (?, ?) "
            "ON CONFLICT(book_id) DO UPDATE SET reason = excluded.reason",
            list(zip(ids, reasons, strict=True)),
        )
        self._conn.commit()
        return ids

    def _require(self, book_id: int) -> None:
        if self.get_by_id(book_id) is None:
            raise BookNotFoundError(f"Book with id {book_id} not found")

    def toggle_library(self, book_id: int) -> ToggleState:
        """Add the book to the library if absent, remove it if present.

        Raises:
            BookNotFoundError: If the book_id does not exist.
        """
        self._require(book_id)
        cursor = self._conn.execute("DELETE FROM library_items WHERE book_id = ?", (book_id,))
        if cursor.rowcount:
            self._conn.commit()
            return "off"
        self._conn.execute("INSERT INTO library_items (book_id) VALUES (?)", (book_id,))
        self._conn.commit()
        return "on"

    def toggle_recommended(self, book_id: int, reason: str = "") -> ToggleState:
        """Add the book to the recommended list if absent, remove it if present.

        Raises:
            BookNotFoundError: If the book_id does not exist.
        """
        self._require(book_id)
        cursor = self._conn.execute(
            "DELETE FROM recommended_items WHERE book_id = ?", (book_id,)
        )
        if cursor.rowcount:
            self._conn.commit()
            return "off"
        self._conn.execute(
            "INSERT INTO recommended_items (book_id, reason) VALUES (?, ?)",
            (book_id, reason),
        )
        self._conn.commit()
        return "on"

    def remove_from_library(self, book_ids: Iterable[int]) -> int:
        """Remove books from the library. Returns how many were actually removed."""
        ids = list(book_ids)
        if not ids:
            return 0
        placeholders = ", ".join("?" for _ in ids)
        cursor = self._conn.execute(
            f"DELETE FROM library_items WHERE book_id IN ({placeholders})", ids
        )
        self._conn.commit()
        return cursor.rowcount

    def get_by_id(self, book_id: int) -> BookRecord | None:
        """Retrieve a book by its row ID."""
        cursor = self._conn.execute("SELECT * FROM books WHERE id = ?", (book_id,))
        row = cursor.fetchone()
        return row_to_record(row) if row else None

    def list_library(self) -> list[BookRecord]:
        """Return library books, most recently added first."""
        cursor = self._conn.execute(
            "SELECT b.* FROM books b "
            "JOIN library_items li ON b.id = li.book_id "
            "ORDER BY li.date_added DESC, li.id DESC"
        )
        return [row_to_record(row) for row in cursor.fetchall()]

    def list_recommended(self) -> list[tuple[BookRecord, str]]:
        """Return recommended books with their reasons, most recently added first."""
        cursor = self._conn.execute(
            "SELECT b.*, ri.reason AS reason FROM books b "
            "JOIN recommended_items ri ON b.id = ri.book_id "
            "ORDER BY ri.date_added DESC, ri.id DESC"
        )
        return [(row_to_record(row), row["reason"]) for row in cursor.fetchall()]
