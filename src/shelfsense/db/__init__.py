# ABOUTME: Public API for the Shelfsense book store.
# ABOUTME: Exports connection management, store operations, and row mapping helpers.

from shelfsense.db.connection import open_store
from shelfsense.db.mapping import BookRecord, entry_to_row, recommendation_to_row
from shelfsense.db.store import BookNotFoundError, BookStore

__all__ = [
    "BookNotFoundError",
    "BookRecord",
    "BookStore",
    "entry_to_row",
    "open_store",
    "recommendation_to_row",
]
