# ABOUTME: SQL DDL statements for the Shelfsense book store.
# ABOUTME: Defines the books table and the library / recommended link tables.

SCHEMA_V1 = """
-- Bibliographic records from any catalog provider, or entered manually
CREATE TABLE books (
    id             INTEGER PRIMARY KEY AUTOINCREMENT,
    source         TEXT NOT NULL,
    source_id      TEXT,
    title          TEXT NOT NULL,
    authors        TEXT,
    isbn13         TEXT,
    language       TEXT,
    published_year INTEGER,
    description    TEXT,
    cover_url      TEXT,
    metadata       TEXT,
    date_added     TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%f', 'now')),
    date_modified  TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%f', 'now'))
);

CREATE UNIQUE INDEX idx_books_source_id ON books(source, source_id)
    WHERE source_id IS NOT NULL;
CREATE INDEX idx_books_source_title ON books(source, title);
CREATE INDEX idx_books_isbn13 ON books(isbn13) WHERE isbn13 IS NOT NULL;

-- Books the user owns
CREATE TABLE library_items (
    id         INTEGER PRIMARY KEY AUTOINCREMENT,
    book_id    INTEGER NOT NULL UNIQUE REFERENCES books(id) ON DELETE CASCADE,
    date_added TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%f', 'now'))
);

-- Books the user kept from a recommendation run, with the model's reason
CREATE TABLE recommended_items (
    id         INTEGER PRIMARY KEY AUTOINCREMENT,
    book_id    INTEGER NOT NULL UNIQUE REFERENCES books(id) ON DELETE CASCADE,
    reason     TEXT NOT NULL DEFAULT '',
    date_added TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%f', 'now'))
);

CREATE TABLE schema_version (
    version    INTEGER NOT NULL,
    applied_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now'))
);

INSERT INTO schema_version (version) VALUES (1);
"""
