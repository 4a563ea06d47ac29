"""Database schema for the SQLite document store."""

SCHEMA = """
-- Documents table: one JSON body per path, overwritten whole on write
CREATE TABLE IF NOT EXISTS documents (
    path TEXT PRIMARY KEY,
    body TEXT NOT NULL,
    updated_at TEXT NOT NULL
);
"""
