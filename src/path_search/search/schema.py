"""DuckDB schema for the inverted index.

Stored field values, postings and per-field token counts live in three
tables keyed by an integer document id assigned at build time.
"""

CREATE_STORED_FIELDS_TABLE = """
    CREATE TABLE IF NOT EXISTS stored_fields (
        doc_id INTEGER NOT NULL,
        field VARCHAR NOT NULL,
        value VARCHAR NOT NULL,
        PRIMARY KEY (doc_id, field)
    )
"""

CREATE_POSTINGS_TABLE = """
    CREATE TABLE IF NOT EXISTS postings (
        field VARCHAR NOT NULL,
        term VARCHAR NOT NULL,
        doc_id INTEGER NOT NULL,
        freq INTEGER NOT NULL,
        PRIMARY KEY (field, term, doc_id)
    )
"""

CREATE_FIELD_LENGTHS_TABLE = """
    CREATE TABLE IF NOT EXISTS field_lengths (
        doc_id INTEGER NOT NULL,
        field VARCHAR NOT NULL,
        length INTEGER NOT NULL,
        PRIMARY KEY (doc_id, field)
    )
"""

ALL_TABLES = [
    CREATE_STORED_FIELDS_TABLE,
    CREATE_POSTINGS_TABLE,
    CREATE_FIELD_LENGTHS_TABLE,
]

CLEAR_ALL = [
    "DELETE FROM stored_fields",
    "DELETE FROM postings",
    "DELETE FROM field_lengths",
]

# Bulk inserts: each parameter is a whole column, unnested row-wise in one statement.
INSERT_STORED_FIELDS = """
    INSERT INTO stored_fields (doc_id, field, value)
    SELECT unnest(?::INTEGER[]), unnest(?::VARCHAR[]), unnest(?::VARCHAR[])
"""
INSERT_POSTINGS = """
    INSERT INTO postings (field, term, doc_id, freq)
    SELECT unnest(?::VARCHAR[]), unnest(?::VARCHAR[]), unnest(?::INTEGER[]), unnest(?::INTEGER[])
"""
INSERT_FIELD_LENGTHS = """
    INSERT INTO field_lengths (doc_id, field, length)
    SELECT unnest(?::INTEGER[]), unnest(?::VARCHAR[]), unnest(?::INTEGER[])
"""

SELECT_FIELD_TERMS = "SELECT DISTINCT term FROM postings WHERE field = ? ORDER BY term"
SELECT_FIELD_LENGTHS = "SELECT doc_id, length FROM field_lengths WHERE field = ?"
SELECT_STORED_FIELD = "SELECT value FROM stored_fields WHERE doc_id = ? AND field = ?"


def select_postings(term_count: int) -> str:
    """Postings lookup for ``term_count`` terms of one field."""
    placeholders = ",".join("?" for _ in range(term_count))
    return (
        "SELECT term, doc_id, freq FROM postings "
        f"WHERE field = ? AND term IN ({placeholders})"
    )
