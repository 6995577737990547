"""Index engine.

``IndexEngine`` is the small interface the search service needs from an
inverted index: build once, run OR-combined retrieval requests, read
stored fields back. ``DuckDBIndexEngine`` implements it on DuckDB, with
fuzzy term expansion done by rapidfuzz.
"""

import contextlib
import math
from abc import ABC, abstractmethod
from collections import Counter, defaultdict
from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

import duckdb
from rapidfuzz import process
from rapidfuzz.distance import OSA

from path_search.analysis import Analyzer
from path_search.exceptions import EngineUnavailableError, IndexingError
from path_search.search.query import Clause, MatchKind, RetrievalRequest
from path_search.search.schema import (
    ALL_TABLES,
    CLEAR_ALL,
    INSERT_FIELD_LENGTHS,
    INSERT_POSTINGS,
    INSERT_STORED_FIELDS,
    SELECT_FIELD_LENGTHS,
    SELECT_FIELD_TERMS,
    SELECT_STORED_FIELD,
    select_postings,
)


class FieldKind(str, Enum):
    """How a document field is indexed."""

    STRING = "string"  # indexed as one verbatim term
    TEXT = "text"  # run through the engine's analyzer


@dataclass(frozen=True)
class DocumentField:
    """A named value in a document."""

    name: str
    value: str
    kind: FieldKind = FieldKind.TEXT
    stored: bool = False


@dataclass(frozen=True)
class Hit:
    """A matched document and its relevance score."""

    doc_id: int
    score: float


class IndexEngine(ABC):
    """Minimal inverted-index interface."""

    @abstractmethod
    def build_index(self, documents: Iterable[Sequence[DocumentField]]) -> int:
        """Replace the index with ``documents``.

        Not safe to call while searches are running.

        Returns:
            Number of documents indexed.
        """

    @abstractmethod
    def search(self, request: RetrievalRequest, limit: int) -> list[Hit]:
        """Return up to ``limit`` hits, best first."""

    @abstractmethod
    def get_stored_field(self, doc_id: int, field_name: str) -> str | None:
        """Return a stored field value, or None if the field isn't stored."""

    @property
    @abstractmethod
    def is_built(self) -> bool:
        """Whether ``build_index`` has completed."""

    def close(self) -> None:  # noqa: B027
        """Release engine resources."""


def _bulk_insert(
    conn: duckdb.DuckDBPyConnection, sql: str, rows: Sequence[tuple[object, ...]]
) -> None:
    """Insert ``rows`` with one statement, passing each column as a list."""
    if rows:
        conn.execute(sql, [list(column) for column in zip(*rows)])


@dataclass
class _SearchContext:
    """Per-search reader state; field data is loaded at most once."""

    cursor: duckdb.DuckDBPyConnection
    terms: dict[str, list[str]] = field(default_factory=dict)
    lengths: dict[str, dict[int, int]] = field(default_factory=dict)

    def field_terms(self, field_name: str) -> list[str]:
        if field_name not in self.terms:
            rows = self.cursor.execute(SELECT_FIELD_TERMS, [field_name]).fetchall()
            self.terms[field_name] = [row[0] for row in rows]
        return self.terms[field_name]

    def field_lengths(self, field_name: str) -> dict[int, int]:
        if field_name not in self.lengths:
            rows = self.cursor.execute(SELECT_FIELD_LENGTHS, [field_name]).fetchall()
            self.lengths[field_name] = {doc_id: length for doc_id, length in rows}
        return self.lengths[field_name]


class DuckDBIndexEngine(IndexEngine):
    """Inverted index stored in DuckDB.

    Scoring is BM25-style: each matched term contributes
    ``idf * saturated term frequency``, fuzzy expansions are scaled by
    how close they are to the clause text, and clause scores add up.

    TEXT fields are analyzed with ``analyzer`` unless ``field_analyzers``
    names a different one for that field.

    Every search runs on its own cursor, so concurrent searches against
    a built index need no extra locking.
    """

    def __init__(
        self,
        analyzer: Analyzer,
        db_path: Path | str | None = None,
        *,
        field_analyzers: Mapping[str, Analyzer] | None = None,
        max_expansions: int = 50,
        k1: float = 1.2,
        b: float = 0.75,
    ) -> None:
        """Initialize the engine.

        Args:
            analyzer: Default analyzer applied to TEXT fields at index time.
            db_path: Path to a DuckDB database. None for in-memory.
            field_analyzers: Per-field analyzers that replace ``analyzer``
                for the named fields.
            max_expansions: Maximum indexed terms one fuzzy clause expands to.
            k1: BM25 term-frequency saturation.
            b: BM25 length normalization.
        """
        self.analyzer = analyzer
        self.field_analyzers = dict(field_analyzers or {})
        self.db_path = Path(db_path) if db_path else None
        self.max_expansions = max_expansions
        self.k1 = k1
        self.b = b

        self._conn: duckdb.DuckDBPyConnection | None = None
        self._built = False
        self._document_count = 0
        self._init_database()

    def _init_database(self) -> None:
        """Open the connection and create the schema."""
        try:
            if self.db_path:
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
                self._conn = duckdb.connect(str(self.db_path))
            else:
                self._conn = duckdb.connect(":memory:")
            for table_sql in ALL_TABLES:
                self._conn.execute(table_sql)
        except (duckdb.Error, OSError) as e:
            raise EngineUnavailableError(f"Failed to open index database: {e}") from e

    def _get_connection(self) -> duckdb.DuckDBPyConnection:
        if self._conn is None:
            raise EngineUnavailableError("Index database connection is closed")
        return self._conn

    @property
    def is_built(self) -> bool:
        return self._built

    @property
    def document_count(self) -> int:
        return self._document_count

    def close(self) -> None:
        """Close the database connection."""
        if self._conn:
            self._conn.close()
            self._conn = None
        self._built = False

    # -------------------------------------------------------------------------
    # Indexing
    # -------------------------------------------------------------------------

    def build_index(self, documents: Iterable[Sequence[DocumentField]]) -> int:
        conn = self._get_connection()
        self._built = False

        stored: list[tuple[int, str, str]] = []
        postings: list[tuple[str, str, int, int]] = []
        lengths: list[tuple[int, str, int]] = []

        doc_count = 0
        for doc_id, fields in enumerate(documents):
            doc_count += 1
            field_terms: dict[str, Counter[str]] = defaultdict(Counter)
            for doc_field in fields:
                if doc_field.stored:
                    stored.append((doc_id, doc_field.name, doc_field.value))
                field_terms[doc_field.name].update(self._index_terms(doc_field))

            for field_name, counts in field_terms.items():
                if not counts:
                    continue
                postings.extend(
                    (field_name, term, doc_id, freq) for term, freq in counts.items()
                )
                lengths.append((doc_id, field_name, sum(counts.values())))

        try:
            conn.begin()
            for clear_sql in CLEAR_ALL:
                conn.execute(clear_sql)
            _bulk_insert(conn, INSERT_STORED_FIELDS, stored)
            _bulk_insert(conn, INSERT_POSTINGS, postings)
            _bulk_insert(conn, INSERT_FIELD_LENGTHS, lengths)
            conn.commit()
        except duckdb.Error as e:
            with contextlib.suppress(duckdb.Error):
                conn.rollback()
            raise IndexingError(f"Failed to write index: {e}") from e

        self._document_count = doc_count
        self._built = True
        return doc_count

    def analyzer_for(self, field_name: str) -> Analyzer:
        """Analyzer used for a TEXT field."""
        return self.field_analyzers.get(field_name, self.analyzer)

    def _index_terms(self, doc_field: DocumentField) -> list[str]:
        if doc_field.kind == FieldKind.STRING:
            return [doc_field.value] if doc_field.value else []
        return self.analyzer_for(doc_field.name).analyze(doc_field.value)

    # -------------------------------------------------------------------------
    # Searching
    # -------------------------------------------------------------------------

    @contextlib.contextmanager
    def _reader(self) -> Iterator[duckdb.DuckDBPyConnection]:
        """Open a short-lived cursor, closed on every exit path."""
        if not self._built:
            raise EngineUnavailableError("Index has not been built")
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
        except duckdb.Error as e:
            raise EngineUnavailableError(f"Cannot open index reader: {e}") from e
        try:
            yield cursor
        except duckdb.Error as e:
            raise EngineUnavailableError(f"Index read failed: {e}") from e
        finally:
            cursor.close()

    def search(self, request: RetrievalRequest, limit: int) -> list[Hit]:
        with self._reader() as cursor:
            if limit <= 0 or not request.clauses:
                return []
            context = _SearchContext(cursor)
            scores: dict[int, float] = defaultdict(float)
            for clause in request:
                for doc_id, score in self._score_clause(context, clause).items():
                    scores[doc_id] += score

        ranked = sorted(scores.items(), key=lambda item: (-item[1], item[0]))
        return [Hit(doc_id=doc_id, score=score) for doc_id, score in ranked[:limit]]

    def get_stored_field(self, doc_id: int, field_name: str) -> str | None:
        with self._reader() as cursor:
            row = cursor.execute(SELECT_STORED_FIELD, [doc_id, field_name]).fetchone()
        return row[0] if row else None

    def _score_clause(self, context: _SearchContext, clause: Clause) -> dict[int, float]:
        """Score every document the clause matches."""
        boosts = self._expand(context, clause)
        if not boosts:
            return {}

        rows = context.cursor.execute(
            select_postings(len(boosts)), [clause.field, *boosts]
        ).fetchall()

        doc_freq = Counter(term for term, _, _ in rows)
        lengths = context.field_lengths(clause.field)
        avg_length = sum(lengths.values()) / len(lengths) if lengths else 1.0

        scores: dict[int, float] = defaultdict(float)
        for term, doc_id, freq in rows:
            idf = self._idf(doc_freq[term])
            norm = self.k1 * (1 - self.b + self.b * lengths.get(doc_id, 0) / avg_length)
            scores[doc_id] += boosts[term] * idf * freq * (self.k1 + 1) / (freq + norm)
        return scores

    def _idf(self, doc_freq: int) -> float:
        n = self._document_count
        return math.log(1 + (n - doc_freq + 0.5) / (doc_freq + 0.5))

    def _expand(self, context: _SearchContext, clause: Clause) -> dict[str, float]:
        """Map the clause to the indexed terms it matches, with a boost each."""
        if clause.kind == MatchKind.SUBSTRING:
            return {clause.text: 1.0}

        matches = process.extract(
            clause.text,
            context.field_terms(clause.field),
            scorer=OSA.distance,
            score_cutoff=clause.max_edits,
            limit=None,
        )

        boosts: dict[str, float] = {}
        for term, distance, _ in matches:
            shortest = min(len(clause.text), len(term))
            if distance == 0:
                boosts[term] = 1.0
            elif distance < shortest:
                boosts[term] = 1.0 - distance / shortest
            else:
                continue
            if len(boosts) >= self.max_expansions:
                break
        return boosts
