"""Titled-document search over a concatenated field.

Each document is indexed with its title and content as word fields and
a ``concatenated`` field holding the whole document as one term (stop
words removed, words joined by the delimiter). A query against the
concatenated field is run through the same analyzer, so it matches
documents whose non-stop words are exactly the query's, in order.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from types import TracebackType

from path_search.analysis import ConcatenationAnalyzer, WordAnalyzer
from path_search.config.schema import AnalysisConfig, SearchConfig
from path_search.exceptions import EngineUnavailableError, SearchError
from path_search.search.documents import (
    CONCATENATED_FIELD,
    CONTENT_FIELD,
    ID_FIELD,
    TITLE_FIELD,
    TitledDocument,
)
from path_search.search.engine import DuckDBIndexEngine
from path_search.search.query_parser import QueryParser, escape
from path_search.utils.logging import get_logger, log_with_context

logger = get_logger(__name__)

SEARCHABLE_FIELDS = (CONCATENATED_FIELD, TITLE_FIELD, CONTENT_FIELD)

SAMPLE_DOCUMENTS = [
    TitledDocument(
        "1",
        "Introduction to Lucene",
        "Lucene is a powerful search library for Java applications.",
    ),
    TitledDocument(
        "2",
        "Advanced Lucene Indexing",
        "This article explains how to use custom analyzers and filters in Lucene.",
    ),
    TitledDocument(
        "3",
        "Searching with Lucene",
        "Learn how to perform efficient searches using Lucene's query parser.",
    ),
]


@dataclass
class DocumentResult:
    """A matching document and its relevance score."""

    doc_id: str
    title: str
    content: str
    concatenated: str
    score: float


class ConcatenatedSearchService:
    """Search titled documents by their concatenated text or by word."""

    def __init__(
        self,
        documents: Iterable[TitledDocument] = SAMPLE_DOCUMENTS,
        *,
        engine: DuckDBIndexEngine | None = None,
        analysis: AnalysisConfig | None = None,
        search: SearchConfig | None = None,
    ) -> None:
        """Build the index over ``documents``.

        Args:
            documents: Documents to index.
            engine: Index engine to use. Defaults to an in-memory DuckDB
                engine with word analysis for title and content and
                concatenation analysis for the concatenated field.
            analysis: Stop words and concatenation delimiter.
            search: Result limit.
        """
        analysis = analysis or AnalysisConfig()
        search = search or SearchConfig()

        self.engine = engine or DuckDBIndexEngine(
            WordAnalyzer(analysis.stop_words),
            field_analyzers={
                CONCATENATED_FIELD: ConcatenationAnalyzer(
                    analysis.stop_words, analysis.delimiter
                ),
            },
        )
        self.top_k = search.top_k

        try:
            count = self.engine.build_index(doc.to_fields() for doc in documents)
        except Exception:
            if engine is None:
                self.engine.close()
            raise
        log_with_context(logger, logging.INFO, f"Indexed {count} documents", count=count)

    def search(
        self, query_text: str | None, field: str = CONCATENATED_FIELD
    ) -> list[DocumentResult]:
        """Return documents matching ``query_text`` in ``field``, best first.

        Blank queries return an empty list.

        Raises:
            QuerySyntaxError: If the query text cannot be parsed.
            EngineUnavailableError: If the index can't be read.
        """
        query = query_text.strip() if query_text else ""
        if not query:
            return []

        parser = QueryParser(field, self.engine.analyzer_for(field), split_on_whitespace=False)
        try:
            request = parser.parse(escape(query))
            hits = self.engine.search(request, self.top_k)
            results = [
                DocumentResult(
                    doc_id=self._stored(hit.doc_id, ID_FIELD),
                    title=self._stored(hit.doc_id, TITLE_FIELD),
                    content=self._stored(hit.doc_id, CONTENT_FIELD),
                    concatenated=self._stored(hit.doc_id, CONCATENATED_FIELD),
                    score=hit.score,
                )
                for hit in hits
            ]
        except SearchError as e:
            log_with_context(
                logger, logging.ERROR, f"Search failed: {e}", query=query, field=field
            )
            raise

        log_with_context(
            logger,
            logging.DEBUG,
            "Document search completed",
            query=query,
            field=field,
            hits=len(results),
        )
        return results

    def _stored(self, doc_id: int, field_name: str) -> str:
        value = self.engine.get_stored_field(doc_id, field_name)
        if value is None:
            raise EngineUnavailableError(f"Document {doc_id} has no stored {field_name}")
        return value

    def close(self) -> None:
        self.engine.close()

    def __enter__(self) -> "ConcatenatedSearchService":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
