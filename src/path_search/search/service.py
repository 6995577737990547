"""Path search service.

Owns the analyzer, the index engine and the query strategy. The index
is built once, during construction; after that the service only reads.
"""

import logging
import time
from collections.abc import Iterable
from dataclasses import dataclass
from types import TracebackType

from path_search.analysis import NGramAnalyzer
from path_search.config.schema import AnalysisConfig, PathSearchConfig, SearchConfig
from path_search.exceptions import EngineUnavailableError, SearchError
from path_search.search.documents import PATH_FIELD, PathDocument, read_paths_file
from path_search.search.engine import DuckDBIndexEngine, Hit, IndexEngine
from path_search.search.strategy import QueryStrategy, SearchMode
from path_search.utils.logging import get_logger, log_with_context

logger = get_logger(__name__)


@dataclass
class SearchHit:
    """A matching path and its relevance score."""

    path: str
    score: float


class PathSearchService:
    """Search a fixed set of file paths by substring or fuzzy match."""

    def __init__(
        self,
        paths: Iterable[str],
        *,
        engine: IndexEngine | None = None,
        analysis: AnalysisConfig | None = None,
        search: SearchConfig | None = None,
    ) -> None:
        """Build the index over ``paths``.

        Args:
            paths: Paths to index. Duplicates are indexed once.
            engine: Index engine to use. Defaults to an in-memory DuckDB engine
                (or ``search.db_path`` when set) using the n-gram analyzer.
            analysis: Gram range for the n-gram analyzer.
            search: Result limit, edit distance and fuzzy expansion settings.

        Raises:
            IndexingError: If a path is empty or the index can't be written.
        """
        analysis = analysis or AnalysisConfig()
        search = search or SearchConfig()

        self.analyzer = NGramAnalyzer(analysis.min_gram, analysis.max_gram)
        self.engine = engine or DuckDBIndexEngine(
            self.analyzer,
            db_path=search.db_path,
            max_expansions=search.max_expansions,
        )
        self.strategy = QueryStrategy(self.analyzer, max_edits=search.max_edits)
        self.top_k = search.top_k

        try:
            self.documents = [PathDocument.from_path(p) for p in dict.fromkeys(paths)]
            count = self.engine.build_index(doc.to_fields() for doc in self.documents)
        except Exception:
            # A caller-supplied engine stays open; the caller owns it.
            if engine is None:
                self.engine.close()
            raise
        log_with_context(logger, logging.INFO, f"Indexed {count} file paths", count=count)

    @classmethod
    def from_config(cls, config: PathSearchConfig) -> "PathSearchService":
        """Create a service from configuration."""
        if config.index.paths_file:
            paths = read_paths_file(config.index.paths_file)
        else:
            paths = config.index.paths
        return cls(paths, analysis=config.analysis, search=config.search)

    def search(
        self, query_text: str | None, mode: SearchMode = SearchMode.SUBSTRING
    ) -> list[str]:
        """Return matching paths, best first.

        Blank queries return an empty list.

        Raises:
            QuerySyntaxError: If substring-mode text cannot be parsed.
            EngineUnavailableError: If the index can't be read.
        """
        return [hit.path for hit in self.search_hits(query_text, mode)]

    def search_hits(
        self, query_text: str | None, mode: SearchMode = SearchMode.SUBSTRING
    ) -> list[SearchHit]:
        """Like ``search``, with each path's score."""
        query = query_text.strip() if query_text else ""
        if not query:
            return []

        mode = SearchMode(mode)
        start_time = time.perf_counter()
        try:
            request = self.strategy.build(query, mode)
            hits = self.engine.search(request, self.top_k)
            results = [SearchHit(self._stored_path(hit), hit.score) for hit in hits]
        except SearchError as e:
            log_with_context(
                logger, logging.ERROR, f"Search failed: {e}", query=query, mode=mode.value
            )
            raise

        log_with_context(
            logger,
            logging.DEBUG,
            "Search completed",
            query=query,
            mode=mode.value,
            clauses=len(request),
            hits=len(results),
            elapsed_ms=round((time.perf_counter() - start_time) * 1000, 2),
        )
        return results

    def _stored_path(self, hit: Hit) -> str:
        path = self.engine.get_stored_field(hit.doc_id, PATH_FIELD)
        if path is None:
            raise EngineUnavailableError(f"Document {hit.doc_id} has no stored path")
        return path

    def close(self) -> None:
        self.engine.close()

    def __enter__(self) -> "PathSearchService":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
