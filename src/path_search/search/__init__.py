"""Search system for path-search.

This module provides substring/abbreviation and fuzzy search over a
fixed set of file paths, and exact concatenated-text or word search
over titled documents, both backed by a DuckDB inverted index.
"""

from path_search.search.concatenated import (
    SAMPLE_DOCUMENTS,
    ConcatenatedSearchService,
    DocumentResult,
)
from path_search.search.documents import (
    CONCATENATED_FIELD,
    CONTENT_FIELD,
    FILENAME_FIELD,
    ID_FIELD,
    PATH_FIELD,
    TITLE_FIELD,
    PathDocument,
    TitledDocument,
    extract_filename,
    read_paths_file,
)
from path_search.search.engine import (
    DocumentField,
    DuckDBIndexEngine,
    FieldKind,
    Hit,
    IndexEngine,
)
from path_search.search.query import Clause, MatchKind, RetrievalRequest
from path_search.search.query_parser import QueryParser, escape
from path_search.search.service import PathSearchService, SearchHit
from path_search.search.strategy import QueryStrategy, SearchMode, split_path_components

__all__ = [
    # Service
    "PathSearchService",
    "SearchHit",
    "SearchMode",
    "ConcatenatedSearchService",
    "DocumentResult",
    "SAMPLE_DOCUMENTS",
    # Query construction
    "Clause",
    "MatchKind",
    "QueryParser",
    "QueryStrategy",
    "RetrievalRequest",
    "escape",
    "split_path_components",
    # Documents
    "CONCATENATED_FIELD",
    "CONTENT_FIELD",
    "FILENAME_FIELD",
    "ID_FIELD",
    "PATH_FIELD",
    "TITLE_FIELD",
    "PathDocument",
    "TitledDocument",
    "extract_filename",
    "read_paths_file",
    # Engine
    "DocumentField",
    "DuckDBIndexEngine",
    "FieldKind",
    "Hit",
    "IndexEngine",
]
