"""Query construction.

Turns raw query text into a retrieval request for one of two modes:

- substring: the escaped text is n-grammed, and every gram becomes an
  OR'ed term clause on ``content``. Abbreviations such as "lqdocspg"
  match because each of their short substrings is a gram of its own.
- fuzzy: the lowercased text is matched with bounded edit distance
  against ``content`` and ``filename``. A query containing '/' is also
  split into path components, each fuzzily matched against both fields,
  so one misspelled component doesn't sink the whole query.
"""

from enum import Enum

from path_search.analysis import NGramAnalyzer
from path_search.search.documents import CONTENT_FIELD, FILENAME_FIELD, extract_filename
from path_search.search.query import RetrievalRequest
from path_search.search.query_parser import QueryParser, escape

DEFAULT_MAX_EDITS = 2
PATH_SEPARATOR = "/"


class SearchMode(str, Enum):
    """Search mode selection."""

    SUBSTRING = "substring"
    FUZZY = "fuzzy"

    @classmethod
    def from_flag(cls, fuzzy: bool) -> "SearchMode":
        return cls.FUZZY if fuzzy else cls.SUBSTRING


def split_path_components(text: str) -> list[str]:
    """Split on '/' and drop empty segments.

    >>> split_path_components("lqd///gif")
    ['lqd', 'gif']
    """
    return [component for component in text.split(PATH_SEPARATOR) if component]


class QueryStrategy:
    """Builds retrieval requests for substring and fuzzy search."""

    def __init__(self, analyzer: NGramAnalyzer, max_edits: int = DEFAULT_MAX_EDITS) -> None:
        self.analyzer = analyzer
        self.max_edits = max_edits
        self._parser = QueryParser(CONTENT_FIELD, analyzer)

    def build(self, query_text: str, mode: SearchMode) -> RetrievalRequest:
        if mode == SearchMode.FUZZY:
            return self.build_fuzzy_request(query_text)
        return self.build_substring_request(query_text)

    def build_substring_request(self, query_text: str) -> RetrievalRequest:
        """One term clause per distinct gram of the query, on ``content``.

        Raises:
            QuerySyntaxError: If the escaped text still fails to parse.
        """
        return self._parser.parse(escape(query_text))

    def build_fuzzy_request(self, query_text: str) -> RetrievalRequest:
        text = query_text.lower()
        request = RetrievalRequest()
        request.fuzzy(CONTENT_FIELD, text, self.max_edits)

        if PATH_SEPARATOR not in text:
            request.fuzzy(FILENAME_FIELD, text, self.max_edits)
            return request

        request.fuzzy(FILENAME_FIELD, extract_filename(text), self.max_edits)
        for component in split_path_components(text):
            request.fuzzy(CONTENT_FIELD, component, self.max_edits)
            request.fuzzy(FILENAME_FIELD, component, self.max_edits)
        return request
