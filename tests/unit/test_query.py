"""Tests for query parsing and query construction."""

import pytest

from path_search.analysis import ConcatenationAnalyzer, NGramAnalyzer
from path_search.exceptions import QuerySyntaxError
from path_search.search import (
    CONTENT_FIELD,
    FILENAME_FIELD,
    Clause,
    MatchKind,
    QueryParser,
    QueryStrategy,
    RetrievalRequest,
    SearchMode,
    escape,
    split_path_components,
)
from path_search.search.query_parser import split_terms


class TestRetrievalRequest:
    """Tests for RetrievalRequest."""

    def test_builders(self) -> None:
        """Test term and fuzzy builders append clauses in order."""
        request = RetrievalRequest().term("content", "ab").fuzzy("filename", "abc", 2)
        assert list(request) == [
            Clause("content", "ab", MatchKind.SUBSTRING, 0),
            Clause("filename", "abc", MatchKind.FUZZY, 2),
        ]
        assert len(request) == 2


class TestEscape:
    """Tests for escape()."""

    def test_plain_text_unchanged(self) -> None:
        """Test text without operators is returned as is."""
        assert escape("plus.gif") == "plus.gif"

    def test_operators_escaped(self) -> None:
        """Test each operator character gets a backslash."""
        assert escape("a/b") == "a\\/b"
        assert escape("(x)") == "\\(x\\)"
        assert escape("a&&b") == "a\\&\\&b"
        assert escape("c:\\") == "c\\:\\\\"

    def test_escaped_text_round_trips(self) -> None:
        """Test escaped text parses back to the original literal."""
        raw = 'lqd///gif+[x]~"y"*?'
        assert split_terms(escape(raw)) == [raw]


class TestSplitTerms:
    """Tests for the minimal query grammar."""

    def test_whitespace_separates_terms(self) -> None:
        """Test whitespace splits terms."""
        assert split_terms("foo  bar\tbaz") == ["foo", "bar", "baz"]

    def test_escaped_whitespace_is_literal(self) -> None:
        """Test a backslash keeps a space inside the term."""
        assert split_terms("foo\\ bar") == ["foo bar"]

    def test_unescaped_operator_rejected(self) -> None:
        """Test operators are reported as syntax errors."""
        with pytest.raises(QuerySyntaxError, match="'\\+'"):
            split_terms("foo+bar")

    def test_unescaped_slash_rejected(self) -> None:
        """Test a raw path separator is rejected."""
        with pytest.raises(QuerySyntaxError):
            split_terms("lqd/gif")

    def test_dangling_escape_rejected(self) -> None:
        """Test a trailing backslash is rejected."""
        with pytest.raises(QuerySyntaxError, match="Dangling"):
            split_terms("foo\\")


class TestQueryParser:
    """Tests for QueryParser."""

    def test_one_clause_per_distinct_gram(self) -> None:
        """Test repeated grams produce a single clause."""
        parser = QueryParser(CONTENT_FIELD, NGramAnalyzer())
        request = parser.parse("aaaa")
        assert [c.text for c in request] == ["aa", "aaa", "aaaa"]
        assert all(c.field == CONTENT_FIELD for c in request)
        assert all(c.kind == MatchKind.SUBSTRING for c in request)

    def test_terms_analyzed_separately(self) -> None:
        """Test grams never span whitespace-separated terms."""
        request = QueryParser(CONTENT_FIELD, NGramAnalyzer()).parse("ab cd")
        assert [c.text for c in request] == ["ab", "cd"]

    def test_blank_text(self) -> None:
        """Test blank text yields an empty request."""
        assert len(QueryParser(CONTENT_FIELD, NGramAnalyzer()).parse("   ")) == 0

    def test_whole_text_analysis(self) -> None:
        """Test terms are analyzed together when splitting is off."""
        parser = QueryParser(
            "concatenated", ConcatenationAnalyzer(), split_on_whitespace=False
        )
        assert [c.text for c in parser.parse("the quick  brown fox")] == ["quick brown fox"]


class TestSplitPathComponents:
    """Tests for split_path_components()."""

    def test_repeated_separators_collapse(self) -> None:
        """Test empty segments from consecutive separators are dropped."""
        assert split_path_components("lqd///gif") == ["lqd", "gif"]

    def test_leading_and_trailing_separators(self) -> None:
        """Test separators at either end add no components."""
        assert split_path_components("/docs/xml/") == ["docs", "xml"]

    def test_only_separators(self) -> None:
        """Test a query made of separators has no components."""
        assert split_path_components("///") == []


class TestQueryStrategy:
    """Tests for QueryStrategy."""

    @pytest.fixture
    def strategy(self) -> QueryStrategy:
        return QueryStrategy(NGramAnalyzer(2, 10))

    def test_search_mode_from_flag(self) -> None:
        """Test the boolean flag maps to a mode."""
        assert SearchMode.from_flag(True) == SearchMode.FUZZY
        assert SearchMode.from_flag(False) == SearchMode.SUBSTRING

    def test_substring_request(self, strategy: QueryStrategy) -> None:
        """Test substring mode emits one content clause per gram."""
        request = strategy.build("Test", SearchMode.SUBSTRING)
        assert {c.text for c in request} == {"te", "es", "st", "tes", "est", "test"}
        assert all(c.field == CONTENT_FIELD for c in request)
        assert all(c.kind == MatchKind.SUBSTRING for c in request)

    def test_substring_request_treats_operators_literally(
        self, strategy: QueryStrategy
    ) -> None:
        """Test operator characters become part of the grams."""
        request = strategy.build_substring_request("lqd///gif")
        texts = {c.text for c in request}
        assert "d/" in texts
        assert "///" in texts
        assert "lqd///gif" in texts

    def test_substring_request_never_raises_on_user_text(
        self, strategy: QueryStrategy
    ) -> None:
        """Test arbitrary punctuation is escaped, not parsed."""
        request = strategy.build_substring_request('+(a) && "b" || c:\\ ~*?')
        assert len(request) > 0

    def test_fuzzy_request_without_separator(self, strategy: QueryStrategy) -> None:
        """Test a plain query adds a content and a filename clause."""
        request = strategy.build("Pluss.GIF", SearchMode.FUZZY)
        assert list(request) == [
            Clause(CONTENT_FIELD, "pluss.gif", MatchKind.FUZZY, 2),
            Clause(FILENAME_FIELD, "pluss.gif", MatchKind.FUZZY, 2),
        ]

    def test_fuzzy_request_with_path(self, strategy: QueryStrategy) -> None:
        """Test a path query adds filename and per-component clauses."""
        request = strategy.build_fuzzy_request("lqd///gif")
        assert [(c.field, c.text) for c in request] == [
            (CONTENT_FIELD, "lqd///gif"),
            (FILENAME_FIELD, "gif"),
            (CONTENT_FIELD, "lqd"),
            (FILENAME_FIELD, "lqd"),
            (CONTENT_FIELD, "gif"),
            (FILENAME_FIELD, "gif"),
        ]
        assert all(c.kind == MatchKind.FUZZY and c.max_edits == 2 for c in request)

    def test_fuzzy_request_trailing_separator(self, strategy: QueryStrategy) -> None:
        """Test an empty trailing segment uses the whole query as filename."""
        request = strategy.build_fuzzy_request("docs/")
        assert (FILENAME_FIELD, "docs/") in [(c.field, c.text) for c in request]

    def test_fuzzy_request_is_not_escaped(self, strategy: QueryStrategy) -> None:
        """Test fuzzy clause text is the raw lowercased query."""
        request = strategy.build_fuzzy_request("a+b")
        assert request.clauses[0].text == "a+b"

    def test_custom_max_edits(self) -> None:
        """Test max_edits is applied to every fuzzy clause."""
        strategy = QueryStrategy(NGramAnalyzer(), max_edits=1)
        request = strategy.build_fuzzy_request("a/b")
        assert {c.max_edits for c in request} == {1}
