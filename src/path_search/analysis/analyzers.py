"""Analyzers: reusable tokenizer and filter chains."""

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator

from path_search.analysis.filters import (
    DEFAULT_DELIMITER,
    ConcatenationFilter,
    LowerCaseFilter,
    StopFilter,
)
from path_search.analysis.ngram import DEFAULT_MAX_GRAM, DEFAULT_MIN_GRAM, NGramFilter
from path_search.analysis.tokenizers import KeywordTokenizer, WhitespaceTokenizer
from path_search.analysis.tokens import Token, TokenStream


class Analyzer(ABC):
    """Base class for analysis chains.

    Subclasses build the chain in ``_analyze``; callers use
    ``token_stream`` to get a restartable stream or ``analyze`` to get
    the resulting terms.
    """

    @abstractmethod
    def _analyze(self, text: str) -> Iterator[Token]:
        """Run the chain over ``text``."""

    def token_stream(self, text: str) -> TokenStream:
        return TokenStream(lambda: self._analyze(text))

    def analyze(self, text: str) -> list[str]:
        return self.token_stream(text).terms()


class ConcatenationAnalyzer(Analyzer):
    """Whitespace tokenizer, stop-word removal, then concatenation.

    Produces no token when nothing survives stop-word removal, otherwise
    a single token holding the surviving words joined by ``delimiter``.
    Case is preserved.

    >>> ConcatenationAnalyzer().analyze("this is a simple test of the filter")
    ['simple test filter']
    """

    def __init__(
        self,
        stop_words: Iterable[str] | None = None,
        delimiter: str | None = DEFAULT_DELIMITER,
    ) -> None:
        self._tokenizer = WhitespaceTokenizer()
        self._stop_filter = StopFilter(stop_words)
        self._concat_filter = ConcatenationFilter(delimiter)

    @property
    def delimiter(self) -> str:
        return self._concat_filter.delimiter

    @property
    def stop_words(self) -> frozenset[str]:
        return self._stop_filter.stop_words

    def _analyze(self, text: str) -> Iterator[Token]:
        return self._concat_filter(self._stop_filter(self._tokenizer(text)))


class NGramAnalyzer(Analyzer):
    """Lowercased n-grams of the whole input text.

    No stop words are removed: a gram such as "is" inside "this" has to
    stay matchable.
    """

    def __init__(self, min_gram: int = DEFAULT_MIN_GRAM, max_gram: int = DEFAULT_MAX_GRAM) -> None:
        self._tokenizer = KeywordTokenizer()
        self._lowercase = LowerCaseFilter()
        self._ngram_filter = NGramFilter(min_gram, max_gram)

    @property
    def min_gram(self) -> int:
        return self._ngram_filter.min_gram

    @property
    def max_gram(self) -> int:
        return self._ngram_filter.max_gram

    def _analyze(self, text: str) -> Iterator[Token]:
        return self._ngram_filter(self._lowercase(self._tokenizer(text)))


class WordAnalyzer(Analyzer):
    """Lowercased whitespace-separated words, stop words removed."""

    def __init__(self, stop_words: Iterable[str] | None = None) -> None:
        self._tokenizer = WhitespaceTokenizer()
        self._lowercase = LowerCaseFilter()
        self._stop_filter = StopFilter(stop_words)

    def _analyze(self, text: str) -> Iterator[Token]:
        return self._stop_filter(self._lowercase(self._tokenizer(text)))
