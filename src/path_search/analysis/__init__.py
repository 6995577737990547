"""Text analysis for path-search.

Analyzers turn text into the terms that reach the index engine, both at
index time and at query time.
"""

from path_search.analysis.analyzers import (
    Analyzer,
    ConcatenationAnalyzer,
    NGramAnalyzer,
    WordAnalyzer,
)
from path_search.analysis.filters import (
    ConcatenationFilter,
    LowerCaseFilter,
    StopFilter,
)
from path_search.analysis.ngram import NGramFilter, ngrams
from path_search.analysis.stopwords import ENGLISH_STOP_WORDS
from path_search.analysis.tokenizers import KeywordTokenizer, WhitespaceTokenizer
from path_search.analysis.tokens import Token, TokenStream, collect_terms

__all__ = [
    # Analyzers
    "Analyzer",
    "ConcatenationAnalyzer",
    "NGramAnalyzer",
    "WordAnalyzer",
    # Filters
    "ConcatenationFilter",
    "LowerCaseFilter",
    "NGramFilter",
    "StopFilter",
    "ngrams",
    "ENGLISH_STOP_WORDS",
    # Tokenizers
    "KeywordTokenizer",
    "WhitespaceTokenizer",
    # Tokens
    "Token",
    "TokenStream",
    "collect_terms",
]
